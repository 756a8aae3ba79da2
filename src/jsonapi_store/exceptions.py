import abc
import typing

from .serde.exceptions import DeserializationError, DeserializationErrorItem  # noqa: F401


class JSONAPIStoreException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class RegistrationError(JSONAPIStoreException):
    """
    Raised at class-definition time when a resource class cannot be declared.
    """

    resource_class: type
    _message: str

    @property
    def message(self) -> str:
        return f"{self._message} ({self.resource_class.__qualname__})"

    def __init__(self, resource_class: type, message: str):
        super().__init__(resource_class, message)
        self.resource_class = resource_class
        self._message = message


class UnregisteredTypeError(JSONAPIStoreException):
    resource_class: type

    @property
    def message(self) -> str:
        return f"{self.resource_class.__qualname__} is not a declared resource type"

    def __init__(self, resource_class: type):
        super().__init__(resource_class)
        self.resource_class = resource_class


class ValidationError(JSONAPIStoreException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class StoreError(JSONAPIStoreException):
    """
    The single failure outcome of a :py:class:`jsonapi_store.store.Store` operation.
    Whatever went wrong, ``document`` is a :py:class:`TypedDocument` whose ``errors`` is
    populated and whose ``data`` is ``None``.
    """

    document: "models.TypedDocument"

    @property
    def errors(self) -> typing.Sequence["serde_models.ErrorRepr"]:
        return self.document.errors

    @property
    def message(self) -> str:
        titles = [e.title or e.detail or e.code or "unknown error" for e in self.document.errors]
        return "; ".join(titles) if titles else "request failed"

    def __init__(self, document: "models.TypedDocument"):
        super().__init__(document)
        self.document = document


if typing.TYPE_CHECKING:
    from . import models  # noqa: E402
    from .serde import models as serde_models  # noqa: E402
