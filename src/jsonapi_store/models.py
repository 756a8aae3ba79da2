import dataclasses
import typing

from .serde.models import ErrorRepr, LinksRepr

T = typing.TypeVar("T")


@dataclasses.dataclass(init=False)
class TypedDocument(typing.Generic[T]):
    """
    A :py:class:`TypedDocument` is what every store operation yields: the wire document
    with its resource objects replaced by instances of the declared classes.

    On failure ``errors`` is populated and ``data`` is ``None``; the other way around
    otherwise.
    """

    data: typing.Union[None, T, typing.List[T]] = None
    included: typing.List[typing.Any] = dataclasses.field(default_factory=list)
    errors: typing.List[ErrorRepr] = dataclasses.field(default_factory=list)
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    links: typing.Optional[LinksRepr] = None

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TypedDocument[T]":
        message = getattr(exc, "message", None)
        if not isinstance(message, str):
            message = str(exc) or type(exc).__name__
        return cls(errors=[ErrorRepr(title=message)])

    def __init__(
        self,
        data: typing.Union[None, T, typing.List[T]] = None,
        included: typing.Optional[typing.List[typing.Any]] = None,
        errors: typing.Optional[typing.List[ErrorRepr]] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
    ):
        self.data = data
        self.included = included if included is not None else []
        self.errors = errors if errors is not None else []
        self.meta = meta if meta is not None else {}
        self.links = links
