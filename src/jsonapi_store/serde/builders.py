import abc
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    DocumentRepr,
    LinkageRepr,
    Missing,
    MissingType,
    Repr,
    ResourceIdRepr,
    ResourceRepr,
)


class ReprBuilder(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover


class LinkageReprBuilder(ReprBuilder, metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def __call__(self) -> LinkageRepr:
        ...  # pragma: nocover


class ResourceIdReprBuilder(ReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None

    def set_type(self, type: str):
        self.type = type

    def set_id(self, id: typing.Optional[str]):
        self.id = id

    def __call__(self) -> ResourceIdRepr:
        assert self.type is not None
        return ResourceIdRepr(type=self.type, id=self.id)


class ToManyRelReprBuilder(LinkageReprBuilder):
    data: typing.List[ResourceIdReprBuilder]

    def next(self) -> ResourceIdReprBuilder:
        builder = ResourceIdReprBuilder()
        self.data.append(builder)
        return builder

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(data=tuple(b() for b in self.data))

    def __init__(self):
        self.data = []


class ToOneRelReprBuilder(LinkageReprBuilder):
    data: typing.Optional[ResourceIdReprBuilder]

    def set(self) -> ResourceIdReprBuilder:
        self.data = builder = ResourceIdReprBuilder()
        return builder

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(data=self.data() if self.data is not None else None)

    def __init__(self):
        self.data = None


class ResourceReprBuilder(ReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None
    attributes: "OrderedDict[str, typing.Any]"
    relationships: "OrderedDict[str, LinkageReprBuilder]"

    def set_type(self, type: str):
        self.type = type

    def set_id(self, id: typing.Optional[str]):
        self.id = id

    def add_attribute(self, name: str, value: AttributeValue):
        self.attributes[name] = value

    def next_to_many_relationship(self, name: str) -> ToManyRelReprBuilder:
        self.relationships[name] = builder = ToManyRelReprBuilder()
        return builder

    def next_to_one_relationship(self, name: str) -> ToOneRelReprBuilder:
        self.relationships[name] = builder = ToOneRelReprBuilder()
        return builder

    def __call__(self) -> ResourceRepr:
        assert self.type is not None
        return ResourceRepr(
            type=self.type,
            id=self.id,
            attributes=tuple((k, v) for k, v in self.attributes.items()),
            relationships=tuple((k, v()) for k, v in self.relationships.items()),
        )

    def __init__(self):
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(ReprBuilder):
    """
    Builds a payload :py:class:`DocumentRepr` whose primary data is either a single resource
    (:py:meth:`set`) or a collection of them (:py:meth:`next`).
    """

    data: typing.Union[MissingType, ResourceReprBuilder, typing.List[ResourceReprBuilder]]

    def set(self) -> ResourceReprBuilder:
        self.data = builder = ResourceReprBuilder()
        return builder

    def next(self) -> ResourceReprBuilder:
        if not isinstance(self.data, list):
            self.data = []
        builder = ResourceReprBuilder()
        self.data.append(builder)
        return builder

    def __call__(self) -> DocumentRepr:
        data: typing.Union[MissingType, ResourceRepr, typing.Sequence[ResourceRepr]]
        if isinstance(self.data, ResourceReprBuilder):
            data = self.data()
        elif isinstance(self.data, list):
            data = tuple(b() for b in self.data)
        else:
            data = self.data
        return DocumentRepr(data=data)

    def __init__(self, collection: bool = False):
        self.data = [] if collection else Missing
