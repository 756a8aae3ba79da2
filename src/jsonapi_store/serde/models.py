"""
Classes in :py:mod:`jsonapi_store.serde.models` are abstract representation of the
wire document elements exchanged with the adapter.
"""

import dataclasses
import datetime
import decimal
import typing
from collections import OrderedDict

from .utils import JSONPointer

Source = typing.Union[JSONPointer, str]


class MissingType:
    def __bool__(self):
        return False

    def __repr__(self):
        return "Missing"

    def __init__(self):
        raise TypeError("Not directly instantiable")


Missing = object.__new__(MissingType)


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """

    _source_: typing.Optional[Source] = None


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` class represents a ``links`` node.  Links are carried through
    untouched; following them is up to the caller.
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None
    next: typing.Optional[str] = None
    prev: typing.Optional[str] = None
    first: typing.Optional[str] = None
    last: typing.Optional[str] = None


@dataclasses.dataclass(init=False)
class MetaContainerRepr(Repr):
    """
    :py:class:`MetaContainerRepr` is an abstract base for classes containing ``meta`` node.
    """

    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def __init__(
        self,
        *,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.meta = meta if meta is not None else {}


@dataclasses.dataclass(init=False)
class ResourceIdRepr(MetaContainerRepr):
    """
    Instances of :py:class:`ResourceIdRepr` represent resource identifiers, the
    ``{"type": ..., "id": ...}`` pairs found in relationship linkages.
    The ``id`` is absent when it points to a resource not yet persisted.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param Optional[str] id: a value for ``id`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id


@dataclasses.dataclass(init=False)
class LinkageRepr(MetaContainerRepr):
    """
    :py:class:`LinkageRepr` represents the value of one entry of a ``relationships`` node.
    ``data`` is :py:data:`Missing` when the entry only carries ``links`` or ``meta``.
    """

    data: typing.Union[
        None, MissingType, ResourceIdRepr, typing.Sequence[ResourceIdRepr]
    ] = dataclasses.field(default=Missing)
    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        data: typing.Union[None, MissingType, ResourceIdRepr, typing.Sequence[ResourceIdRepr]],
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.data = data
        self.links = links


AttributeScalar = typing.Union[
    datetime.datetime, datetime.date, decimal.Decimal, str, int, float, bytes, None
]
AttributeValue = typing.Union[
    typing.Sequence[typing.Any],
    typing.Mapping[str, typing.Any],
    AttributeScalar,
]


@dataclasses.dataclass(init=False)
class ResourceRepr(MetaContainerRepr):
    """
    :py:class:`ResourceRepr` class represents a resource object.
    """

    type: str  # type: ignore
    id: typing.Optional[str]  # type: ignore
    attributes: typing.Mapping[str, AttributeValue] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    links: typing.Optional[LinksRepr] = None

    def __getitem__(self, name):
        return self.attributes[name]

    def __init__(
        self,
        *,
        type: str,
        id: typing.Optional[str],
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        :param str type: a value for ``type`` property.
        :param str id: an optional value for ``id` property.
        :param Iterable[Tuple[str, AttributeValue]] attributes: a sequence of tuples each of which represents a key-value pair of an attribute.
        :param Iterable[Tuple[str, LinkageRepr]] relationships: a sequence of tuples each of which represent a key-value pair of a relationship.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param Optional[Dict[str. Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)
        self.links = links

    @property
    def identity(self) -> typing.Tuple[str, typing.Optional[str]]:
        return (self.type, self.id)


@dataclasses.dataclass
class SourceRepr(Repr):
    """
    :py:class:`SourceRepr` represents a value for the ``source`` property of an error object.
    """

    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None


@dataclasses.dataclass
class ErrorRepr(Repr):
    id: typing.Optional[str] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None
    links: typing.Optional[LinksRepr] = None
    meta: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(init=False)
class DocumentRepr(MetaContainerRepr):
    """
    :py:class:`DocumentRepr` represents a top-level wire document.

    ``data`` is :py:data:`Missing` when the document carries no ``data`` member at all,
    which is distinct from ``"data": null``.
    """

    data: typing.Union[
        ResourceRepr, typing.Sequence[ResourceRepr], None, MissingType
    ] = dataclasses.field(default=Missing)
    included: typing.Sequence[ResourceRepr] = ()
    errors: typing.Sequence[ErrorRepr] = ()
    links: typing.Optional[LinksRepr] = None

    @property
    def is_collection(self) -> bool:
        return isinstance(self.data, (list, tuple))

    def resources(self) -> typing.Iterator[ResourceRepr]:
        """
        Iterates over every resource object in the document, top-level ``data`` first
        and ``included`` next.
        """
        if isinstance(self.data, ResourceRepr):
            yield self.data
        elif self.is_collection:
            yield from typing.cast(typing.Sequence[ResourceRepr], self.data)
        yield from self.included

    def __init__(
        self,
        *,
        data: typing.Union[
            ResourceRepr, typing.Sequence[ResourceRepr], None, MissingType
        ] = Missing,
        included: typing.Sequence[ResourceRepr] = (),
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[typing.Dict[str, typing.Any]] = None,
        _source_: typing.Optional[Source] = None,
    ):
        """
        Either errors, meta, or data must take a non-None value.

        :param Union[ResourceRepr, Sequence[ResourceRepr], None] data: the primary data.
        :param Sequence[ResourceRepr] included: a sequence of :py:class:`ResourceRepr`.
        :param Optional[Sequence[ErrorRepr]] errors: a sequence of :py:class:`ErrorRepr`.
        :param Optional[LinksRepr] links: a value for ``links`` property.
        :param Optional[Dict[str, Any]] meta: a dictionary containing user-defined information.
        :param Union[JSONPointer, str, None] _source_: an object that describes the source of the node.
        """
        if data is Missing and errors is None and meta is None:
            raise ValueError("either data, errors, or meta must be specified")
        super().__init__(meta=meta, _source_=_source_)
        self.data = data
        self.included = included
        self.errors = errors or ()
        self.links = links
