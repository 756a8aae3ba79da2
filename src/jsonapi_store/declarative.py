"""
The declarative surface: a class decorator and two descriptors that describe how a class
maps onto wire resources.

.. code-block:: python

   @model(type="people")
   class Person(Resource):
       name = Attribute()

   @model(type="articles", path="blog/articles")
   class Article(Resource):
       title = Attribute()
       published_at = Attribute(name="published-at", deserialize=parse_datetime)
       author = Relationship(Person)
       comments = Relationship(Deferred(lambda: Comment), many=True)

Member descriptors register themselves while the class body is being turned into a class,
which happens before :py:func:`model` runs, so the decorator always sees every member.
"""

import abc
import reprlib
import typing

from .deferred import Deferred
from .metadata import (
    AttributeMetadata,
    ModelMetadata,
    ModelRegistry,
    RelationshipMetadata,
    Transform,
    registry,
)

T = typing.TypeVar("T", bound=type)


def model(
    type: typing.Optional[str] = None,
    path: typing.Optional[str] = None,
    *,
    registry: ModelRegistry = registry,
) -> typing.Callable[[T], T]:
    """
    Declares the decorated class as a resource type.

    :param Optional[str] type: the ``type`` on the wire; inherited from the nearest
        declared base class when omitted.
    :param Optional[str] path: the collection path; defaults to the type.
    :raises RegistrationError: if no type is given nor inherited.
    """

    def decorator(cls: T) -> T:
        registry.declare(cls, type=type, path=path)
        return cls

    return decorator


class Member(metaclass=abc.ABCMeta):
    """
    Base of the member descriptors.  Values live in the instance ``__dict__`` under the
    property name; an unset member reads as ``None``.
    """

    property_name: str
    registry: ModelRegistry

    @abc.abstractmethod
    def register(self, metadata: ModelMetadata) -> None:
        ...  # pragma: nocover

    def __set_name__(self, owner: type, name: str) -> None:
        self.property_name = name
        self.register(self.registry.ensure(owner))

    def __get__(self, instance: typing.Any, owner: typing.Optional[type] = None) -> typing.Any:
        if instance is None:
            return self
        return vars(instance).get(self.property_name)

    def __set__(self, instance: typing.Any, value: typing.Any) -> None:
        vars(instance)[self.property_name] = value

    def __delete__(self, instance: typing.Any) -> None:
        vars(instance).pop(self.property_name, None)

    def __init__(self, registry: ModelRegistry = registry):
        self.registry = registry


class Attribute(Member):
    """
    Declares an attribute.

    :param Optional[str] name: the field name on the wire; defaults to the property name.
    :param Optional[Callable] serialize: applied to the value on its way to the wire.
    :param Optional[Callable] deserialize: applied to the value on its way from the wire.
    """

    name: typing.Optional[str]
    serialize: typing.Optional[Transform]
    deserialize: typing.Optional[Transform]

    def register(self, metadata: ModelMetadata) -> None:
        metadata.add_attribute(
            AttributeMetadata(
                self.property_name,
                name=self.name,
                serialize=self.serialize,
                deserialize=self.deserialize,
            )
        )

    def __init__(
        self,
        name: typing.Optional[str] = None,
        serialize: typing.Optional[Transform] = None,
        deserialize: typing.Optional[Transform] = None,
        *,
        registry: ModelRegistry = registry,
    ):
        super().__init__(registry)
        self.name = name
        self.serialize = serialize
        self.deserialize = deserialize


class Relationship(Member):
    """
    Declares a relationship.

    :param target: the related class, or a :py:class:`Deferred` yielding it.
        ``None`` accepts any declared resource.
    :param Optional[str] name: the relationship name on the wire; defaults to the property name.
    :param bool many: whether this is a to-many relationship.
    """

    target: typing.Union[None, type, Deferred[type]]
    name: typing.Optional[str]
    many: bool

    def register(self, metadata: ModelMetadata) -> None:
        metadata.add_relationship(
            RelationshipMetadata(
                self.property_name,
                target=self.target,
                name=self.name,
                many=self.many,
            )
        )

    def __init__(
        self,
        target: typing.Union[None, type, Deferred[type]] = None,
        name: typing.Optional[str] = None,
        many: bool = False,
        *,
        registry: ModelRegistry = registry,
    ):
        super().__init__(registry)
        self.target = target
        self.name = name
        self.many = many


class Resource:
    """
    A convenience base class for resources.  Declared members can be given as keyword
    arguments.  Instances built this way are new until they are saved.
    """

    id: typing.Optional[str] = None

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        members = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if k != "id")
        return f"{type(self).__name__}(id={self.id!r}{', ' if members else ''}{members})"

    def __init__(self, id: typing.Optional[str] = None, **kwargs: typing.Any):
        self.id = id
        for k, v in kwargs.items():
            if not isinstance(getattr(type(self), k, None), Member):
                raise TypeError(f"{type(self).__name__} has no declared member {k!r}")
            setattr(self, k, v)
