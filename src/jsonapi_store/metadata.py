"""
Per-type mapping information, and the process-wide registry holding it.

A :py:class:`ModelMetadata` is created for a class the first time any of its members is
declared, and is finalized by :py:meth:`ModelRegistry.declare` when the class itself is.
The registry is only mutated while classes are being defined, so reading it needs no locking.
"""

import functools
import typing
import weakref
from collections import OrderedDict

from .deferred import Deferred, resolve
from .exceptions import RegistrationError, UnregisteredTypeError
from .serde.models import AttributeValue

Transform = typing.Callable[[typing.Any], typing.Any]


class AttributeMetadata:
    property_name: str
    name: str
    """
    The name of the field on the wire.
    """
    serialize: typing.Optional[Transform]
    deserialize: typing.Optional[Transform]

    def to_wire(self, value: typing.Any) -> AttributeValue:
        return self.serialize(value) if self.serialize is not None else value

    def from_wire(self, value: AttributeValue) -> typing.Any:
        return self.deserialize(value) if self.deserialize is not None else value

    def __repr__(self) -> str:
        return f"AttributeMetadata({self.property_name!r}, name={self.name!r})"

    def __init__(
        self,
        property_name: str,
        name: typing.Optional[str] = None,
        serialize: typing.Optional[Transform] = None,
        deserialize: typing.Optional[Transform] = None,
    ):
        self.property_name = property_name
        self.name = name if name is not None else property_name
        self.serialize = serialize
        self.deserialize = deserialize


class RelationshipMetadata:
    property_name: str
    name: str
    """
    The name of the relationship on the wire.
    """
    many: bool
    _target: typing.Union[None, type, Deferred[type]]

    @property
    def target(self) -> typing.Optional[type]:
        """
        The class of the related resources, or ``None`` if any declared resource goes.
        """
        return resolve(self._target)

    def __repr__(self) -> str:
        return (
            f"RelationshipMetadata({self.property_name!r}, name={self.name!r}, many={self.many})"
        )

    def __init__(
        self,
        property_name: str,
        target: typing.Union[None, type, Deferred[type]] = None,
        name: typing.Optional[str] = None,
        many: bool = False,
    ):
        self.property_name = property_name
        self._target = target
        self.name = name if name is not None else property_name
        self.many = many


class ModelMetadata:
    """
    A :py:class:`ModelMetadata` holds the wire mapping of a resource class.

    :param Optional[str] type_name: the ``type`` of the resource on the wire.
    :param Optional[str] path: the collection path; defaults to ``type_name``.
    """

    type_name: typing.Optional[str]
    declared: bool
    _path: typing.Optional[str]
    _attributes: "OrderedDict[str, AttributeMetadata]"
    _relationships: "OrderedDict[str, RelationshipMetadata]"

    @property
    def path(self) -> typing.Optional[str]:
        return self._path if self._path else self.type_name

    @path.setter
    def path(self, value: typing.Optional[str]) -> None:
        self._path = value

    @property
    def attributes(self) -> typing.Mapping[str, AttributeMetadata]:
        """
        The mapping of property names to :py:class:`AttributeMetadata`.
        """
        return self._attributes

    @property
    def relationships(self) -> typing.Mapping[str, RelationshipMetadata]:
        """
        The mapping of property names to :py:class:`RelationshipMetadata`.
        """
        return self._relationships

    def add_attribute(self, attr: AttributeMetadata) -> None:
        self._attributes[attr.property_name] = attr

    def add_relationship(self, rel: RelationshipMetadata) -> None:
        self._relationships[rel.property_name] = rel

    def get_attribute(self, property_name: str) -> typing.Optional[AttributeMetadata]:
        return self._attributes.get(property_name)

    def get_relationship(self, property_name: str) -> typing.Optional[RelationshipMetadata]:
        return self._relationships.get(property_name)

    def merge(self, parent: "ModelMetadata", inherit_type_name: bool = True) -> None:
        """
        Seeds this metadata with the members of ``parent``, and with its type name unless
        ``inherit_type_name`` is false.  Members already present here take precedence over
        the inherited ones.  The mappings are copied, so later changes to either side stay local.
        """
        if inherit_type_name:
            self.type_name = parent.type_name
        attributes = OrderedDict(parent.attributes)
        attributes.update(self._attributes)
        self._attributes = attributes
        relationships = OrderedDict(parent.relationships)
        relationships.update(self._relationships)
        self._relationships = relationships

    def __repr__(self) -> str:
        return f"ModelMetadata(type_name={self.type_name!r}, path={self.path!r})"

    def __init__(self, type_name: typing.Optional[str] = None, path: typing.Optional[str] = None):
        self.type_name = type_name
        self.declared = False
        self._path = path
        self._attributes = OrderedDict()
        self._relationships = OrderedDict()


class ModelRegistry:
    _models: typing.Dict[type, ModelMetadata]
    _type_names: typing.Dict[str, type]

    def ensure(self, resource_class: type) -> ModelMetadata:
        """
        Returns the metadata of ``resource_class``, creating an undeclared one if needed.
        """
        metadata = self._models.get(resource_class)
        if metadata is None:
            self._models[resource_class] = metadata = ModelMetadata()
        return metadata

    def find(self, resource_class: type) -> typing.Optional[ModelMetadata]:
        metadata = self._models.get(resource_class)
        if metadata is None or not metadata.declared:
            return None
        return metadata

    def get(self, resource_class: type) -> ModelMetadata:
        metadata = self.find(resource_class)
        if metadata is None:
            raise UnregisteredTypeError(resource_class)
        return metadata

    def parent_of(self, resource_class: type) -> typing.Optional[type]:
        for base in resource_class.__mro__[1:]:
            if self.find(base) is not None:
                return base
        return None

    def lookup_type_name(self, type_name: str) -> typing.Optional[type]:
        return self._type_names.get(type_name)

    def declare(
        self,
        resource_class: type,
        type: typing.Optional[str] = None,
        path: typing.Optional[str] = None,
    ) -> ModelMetadata:
        metadata = self.ensure(resource_class)

        # nearest base first; nearer members shadow farther ones
        for base in resource_class.__mro__[1:]:
            base_metadata = self._models.get(base)
            if base_metadata is not None:
                metadata.merge(base_metadata, inherit_type_name=False)

        parent = self.parent_of(resource_class)
        if parent is not None:
            metadata.type_name = self.get(parent).type_name

        if type:
            metadata.type_name = type
        if path is not None:
            metadata.path = path

        if not metadata.type_name:
            raise RegistrationError(resource_class, "resource type not specified")

        metadata.declared = True
        self._type_names.setdefault(metadata.type_name, resource_class)
        return metadata

    def __init__(self):
        self._models = {}
        self._type_names = {}


registry = ModelRegistry()


class ResourceStates:
    """
    Tracks whether resource instances are new, keyed by identity.

    Entries hold weak references only and vanish with the instance, so any object that
    supports weak references can be tracked, hashable or not.  Untracked instances are new.
    """

    _states: typing.Dict[int, typing.Tuple[weakref.ref, bool]]

    def _forget(self, key: int, ref: weakref.ref) -> None:
        entry = self._states.get(key)
        if entry is not None and entry[0] is ref:
            del self._states[key]

    def _set(self, resource: typing.Any, new: bool) -> None:
        key = id(resource)
        entry = self._states.get(key)
        if entry is not None and entry[0]() is resource:
            self._states[key] = (entry[0], new)
        else:
            ref = weakref.ref(resource, functools.partial(self._forget, key))
            self._states[key] = (ref, new)

    def is_new(self, resource: typing.Any) -> bool:
        entry = self._states.get(id(resource))
        if entry is None or entry[0]() is not resource:
            return True
        return entry[1]

    def mark_persisted(self, resource: typing.Any) -> None:
        self._set(resource, False)

    def mark_new(self, resource: typing.Any) -> None:
        self._set(resource, True)

    def __len__(self) -> int:
        return len(self._states)

    def __init__(self):
        self._states = {}


resource_states = ResourceStates()
is_new = resource_states.is_new
mark_persisted = resource_states.mark_persisted
mark_new = resource_states.mark_new
