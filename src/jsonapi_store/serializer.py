import collections.abc
import typing

from .exceptions import DeserializationError, DeserializationErrorItem
from .metadata import (
    ModelRegistry,
    RelationshipMetadata,
    is_new,
    mark_persisted,
    registry,
)
from .models import TypedDocument
from .serde.builders import DocumentBuilder, ResourceIdReprBuilder, ResourceReprBuilder
from .serde.deserializer import ReprDeserializer
from .serde.models import Missing, ResourceIdRepr, ResourceRepr
from .serde.renderer import ReprRenderer, ReprRendererContext
from .serde.types import JSONObject, JSONValue, ResourceIdentifier
from .serde.utils import JSONPointer
from .utils import assert_not_none


def _is_many(value: typing.Any) -> bool:
    return isinstance(value, collections.abc.Iterable) and not isinstance(
        value, (str, bytes, collections.abc.Mapping)
    )


class IdentityMap:
    """
    Resolves resource objects of a single document to instances, one instance per
    ``(type, id)``.  Instances are allocated for every resource object first
    (:py:meth:`materialize`) and populated afterwards (:py:meth:`populate`), so that
    relationships can point anywhere in the document, including back to where they came from.

    When the same resource object occurs more than once, its occurrences are applied in
    document order and later values win.
    """

    resource_class: type
    type_name: str
    registry: ModelRegistry
    errors: typing.List[DeserializationErrorItem]
    _slots: typing.Dict[typing.Any, typing.Tuple[typing.Any, typing.List[ResourceRepr]]]

    def _error(self, source: typing.Any, message: str) -> None:
        pointer = source if isinstance(source, JSONPointer) else JSONPointer()
        self.errors.append(DeserializationErrorItem(pointer, message))

    def class_for(self, type_name: str) -> typing.Optional[type]:
        if type_name == self.type_name:
            return self.resource_class
        return self.registry.lookup_type_name(type_name)

    def materialize(self, repr_: ResourceRepr) -> typing.Any:
        key: typing.Any = repr_.identity if repr_.id is not None else object()
        slot = self._slots.get(key)
        if slot is not None:
            slot[1].append(repr_)
            return slot[0]

        cls = self.class_for(repr_.type)
        if cls is None:
            self._error(repr_._source_, f'unknown resource type "{repr_.type}"')
            return None
        instance = cls.__new__(cls)
        self._slots[key] = (instance, [repr_])
        return instance

    def resolve(self, rel: RelationshipMetadata, id_repr: ResourceIdRepr) -> typing.Any:
        slot = self._slots.get((id_repr.type, id_repr.id))
        if slot is None:
            self._error(
                id_repr._source_,
                f'relationship "{rel.name}" refers to {id_repr.type}/{id_repr.id}, '
                "which is not in the document",
            )
            return None
        instance = slot[0]
        target = rel.target
        if target is not None and not isinstance(instance, target):
            self._error(
                id_repr._source_,
                f'relationship "{rel.name}" expects {target.__qualname__}, '
                f"got {type(instance).__qualname__}",
            )
            return None
        return instance

    def _populate_one(self, instance: typing.Any, repr_: ResourceRepr) -> None:
        metadata = self.registry.get(type(instance))
        setattr(instance, "id", repr_.id)

        for attr in metadata.attributes.values():
            if attr.name in repr_.attributes:
                setattr(instance, attr.property_name, attr.from_wire(repr_.attributes[attr.name]))

        for rel in metadata.relationships.values():
            linkage = repr_.relationships.get(rel.name)
            if linkage is None or linkage.data is Missing:
                continue
            value: typing.Any
            if linkage.data is None:
                value = [] if rel.many else None
            elif isinstance(linkage.data, ResourceIdRepr) == rel.many:
                expected = "an array" if rel.many else "an object or null"
                self._error(
                    linkage._source_, f'relationship "{rel.name}" expects {expected} as its data'
                )
                continue
            elif isinstance(linkage.data, ResourceIdRepr):
                value = self.resolve(rel, linkage.data)
            else:
                value = [
                    self.resolve(rel, id_repr)
                    for id_repr in typing.cast(typing.Sequence[ResourceIdRepr], linkage.data)
                ]
            setattr(instance, rel.property_name, value)

    def populate(self) -> None:
        for instance, reprs in self._slots.values():
            for repr_ in reprs:
                self._populate_one(instance, repr_)

    def instances(self) -> typing.Iterator[typing.Any]:
        for instance, _ in self._slots.values():
            yield instance

    def __init__(self, resource_class: type, registry: ModelRegistry):
        self.resource_class = resource_class
        self.type_name = assert_not_none(registry.get(resource_class).type_name)
        self.registry = registry
        self.errors = []
        self._slots = {}


class DocumentSerializer:
    """
    :py:class:`DocumentSerializer` converts instances of declared resource classes to wire
    documents and back.  It holds no per-call state and can be shared freely.

    :param Optional[ReprRenderer] renderer: renders outgoing documents; configure it to
        change how attribute values such as datetimes or decimals are written.
    """

    _registry: ModelRegistry
    _renderer: ReprRenderer
    _deserializer: ReprDeserializer

    def _build_resource_id(self, builder: ResourceIdReprBuilder, resource: typing.Any) -> None:
        metadata = self._registry.get(type(resource))
        builder.set_type(assert_not_none(metadata.type_name))
        builder.set_id(getattr(resource, "id", None))

    def _build_resource(self, builder: ResourceReprBuilder, resource: typing.Any) -> None:
        metadata = self._registry.get(type(resource))
        builder.set_type(assert_not_none(metadata.type_name))
        if not is_new(resource):
            builder.set_id(getattr(resource, "id", None))

        values = vars(resource)
        for attr in metadata.attributes.values():
            if attr.property_name in values:
                builder.add_attribute(attr.name, attr.to_wire(values[attr.property_name]))

        for rel in metadata.relationships.values():
            value = values.get(rel.property_name)
            if value is None:
                continue
            if _is_many(value):
                related = list(value)
                if not related:
                    continue
                to_many = builder.next_to_many_relationship(rel.name)
                for item in related:
                    self._build_resource_id(to_many.next(), item)
            else:
                self._build_resource_id(builder.next_to_one_relationship(rel.name).set(), value)

    def serialize(
        self, resources: typing.Union[typing.Any, typing.Sequence[typing.Any]]
    ) -> JSONObject:
        """
        Builds the payload document for creating or updating ``resources``.
        Related resources are written as identifiers only.

        :raises UnregisteredTypeError: if a resource, or a related one, is of an undeclared class.
        """
        if isinstance(resources, collections.abc.Sequence):
            builder = DocumentBuilder(collection=True)
            for resource in resources:
                self._build_resource(builder.next(), resource)
        else:
            builder = DocumentBuilder()
            self._build_resource(builder.set(), resources)
        return self._renderer(builder())

    def serialize_as_id(
        self, resources: typing.Union[typing.Any, typing.Sequence[typing.Any]]
    ) -> typing.Union[ResourceIdentifier, typing.List[ResourceIdentifier]]:
        ctx = ReprRendererContext()

        def render(resource: typing.Any) -> ResourceIdentifier:
            builder = ResourceIdReprBuilder()
            self._build_resource_id(builder, resource)
            return typing.cast(
                ResourceIdentifier, self._renderer.render_resource_id(ctx, builder())
            )

        if isinstance(resources, collections.abc.Sequence):
            return [render(resource) for resource in resources]
        return render(resources)

    def deserialize(self, document: JSONValue, resource_class: type) -> TypedDocument:
        """
        Turns a wire document into a :py:class:`TypedDocument` holding instances.

        A document with ``errors`` yields those errors and nothing else.

        :raises DeserializationError: if the document is malformed, mentions an unknown
            resource type, or has a relationship pointing outside of it.
        :raises UnregisteredTypeError: if ``resource_class`` is not declared.
        """
        repr_ = self._deserializer(document)
        if repr_.errors:
            return TypedDocument(
                errors=list(repr_.errors),
                meta=dict(repr_.meta),
                links=repr_.links,
            )

        identity_map = IdentityMap(resource_class, self._registry)

        data: typing.Any = None
        if isinstance(repr_.data, ResourceRepr):
            data = identity_map.materialize(repr_.data)
        elif repr_.data is not None and repr_.data is not Missing:
            data = [identity_map.materialize(r) for r in repr_.data]
        included = [identity_map.materialize(r) for r in repr_.included]

        if not identity_map.errors:
            identity_map.populate()
        if identity_map.errors:
            raise DeserializationError(document, identity_map.errors)

        for instance in identity_map.instances():
            mark_persisted(instance)

        seen: typing.Set[int] = set()
        unique_included: typing.List[typing.Any] = []
        for instance in included:
            if id(instance) not in seen:
                seen.add(id(instance))
                unique_included.append(instance)

        return TypedDocument(
            data=data,
            included=unique_included,
            meta=dict(repr_.meta),
            links=repr_.links,
        )

    def __init__(
        self,
        renderer: typing.Optional[ReprRenderer] = None,
        registry: ModelRegistry = registry,
    ):
        self._registry = registry
        self._renderer = renderer if renderer is not None else ReprRenderer()
        self._deserializer = ReprDeserializer()
