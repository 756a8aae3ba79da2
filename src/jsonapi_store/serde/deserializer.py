import collections.abc
import typing

from .exceptions import DeserializationError, DeserializationErrorItem
from .models import (
    DocumentRepr,
    ErrorRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    MissingType,
    ResourceIdRepr,
    ResourceRepr,
    SourceRepr,
)
from .types import JSONObject, JSONValue
from .utils import JSONPointer


def _type_repr(value: JSONValue) -> str:
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, collections.abc.Mapping):
        return "object"
    elif isinstance(value, collections.abc.Sequence):
        return "array"
    else:
        return type(value).__name__


class ErrorCollectingContext:
    errors: typing.List[DeserializationErrorItem]

    def validation_error_occurred(self, pointer: JSONPointer, message: str) -> None:
        self.errors.append(DeserializationErrorItem(pointer, message))

    def __init__(self):
        self.errors = []


class ReprDeserializer:
    """
    :py:class:`ReprDeserializer` turns a JSON object into a :py:class:`DocumentRepr`.

    Every structural problem found is recorded along with a pointer to its location, and
    all of them are reported at once through a single :py:class:`DeserializationError`.
    """

    LINK_KEYS: typing.ClassVar[typing.Mapping[str, str]] = {
        "self": "self_",
        "related": "related",
        "next": "next",
        "prev": "prev",
        "first": "first",
        "last": "last",
    }

    def _expect_object(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[JSONObject]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.validation_error_occurred(
                pointer, f"value has type {_type_repr(value)} where object expected"
            )
            return None
        return value

    def _expect_array(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[typing.Sequence[typing.Any]]:
        if isinstance(value, (str, bytes)) or not isinstance(value, collections.abc.Sequence):
            ctx.validation_error_occurred(
                pointer, f"value has type {_type_repr(value)} where array expected"
            )
            return None
        return value

    def _optional_string(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[str]:
        if value is None or isinstance(value, str):
            return value
        ctx.validation_error_occurred(
            pointer, f"value has type {_type_repr(value)} where string expected"
        )
        return None

    def _required_string(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, parent: JSONObject, key: str
    ) -> typing.Optional[str]:
        if key not in parent:
            ctx.validation_error_occurred(pointer, f'value must have a property "{key}"')
            return None
        value = parent[key]
        if not isinstance(value, str) or not value:
            ctx.validation_error_occurred(
                pointer / key, f"value has type {_type_repr(value)} where non-empty string expected"
            )
            return None
        return value

    def _meta(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, parent: JSONObject
    ) -> typing.Optional[typing.Dict[str, typing.Any]]:
        if "meta" not in parent:
            return None
        meta = self._expect_object(ctx, pointer / "meta", parent["meta"])
        return dict(meta) if meta is not None else None

    def _links(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, parent: JSONObject
    ) -> typing.Optional[LinksRepr]:
        if "links" not in parent:
            return None
        _pointer = pointer / "links"
        links = self._expect_object(ctx, _pointer, parent["links"])
        if links is None:
            return None
        values: typing.Dict[str, typing.Optional[str]] = {}
        for k, v in links.items():
            field = self.LINK_KEYS.get(k)
            if field is None:
                continue
            if isinstance(v, collections.abc.Mapping):
                # link object
                v = v.get("href")
            values[field] = self._optional_string(ctx, _pointer / k, v)
        return LinksRepr(_source_=_pointer, **values)

    def _resource_id(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ResourceIdRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        type_ = self._required_string(ctx, pointer, obj, "type")
        id_ = self._required_string(ctx, pointer, obj, "id")
        if type_ is None or id_ is None:
            return None
        return ResourceIdRepr(
            type=type_, id=id_, meta=self._meta(ctx, pointer, obj), _source_=pointer
        )

    def _linkage(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[LinkageRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        data: typing.Union[
            None, MissingType, ResourceIdRepr, typing.Sequence[ResourceIdRepr]
        ] = Missing
        if "data" in obj:
            _pointer = pointer / "data"
            raw = obj["data"]
            if raw is None:
                data = None
            elif isinstance(raw, collections.abc.Mapping):
                data = self._resource_id(ctx, _pointer, raw)
            else:
                items = self._expect_array(ctx, _pointer, raw)
                if items is not None:
                    data = [
                        id_repr
                        for id_repr in (
                            self._resource_id(ctx, _pointer[i], item)
                            for i, item in enumerate(items)
                        )
                        if id_repr is not None
                    ]
        return LinkageRepr(
            data=data,
            links=self._links(ctx, pointer, obj),
            meta=self._meta(ctx, pointer, obj),
            _source_=pointer,
        )

    def _resource(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ResourceRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        type_ = self._required_string(ctx, pointer, obj, "type")
        id_ = self._optional_string(ctx, pointer / "id", obj.get("id"))

        attributes: typing.Mapping[str, typing.Any] = {}
        if "attributes" in obj:
            attributes = self._expect_object(ctx, pointer / "attributes", obj["attributes"]) or {}

        relationships: typing.List[typing.Tuple[str, LinkageRepr]] = []
        if "relationships" in obj:
            _pointer = pointer / "relationships"
            rels = self._expect_object(ctx, _pointer, obj["relationships"]) or {}
            for k, v in rels.items():
                linkage = self._linkage(ctx, _pointer / k, v)
                if linkage is not None:
                    relationships.append((k, linkage))

        if type_ is None:
            return None
        return ResourceRepr(
            type=type_,
            id=id_,
            attributes=attributes.items(),
            relationships=relationships,
            links=self._links(ctx, pointer, obj),
            meta=self._meta(ctx, pointer, obj),
            _source_=pointer,
        )

    def _error(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ErrorRepr]:
        obj = self._expect_object(ctx, pointer, value)
        if obj is None:
            return None
        fields: typing.Dict[str, typing.Optional[str]] = {}
        for k in ("id", "status", "code", "title", "detail"):
            v = obj.get(k)
            if isinstance(v, int) and not isinstance(v, bool):
                # servers are known to send numeric statuses
                v = str(v)
            fields[k] = self._optional_string(ctx, pointer / k, v)
        source: typing.Optional[SourceRepr] = None
        if "source" in obj:
            _pointer = pointer / "source"
            source_obj = self._expect_object(ctx, _pointer, obj["source"])
            if source_obj is not None:
                source = SourceRepr(
                    pointer=self._optional_string(
                        ctx, _pointer / "pointer", source_obj.get("pointer")
                    ),
                    parameter=self._optional_string(
                        ctx, _pointer / "parameter", source_obj.get("parameter")
                    ),
                    _source_=_pointer,
                )
        return ErrorRepr(
            source=source,
            links=self._links(ctx, pointer, obj),
            meta=self._meta(ctx, pointer, obj) or {},
            _source_=pointer,
            **fields,
        )

    def _resources(
        self, ctx: ErrorCollectingContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.List[ResourceRepr]:
        items = self._expect_array(ctx, pointer, value)
        if items is None:
            return []
        return [
            r
            for r in (self._resource(ctx, pointer[i], item) for i, item in enumerate(items))
            if r is not None
        ]

    def _document(self, ctx: ErrorCollectingContext, document: JSONValue) -> DocumentRepr:
        pointer = JSONPointer()
        obj = self._expect_object(ctx, pointer, document)
        if obj is None:
            return DocumentRepr(data=None)

        errors: typing.Optional[typing.List[ErrorRepr]] = None
        if "errors" in obj:
            _pointer = pointer / "errors"
            items = self._expect_array(ctx, _pointer, obj["errors"]) or []
            errors = [
                e
                for e in (self._error(ctx, _pointer[i], item) for i, item in enumerate(items))
                if e is not None
            ]

        data: typing.Union[ResourceRepr, typing.Sequence[ResourceRepr], None, MissingType] = Missing
        if "data" in obj:
            raw = obj["data"]
            if raw is None or isinstance(raw, collections.abc.Mapping):
                data = self._resource(ctx, pointer / "data", raw) if raw is not None else None
            else:
                data = self._resources(ctx, pointer / "data", raw)

        included: typing.Sequence[ResourceRepr] = ()
        if "included" in obj:
            included = self._resources(ctx, pointer / "included", obj["included"])

        meta = self._meta(ctx, pointer, obj)
        if data is Missing and errors is None and meta is None:
            ctx.validation_error_occurred(
                pointer, 'document must have at least one of "data", "errors", or "meta"'
            )
            return DocumentRepr(data=None)

        return DocumentRepr(
            data=data,
            included=included,
            errors=errors,
            links=self._links(ctx, pointer, obj),
            meta=meta,
            _source_=pointer,
        )

    def __call__(self, document: JSONValue) -> DocumentRepr:
        ctx = ErrorCollectingContext()
        retval = self._document(ctx, document)
        if ctx.errors:
            raise DeserializationError(document, ctx.errors)
        return retval
