"""
:py:mod:`jsonapi_store.serde.renderer` module contains a set of classes in charge of rendering
the internal representation of a wire document to JSON-compatible values.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_store.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   internal_repr = DocumentRepr(
       data=ResourceRepr(
           type="articles",
           id="1",
           attributes=[
               ("title", "Hi"),
           ],
           relationships=[
               (
                   "author",
                   LinkageRepr(data=ResourceIdRepr(type="people", id="9")),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(internal_repr)))

"""

import base64
import collections.abc
import datetime
import decimal
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    DocumentRepr,
    LinkageRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
)
from .types import JSONValue, MutableJSONObject
from .utils import JSONPointer


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


class ReprRendererContext:
    path: JSONPointer

    def __truediv__(self, component: str) -> "ReprRendererContext":
        return ReprRendererContext(self.path / component)

    def __getitem__(self, index: int) -> "ReprRendererContext":
        return ReprRendererContext(self.path[index])

    def __init__(self, path: typing.Optional[JSONPointer] = None):
        self.path = JSONPointer() if path is None else path


class ReprRenderer:
    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(
        self: "ReprRenderer", ctx: ReprRendererContext, repr_: AttributeValue
    ) -> JSONValue:
        _repr = typing.cast(datetime.datetime, repr_)
        if _repr.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                raise ValueError(f"{ctx.path}: naive datetime {_repr}")
            else:
                if hasattr(self._assume_naive_timezone_as, "localize"):
                    _repr = typing.cast(TZLocalizer, self._assume_naive_timezone_as).localize(_repr)
                else:
                    _repr = _repr.replace(tzinfo=self._assume_naive_timezone_as)
        return _repr.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(
        self: "ReprRenderer", ctx: ReprRendererContext, repr_: AttributeValue
    ) -> JSONValue:
        _repr = typing.cast(datetime.date, repr_)
        return _repr.isoformat()

    def _render_decimal(
        self: "ReprRenderer", ctx: ReprRendererContext, repr_: AttributeValue
    ) -> JSONValue:
        _repr = typing.cast(decimal.Decimal, repr_)
        return str(_repr) if self._render_decimal_as_str else float(_repr)

    def _render_bytes(
        self: "ReprRenderer", ctx: ReprRendererContext, repr_: AttributeValue
    ) -> JSONValue:
        return base64.b64encode(typing.cast(bytes, repr_)).decode("ascii")

    def _render_passthrough(
        self: "ReprRenderer", ctx: ReprRendererContext, repr_: AttributeValue
    ) -> JSONValue:
        return typing.cast(JSONValue, repr_)

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        str: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        bool: _render_passthrough,
        None.__class__: _render_passthrough,
    }

    def _render_value(self, ctx: ReprRendererContext, repr_: typing.Any) -> JSONValue:
        # fast pass
        r = self._supported_types.get(type(repr_))
        if r is not None:
            return r(self, ctx, repr_)

        for type_, r in self._supported_types.items():
            if isinstance(repr_, type_):
                return r(self, ctx, repr_)

        if isinstance(repr_, collections.abc.Mapping):
            return self._dict_factory((k, self._render_value(ctx / k, v)) for k, v in repr_.items())
        elif isinstance(repr_, collections.abc.Sequence):
            return [self._render_value(ctx[i], v) for i, v in enumerate(repr_)]

        raise TypeError(f"{ctx.path}: unsupported type {repr_!r}")

    def _render_relationship(
        self, ctx: ReprRendererContext, repr_: LinkageRepr
    ) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceIdRepr):
            retval["data"] = self.render_resource_id(ctx / "data", repr_.data)
        elif repr_.data is not Missing:
            retval["data"] = [
                self.render_resource_id((ctx / "data")[i], item)
                for i, item in enumerate(typing.cast(typing.Sequence[ResourceIdRepr], repr_.data))
            ]
        return retval

    def render_resource_id(
        self, ctx: ReprRendererContext, repr_: ResourceIdRepr
    ) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        return retval

    def render_resource(self, ctx: ReprRendererContext, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        if repr_.attributes:
            new_ctx = ctx / "attributes"
            retval["attributes"] = self._dict_factory(
                (k, self._render_value(new_ctx / k, v)) for k, v in repr_.attributes.items()
            )
        if repr_.relationships:
            new_ctx = ctx / "relationships"
            retval["relationships"] = self._dict_factory(
                (k, self._render_relationship(new_ctx / k, v))
                for k, v in repr_.relationships.items()
            )
        return retval

    def _render_document(self, ctx: ReprRendererContext, repr_: DocumentRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceRepr):
            retval["data"] = self.render_resource(ctx / "data", repr_.data)
        elif repr_.data is not Missing:
            retval["data"] = [
                self.render_resource((ctx / "data")[i], item)
                for i, item in enumerate(typing.cast(typing.Sequence[ResourceRepr], repr_.data))
            ]
        return retval

    def __call__(self, repr_: DocumentRepr) -> MutableJSONObject:
        return self._render_document(ReprRendererContext(), repr_)

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
