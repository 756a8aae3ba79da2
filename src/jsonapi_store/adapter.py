"""
This module defines the contract of the transport adapter a :py:class:`Store` talks through.

An adapter issues one request per call and either returns the wire document it received,
raises :py:class:`ErrorResponse` with the wire error document it received, or raises any
other exception when no document could be obtained.  ``remove`` and ``remove_all`` may
return ``None`` when the server answered without content.  Retrying, caching, and following
pagination links are all up to the adapter.
"""

import abc
import dataclasses
import typing

from .metadata import ModelRegistry, registry
from .serde.types import JSONObject, ResourceIdentifier
from .utils import assert_not_none

Params = typing.Mapping[str, typing.Any]


@dataclasses.dataclass
class Options:
    path: typing.Optional[str] = None
    """
    Overrides the collection path of the resource type for a single call.
    """


class ErrorResponse(Exception):
    """
    Raised by an adapter when the server answered with an error document.
    """

    document: JSONObject
    status: typing.Optional[int]

    def __init__(self, document: JSONObject, status: typing.Optional[int] = None):
        super().__init__(document, status)
        self.document = document
        self.status = status


class StoreAdapter(metaclass=abc.ABCMeta):
    registry: ModelRegistry = registry

    def resolve_path(self, resource_type: type, options: typing.Optional[Options] = None) -> str:
        """
        Returns the collection path to use for ``resource_type``: the one given in
        ``options`` if any, otherwise the one it was declared with.
        """
        if options is not None and options.path:
            return options.path
        return assert_not_none(self.registry.get(resource_type).path)

    @abc.abstractmethod
    async def get(
        self,
        resource_type: type,
        id: str,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> JSONObject:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def get_list(
        self,
        resource_type: type,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> JSONObject:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def create(
        self,
        resource_type: type,
        payload: JSONObject,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> JSONObject:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def update(
        self,
        resource_type: type,
        id: str,
        payload: JSONObject,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> JSONObject:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def update_all(
        self,
        resource_type: type,
        payload: JSONObject,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> JSONObject:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def remove(
        self,
        resource_type: type,
        id: str,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> typing.Optional[JSONObject]:
        ...  # pragma: nocover

    @abc.abstractmethod
    async def remove_all(
        self,
        resource_type: type,
        ids: typing.Sequence[ResourceIdentifier],
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> typing.Optional[JSONObject]:
        ...  # pragma: nocover
