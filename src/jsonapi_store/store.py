import collections.abc
import functools
import logging
import typing
import uuid

from .adapter import ErrorResponse, Options, Params, StoreAdapter
from .exceptions import StoreError, ValidationError
from .metadata import is_new
from .models import TypedDocument
from .serde.models import ErrorRepr
from .serde.types import JSONObject
from .serializer import DocumentSerializer

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")

Request = typing.Callable[[], typing.Awaitable[typing.Optional[JSONObject]]]


class Store:
    """
    :py:class:`Store` performs reads and writes of declared resources through a
    :py:class:`StoreAdapter`.

    Every operation is a coroutine: nothing happens until it is awaited, and then exactly
    one request is issued.  It either returns a :py:class:`TypedDocument` or raises a
    :py:class:`StoreError` whose ``document`` describes what went wrong, be it a rejected
    input, an error document sent by the server, a failed transport, or a response that
    could not be understood.

    .. code-block:: python

       store = Store(MyHTTPAdapter(base_url))
       try:
           doc = await store.get(Article, "42")
       except StoreError as e:
           for error in e.document.errors:
               ...
    """

    adapter: StoreAdapter
    serializer: DocumentSerializer

    async def get(
        self,
        resource_type: typing.Type[T],
        id: str,
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> TypedDocument[T]:
        logger.debug("get %s/%s", resource_type.__qualname__, id)
        return await self._perform_request(
            functools.partial(self.adapter.get, resource_type, id, params, options), resource_type
        )

    async def get_list(
        self,
        resource_type: typing.Type[T],
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> TypedDocument[T]:
        logger.debug("get_list %s", resource_type.__qualname__)
        return await self._perform_request(
            functools.partial(self.adapter.get_list, resource_type, params, options), resource_type
        )

    async def save(
        self,
        resources: typing.Union[T, typing.Sequence[T]],
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> TypedDocument[T]:
        """
        Creates ``resources`` if they are new, updates them otherwise.  A sequence must
        consist of either new resources only or persisted resources only.
        """
        try:
            resource_type = self._get_resource_type(resources)
            new = self._is_new_resources(resources)
        except ValidationError as e:
            raise self._validation_failure(e) from e

        payload = self.serializer.serialize(resources)

        request: Request
        if new:
            logger.debug("create %s", resource_type.__qualname__)
            request = functools.partial(
                self.adapter.create, resource_type, payload, params, options
            )
        elif isinstance(resources, collections.abc.Sequence):
            logger.debug("update_all %s (%d)", resource_type.__qualname__, len(resources))
            request = functools.partial(
                self.adapter.update_all, resource_type, payload, params, options
            )
        else:
            id = getattr(resources, "id")
            logger.debug("update %s/%s", resource_type.__qualname__, id)
            request = functools.partial(
                self.adapter.update, resource_type, id, payload, params, options
            )

        return await self._perform_request(request, resource_type)

    async def remove(
        self,
        resources: typing.Union[T, typing.Sequence[T]],
        params: typing.Optional[Params] = None,
        options: typing.Optional[Options] = None,
    ) -> TypedDocument[T]:
        """
        Removes a single resource by its id, or a sequence of resources in one request
        carrying their identifiers.
        """
        try:
            resource_type = self._get_resource_type(resources)
        except ValidationError as e:
            raise self._validation_failure(e) from e

        request: Request
        if isinstance(resources, collections.abc.Sequence):
            ids = typing.cast(typing.List[typing.Any], self.serializer.serialize_as_id(resources))
            logger.debug("remove_all %s (%d)", resource_type.__qualname__, len(ids))
            request = functools.partial(
                self.adapter.remove_all, resource_type, ids, params, options
            )
        else:
            id = getattr(resources, "id")
            logger.debug("remove %s/%s", resource_type.__qualname__, id)
            request = functools.partial(self.adapter.remove, resource_type, id, params, options)

        return await self._perform_request(request, resource_type)

    async def _perform_request(self, request: Request, resource_type: type) -> TypedDocument:
        try:
            payload = await request()
        except ErrorResponse as e:
            logger.debug("error document received for %s", resource_type.__qualname__)
            raise StoreError(self._parse_error_document(e, resource_type)) from e
        except Exception as e:
            logger.debug("request for %s failed: %s", resource_type.__qualname__, e)
            raise StoreError(TypedDocument.from_exception(e)) from e

        if payload is None:
            return TypedDocument()

        try:
            document = self.serializer.deserialize(payload, resource_type)
        except Exception as e:
            logger.debug("response for %s not understood: %s", resource_type.__qualname__, e)
            raise StoreError(TypedDocument.from_exception(e)) from e

        if document.errors:
            raise StoreError(document)
        return document

    def _parse_error_document(self, response: ErrorResponse, resource_type: type) -> TypedDocument:
        try:
            document = self.serializer.deserialize(response.document, resource_type)
        except Exception as e:
            return TypedDocument.from_exception(e)
        if not document.errors:
            status = str(response.status) if response.status is not None else None
            return TypedDocument(
                errors=[ErrorRepr(status=status, title="request failed")],
                meta=document.meta,
            )
        return document

    def _validation_failure(self, e: ValidationError) -> StoreError:
        return StoreError(
            TypedDocument(errors=[ErrorRepr(id=str(uuid.uuid4()), status="400", title=e.message)])
        )

    def _get_resource_type(self, resources: typing.Any) -> type:
        if isinstance(resources, collections.abc.Sequence):
            if not resources:
                raise ValidationError("no resources given")
            return type(resources[0])
        return type(resources)

    def _is_new_resources(self, resources: typing.Any) -> bool:
        if not isinstance(resources, collections.abc.Sequence):
            return is_new(resources)

        states = {is_new(resource) for resource in resources}
        if len(states) > 1:
            raise ValidationError("new and persisted resources cannot be saved at the same time")
        return states.pop()

    def __init__(
        self, adapter: StoreAdapter, serializer: typing.Optional[DocumentSerializer] = None
    ):
        self.adapter = adapter
        self.serializer = serializer if serializer is not None else DocumentSerializer()
