"""
Maps JSON:API-style wire documents onto instances of declared Python classes, and drives
reads and writes of them through a pluggable transport adapter.
"""

from .adapter import ErrorResponse, Options, StoreAdapter  # noqa: F401
from .declarative import Attribute, Relationship, Resource, model  # noqa: F401
from .deferred import Deferred  # noqa: F401
from .exceptions import (  # noqa: F401
    DeserializationError,
    JSONAPIStoreException,
    RegistrationError,
    StoreError,
    UnregisteredTypeError,
    ValidationError,
)
from .metadata import (  # noqa: F401
    AttributeMetadata,
    ModelMetadata,
    ModelRegistry,
    RelationshipMetadata,
    is_new,
    mark_new,
    mark_persisted,
    registry,
)
from .models import TypedDocument  # noqa: F401
from .serializer import DocumentSerializer  # noqa: F401
from .store import Store  # noqa: F401
