"""Client for auditable item graph services."""

from .codecs import get_codec
from .component import AuditableItemGraphComponent
from .config import ClientConfig
from .errors import AigClientError, GuardError, NotFoundError, NotSupportedError, RestClientError
from .graph import AuditableItemGraphClient
from .models import (
    Alias,
    AliasInput,
    Change,
    Changeset,
    ChangesetVerification,
    Edge,
    EdgeInput,
    IdMode,
    OrderBy,
    Property,
    ProtocolVersion,
    QueryOptions,
    Resource,
    ResourceInput,
    ResponseType,
    SortDirection,
    VerificationState,
    VerifyDepth,
    Vertex,
    VertexInput,
    VertexPage,
)

__version__ = "0.1.0"

__all__ = [
    "AigClientError",
    "Alias",
    "AliasInput",
    "AuditableItemGraphClient",
    "AuditableItemGraphComponent",
    "Change",
    "Changeset",
    "ChangesetVerification",
    "ClientConfig",
    "Edge",
    "EdgeInput",
    "GuardError",
    "IdMode",
    "NotFoundError",
    "NotSupportedError",
    "OrderBy",
    "Property",
    "ProtocolVersion",
    "QueryOptions",
    "Resource",
    "ResourceInput",
    "ResponseType",
    "RestClientError",
    "SortDirection",
    "VerificationState",
    "VerifyDepth",
    "Vertex",
    "VertexInput",
    "VertexPage",
    "get_codec",
]
