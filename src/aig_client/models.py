"""Domain types for auditable item graph vertices."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class VerifyDepth(str, Enum):
    """How many changeset signatures the server checks before responding."""

    NONE = "none"
    CURRENT = "current"
    ALL = "all"


class IdMode(str, Enum):
    """Where an id filter is matched: vertex ids, aliases, or both."""

    ID = "id"
    ALIAS = "alias"
    BOTH = "both"


class OrderBy(str, Enum):
    DATE_CREATED = "dateCreated"
    DATE_MODIFIED = "dateModified"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class ResponseType(str, Enum):
    """Representation requested from the server."""

    JSON = "json"
    JSON_LD = "jsonld"


class VerificationState(str, Enum):
    """State reported for a flat verification entry."""

    OK = "ok"
    HASH_MISMATCH = "hashMismatch"
    SIGNATURE_NOT_VERIFIED = "signatureNotVerified"
    CREDENTIAL_REVOKED = "credentialRevoked"
    IMMUTABLE_HASH_MISMATCH = "immutableHashMismatch"
    IMMUTABLE_SIGNATURE_MISMATCH = "immutableSignatureMismatch"
    INTEGRITY_DATA_MISMATCH = "integrityDataMismatch"


class ProtocolVersion(str, Enum):
    """Wire protocol shapes spoken by auditable item graph services.

    PROPERTIES: metadata as a list of typed properties.
    JSON_LD: opaque metadata, flat verification list, Accept negotiation.
    ANNOTATION: annotationObject naming, per-epoch verification, item lists.
    """

    PROPERTIES = "properties"
    JSON_LD = "json-ld"
    ANNOTATION = "annotation"


# Opaque, order-preserving annotation payload
Annotation = Mapping[str, Any]


@dataclass
class Property:
    """Typed metadata entry used by the properties protocol."""

    key: str
    type: str
    value: Any = None


@dataclass
class AliasInput:
    id: str
    alias_format: str | None = None
    annotation_object: Annotation | None = None


@dataclass
class ResourceInput:
    id: str | None = None
    resource_object: Annotation | None = None


@dataclass
class EdgeInput:
    id: str
    edge_relationship: str
    annotation_object: Annotation | None = None


@dataclass
class VertexInput:
    """Payload for creating or updating a vertex.

    A collection left as None is omitted from the request and left unchanged
    by the server; an empty list replaces the collection with nothing.
    """

    id: str | None = None
    annotation_object: Annotation | list[Property] | None = None
    aliases: list[AliasInput] | None = None
    resources: list[ResourceInput] | None = None
    edges: list[EdgeInput] | None = None


@dataclass
class QueryOptions:
    """Exact-match filter for vertex queries."""

    id: str | None = None
    id_mode: IdMode | None = None
    resource_types: list[str] | None = None


@dataclass
class Alias:
    id: str
    alias_format: str | None = None
    annotation_object: Any = None
    date_created: datetime | None = None
    date_modified: datetime | None = None
    date_deleted: datetime | None = None


@dataclass
class Resource:
    id: str | None = None
    resource_object: Any = None
    date_created: datetime | None = None
    date_modified: datetime | None = None
    date_deleted: datetime | None = None


@dataclass
class Edge:
    id: str
    edge_relationship: str | None = None
    annotation_object: Any = None
    date_created: datetime | None = None
    date_modified: datetime | None = None
    date_deleted: datetime | None = None


@dataclass
class Change:
    """Single change recorded against a vertex element."""

    item_type: str
    operation: str
    properties: dict[str, Any] = field(default_factory=dict)
    parent_id: str | None = None


@dataclass
class Changeset:
    """Immutable audit record of one mutation, keyed by its epoch."""

    epoch: int | str | None
    user_identity: str | None = None
    hash: str | None = None
    signature: str | None = None
    immutable_storage_id: str | None = None
    date_created: datetime | None = None


@dataclass
class ChangesetVerification:
    """Server verification result for one changeset epoch."""

    epoch: int | str | None
    failure: str | None = None
    properties: dict[str, Any] | None = None
    changes: list[Change] = field(default_factory=list)
    state: str | None = None

    @property
    def failed(self) -> bool:
        """Check whether the server flagged this changeset."""
        if self.failure:
            return True
        return self.state is not None and self.state != VerificationState.OK.value


@dataclass
class Vertex:
    """Vertex as returned by the service.

    ``document`` keeps the decoded response body untouched.
    """

    id: str | None = None
    annotation_object: Any = None
    date_created: datetime | None = None
    date_modified: datetime | None = None
    node_identity: str | None = None
    aliases: list[Alias] | None = None
    resources: list[Resource] | None = None
    edges: list[Edge] | None = None
    changesets: list[Changeset] | None = None
    verified: bool | None = None
    verification: dict[int | str, ChangesetVerification] | None = None
    document: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def failed_epochs(self) -> list[int | str]:
        """Epochs whose verification failed."""
        if not self.verification:
            return []
        return [epoch for epoch, result in self.verification.items() if result.failed]


@dataclass
class VertexPage:
    """One page of query results."""

    vertices: list[Vertex] = field(default_factory=list)
    cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.cursor)
