"""Common base for wire codecs.

A codec owns everything that differs between protocol versions: field names
in request bodies, query parameter names, content negotiation and the shape
of response bodies. The graph client itself only deals in domain types.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone
from typing import Any

from ..errors import GuardError, NotSupportedError, RestClientError
from ..models import (
    Change,
    ChangesetVerification,
    OrderBy,
    ProtocolVersion,
    QueryOptions,
    ResponseType,
    SortDirection,
    Vertex,
    VertexInput,
    VertexPage,
    VerifyDepth,
)
from ..rest.parameters import array_from_string, array_to_string, object_from_string

# Vertex body collections whose entries are compacted when sent as mappings
COLLECTION_KEYS = ("aliases", "resources", "edges")


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a mapping without its None values, keeping key order."""
    return {key: value for key, value in values.items() if value is not None}


def parse_iso(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp, as sent by the annotation protocol."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return parse_epoch_ms(value)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def parse_epoch_ms(value: Any) -> datetime | None:
    """Parse milliseconds since the epoch, as sent by the older protocols."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_iso(value)
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def epoch_key(value: Any) -> int | str:
    """Normalize an epoch to milliseconds since the epoch.

    Epochs arrive as JSON object keys, numbers or ISO-8601 creation
    timestamps. Text that is neither is returned unchanged.
    """
    if isinstance(value, int):
        return value
    text = str(value)
    if text.isdigit():
        return int(text)
    try:
        created = parse_iso(text)
    except ValueError:
        return text
    return round(created.timestamp() * 1000)


def plain(value: Any) -> Any:
    """Turn annotation payloads into JSON-ready values.

    Mappings keep their key order, dataclasses become dicts.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {key: plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain(item) for item in value]
    return value


class WireCodec(ABC):
    """Encodes requests and decodes responses for one protocol version."""

    version: ProtocolVersion

    # Domain projection names mapped to this protocol's field names
    property_names: Mapping[str, str] = {}

    # Wire values for OrderBy members
    order_by_names: Mapping[OrderBy, str] = {
        OrderBy.DATE_CREATED: OrderBy.DATE_CREATED.value,
        OrderBy.DATE_MODIFIED: OrderBy.DATE_MODIFIED.value,
    }

    supports_conditions = False

    @property
    def source(self) -> str:
        return type(self).__name__

    # ==================== Requests ====================

    @abstractmethod
    def accept_header(self, response_type: ResponseType | None = None) -> str | None:
        """Accept header for get and query, or None to use the executor default."""

    def encode_vertex(self, vertex: VertexInput | Mapping[str, Any]) -> dict[str, Any]:
        """Build a create/update body.

        Mappings are taken as already being in wire shape and are sent as
        given, minus their None values and those of each alias, resource
        and edge entry. Annotation payloads inside entries are left as is.
        """
        if isinstance(vertex, Mapping):
            body = {key: plain(value) for key, value in compact(vertex).items()}
            for key in COLLECTION_KEYS:
                if isinstance(body.get(key), list):
                    body[key] = [
                        compact(item) if isinstance(item, Mapping) else item
                        for item in body[key]
                    ]
            return body
        if isinstance(vertex, VertexInput):
            return self._encode_vertex_input(vertex)
        raise GuardError(
            self.source,
            "vertex",
            vertex,
            message=f"{self.source}: 'vertex' must be a VertexInput or a mapping",
        )

    @abstractmethod
    def _encode_vertex_input(self, vertex: VertexInput) -> dict[str, Any]:
        """Encode a VertexInput; None fields omitted, empty lists kept."""

    def encode_get_query(
        self,
        include_deleted: bool | None = None,
        include_changesets: bool | None = None,
        verify_signature_depth: VerifyDepth | None = None,
    ) -> dict[str, Any]:
        """Query parameters for get; only the options actually supplied."""
        return compact(
            {
                "includeDeleted": include_deleted,
                "includeChangesets": include_changesets,
                "verifySignatureDepth": (
                    verify_signature_depth.value if verify_signature_depth is not None else None
                ),
            }
        )

    def encode_query(
        self,
        options: QueryOptions | None = None,
        conditions: Any = None,
        order_by: OrderBy | None = None,
        order_by_direction: SortDirection | None = None,
        properties: Sequence[str] | None = None,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Query parameters for a vertex list request.

        Raises:
            NotSupportedError: If conditions are given and this protocol
                cannot carry them
        """
        if conditions is not None and not self.supports_conditions:
            raise NotSupportedError(
                self.source,
                "conditions",
                message=f"{self.source}: query conditions are not supported by the "
                f"'{self.version.value}' protocol",
            )

        query = self._encode_id_filter(options)
        if conditions is not None:
            query["conditions"] = self._encode_conditions(conditions)
        if order_by is not None:
            query["orderBy"] = self.order_by_names[order_by]
        if order_by_direction is not None:
            query["orderByDirection"] = order_by_direction.value
        if properties is not None:
            query["properties"] = array_to_string(
                self.property_names.get(name, name) for name in properties
            )
        if cursor is not None:
            query["cursor"] = cursor
        if page_size is not None:
            query["pageSize"] = page_size
        return query

    def _encode_id_filter(self, options: QueryOptions | None) -> dict[str, Any]:
        if options is None:
            return {}
        return compact(
            {
                "id": options.id,
                "idMode": options.id_mode.value if options.id_mode is not None else None,
            }
        )

    def _encode_conditions(self, conditions: Any) -> str:
        raise NotSupportedError(self.source, "conditions")

    # ==================== Responses ====================

    @abstractmethod
    def decode_vertex(self, body: Any) -> Vertex:
        """Decode a get response body."""

    @abstractmethod
    def decode_page(self, body: Any) -> VertexPage:
        """Decode a query response body."""

    def decode_properties(self, value: str | None) -> list[str] | None:
        """Inverse of the projection encoding, in this protocol's names."""
        return array_from_string(value)

    def decode_conditions(self, value: str | None) -> Any:
        """Inverse of the conditions encoding."""
        return object_from_string(value)

    def _decode_changes(self, items: Any) -> list[Change]:
        changes = []
        for item in items or []:
            changes.append(
                Change(
                    item_type=item.get("itemType"),
                    operation=item.get("operation"),
                    properties=dict(item.get("properties") or {}),
                    parent_id=item.get("parentId"),
                )
            )
        return changes

    def _decode_epoch_verification(
        self, verification: Any
    ) -> dict[int | str, ChangesetVerification] | None:
        """Decode verification results keyed by epoch."""
        if verification is None:
            return None
        results: dict[int | str, ChangesetVerification] = {}
        for key, entry in verification.items():
            epoch = epoch_key(key)
            entry = entry or {}
            results[epoch] = ChangesetVerification(
                epoch=epoch,
                failure=entry.get("failure"),
                properties=entry.get("properties"),
                changes=self._decode_changes(entry.get("changes")),
                state=entry.get("state"),
            )
        return results

    def _require_object(self, body: Any, name: str) -> Mapping[str, Any]:
        if not isinstance(body, Mapping):
            raise RestClientError(
                self.source,
                f"{self.source}: expected a JSON object for {name}",
                details=body,
            )
        return body
