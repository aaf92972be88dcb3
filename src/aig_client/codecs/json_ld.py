"""Codec for the JSON-LD protocol: opaque metadata and flat verification lists."""

from collections.abc import Mapping
from typing import Any

from ..models import (
    Alias,
    AliasInput,
    Changeset,
    ChangesetVerification,
    Edge,
    OrderBy,
    ProtocolVersion,
    Resource,
    ResponseType,
    Vertex,
    VertexInput,
    VertexPage,
)
from ..rest.client import MIME_JSON, MIME_JSON_LD
from .base import WireCodec, compact, epoch_key, parse_epoch_ms, plain

_VERIFICATION_KEYS = ("epoch", "state", "failure", "changes")


class JsonLdCodec(WireCodec):
    """JSON-LD protocol.

    Metadata is an opaque JSON-LD node object under ``metadata``, timestamps
    are epoch milliseconds, verification comes back as a flat
    ``changesetsVerification`` list and the representation is negotiated
    with the Accept header (JSON-LD unless plain JSON is asked for).
    """

    version = ProtocolVersion.JSON_LD

    property_names = {
        "dateCreated": "created",
        "dateModified": "updated",
        "annotationObject": "metadata",
    }

    order_by_names = {
        OrderBy.DATE_CREATED: "created",
        OrderBy.DATE_MODIFIED: "updated",
    }

    def accept_header(self, response_type: ResponseType | None = None) -> str | None:
        if response_type == ResponseType.JSON:
            return MIME_JSON
        return MIME_JSON_LD

    # ==================== Requests ====================

    def _encode_metadata(self, value: Any) -> Any:
        return plain(value)

    def _encode_alias(self, alias: AliasInput) -> dict[str, Any]:
        return compact(
            {
                "id": alias.id,
                "format": alias.alias_format,
                "metadata": self._encode_metadata(alias.annotation_object),
            }
        )

    def _encode_vertex_input(self, vertex: VertexInput) -> dict[str, Any]:
        body: dict[str, Any] = compact(
            {
                "id": vertex.id,
                "metadata": self._encode_metadata(vertex.annotation_object),
            }
        )
        if vertex.aliases is not None:
            body["aliases"] = [self._encode_alias(alias) for alias in vertex.aliases]
        if vertex.resources is not None:
            body["resources"] = [
                compact(
                    {
                        "id": resource.id,
                        "metadata": self._encode_metadata(resource.resource_object),
                    }
                )
                for resource in vertex.resources
            ]
        if vertex.edges is not None:
            body["edges"] = [
                compact(
                    {
                        "id": edge.id,
                        "relationship": edge.edge_relationship,
                        "metadata": self._encode_metadata(edge.annotation_object),
                    }
                )
                for edge in vertex.edges
            ]
        return body

    # ==================== Responses ====================

    def _decode_metadata(self, value: Any) -> Any:
        return value

    def _unwrap_vertex(self, body: Any) -> tuple[Mapping[str, Any], Mapping[str, Any]]:
        """Split a get body into (vertex data, data holding the verification)."""
        data = self._require_object(body, "vertex")
        return data, data

    def _decode_verification(
        self, data: Mapping[str, Any]
    ) -> dict[int | str, ChangesetVerification] | None:
        entries = data.get("changesetsVerification")
        if entries is None:
            return None
        results: dict[int | str, ChangesetVerification] = {}
        for entry in entries:
            epoch = epoch_key(entry.get("epoch"))
            extra = {k: v for k, v in entry.items() if k not in _VERIFICATION_KEYS}
            results[epoch] = ChangesetVerification(
                epoch=epoch,
                failure=entry.get("failure"),
                properties=extra or None,
                changes=self._decode_changes(entry.get("changes")),
                state=entry.get("state"),
            )
        return results

    def decode_vertex(self, body: Any) -> Vertex:
        data, envelope = self._unwrap_vertex(body)

        aliases = data.get("aliases")
        resources = data.get("resources")
        edges = data.get("edges")
        changesets = data.get("changesets")

        return Vertex(
            id=data.get("id"),
            annotation_object=self._decode_metadata(data.get("metadata")),
            date_created=parse_epoch_ms(data.get("created")),
            date_modified=parse_epoch_ms(data.get("updated")),
            node_identity=data.get("nodeIdentity"),
            aliases=[self._decode_alias(a) for a in aliases] if aliases is not None else None,
            resources=(
                [self._decode_resource(r) for r in resources] if resources is not None else None
            ),
            edges=[self._decode_edge(e) for e in edges] if edges is not None else None,
            changesets=(
                [self._decode_changeset(c) for c in changesets] if changesets is not None else None
            ),
            verified=envelope.get("verified"),
            verification=self._decode_verification(envelope),
            document=dict(body),
        )

    def decode_page(self, body: Any) -> VertexPage:
        data = self._require_object(body, "vertex list")
        return VertexPage(
            vertices=[self.decode_vertex(item) for item in data.get("entities") or []],
            cursor=data.get("cursor") or None,
        )

    def _decode_alias(self, item: Mapping[str, Any]) -> Alias:
        return Alias(
            id=item.get("id"),
            alias_format=item.get("format"),
            annotation_object=self._decode_metadata(item.get("metadata")),
            date_created=parse_epoch_ms(item.get("created")),
            date_modified=parse_epoch_ms(item.get("updated")),
            date_deleted=parse_epoch_ms(item.get("deleted")),
        )

    def _decode_resource(self, item: Mapping[str, Any]) -> Resource:
        return Resource(
            id=item.get("id"),
            resource_object=self._decode_metadata(item.get("metadata")),
            date_created=parse_epoch_ms(item.get("created")),
            date_modified=parse_epoch_ms(item.get("updated")),
            date_deleted=parse_epoch_ms(item.get("deleted")),
        )

    def _decode_edge(self, item: Mapping[str, Any]) -> Edge:
        return Edge(
            id=item.get("id"),
            edge_relationship=item.get("relationship"),
            annotation_object=self._decode_metadata(item.get("metadata")),
            date_created=parse_epoch_ms(item.get("created")),
            date_modified=parse_epoch_ms(item.get("updated")),
            date_deleted=parse_epoch_ms(item.get("deleted")),
        )

    def _decode_changeset(self, item: Mapping[str, Any]) -> Changeset:
        created = item.get("created")
        return Changeset(
            epoch=epoch_key(created) if created is not None else None,
            user_identity=item.get("userIdentity"),
            hash=item.get("hash"),
            signature=item.get("signature"),
            immutable_storage_id=item.get("immutableStorageId"),
            date_created=parse_epoch_ms(created),
        )
