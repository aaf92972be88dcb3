"""Codec for the current protocol: annotation objects and item lists."""

from typing import Any

from ..models import (
    Alias,
    Changeset,
    Edge,
    ProtocolVersion,
    QueryOptions,
    Resource,
    ResponseType,
    Vertex,
    VertexInput,
    VertexPage,
)
from ..rest.client import MIME_JSON_LD
from ..rest.parameters import array_to_string, object_to_string
from .base import WireCodec, compact, epoch_key, parse_iso, plain

# schema.org ItemList keys used by list responses
ITEM_LIST_ELEMENT = "itemListElement"
NEXT_ITEM = "nextItem"


class AnnotationCodec(WireCodec):
    """Current protocol.

    Vertices carry an ``annotationObject``, timestamps are ISO-8601 strings,
    verification results are nested per epoch in the vertex itself and list
    responses are schema.org ItemLists. The server always answers in JSON-LD.
    """

    version = ProtocolVersion.ANNOTATION
    supports_conditions = True

    def accept_header(self, response_type: ResponseType | None = None) -> str | None:
        return MIME_JSON_LD

    def _encode_vertex_input(self, vertex: VertexInput) -> dict[str, Any]:
        body: dict[str, Any] = compact(
            {
                "id": vertex.id,
                "annotationObject": plain(vertex.annotation_object),
            }
        )
        if vertex.aliases is not None:
            body["aliases"] = [
                compact(
                    {
                        "id": alias.id,
                        "aliasFormat": alias.alias_format,
                        "annotationObject": plain(alias.annotation_object),
                    }
                )
                for alias in vertex.aliases
            ]
        if vertex.resources is not None:
            body["resources"] = [
                compact(
                    {
                        "id": resource.id,
                        "resourceObject": plain(resource.resource_object),
                    }
                )
                for resource in vertex.resources
            ]
        if vertex.edges is not None:
            body["edges"] = [
                compact(
                    {
                        "id": edge.id,
                        "edgeRelationship": edge.edge_relationship,
                        "annotationObject": plain(edge.annotation_object),
                    }
                )
                for edge in vertex.edges
            ]
        return body

    def _encode_id_filter(self, options: QueryOptions | None) -> dict[str, Any]:
        query = super()._encode_id_filter(options)
        if options is not None and options.resource_types is not None:
            query["resourceTypes"] = array_to_string(options.resource_types)
        return query

    def _encode_conditions(self, conditions: Any) -> str:
        return object_to_string(plain(conditions))

    def decode_vertex(self, body: Any) -> Vertex:
        data = self._require_object(body, "vertex")

        aliases = data.get("aliases")
        resources = data.get("resources")
        edges = data.get("edges")
        changesets = data.get("changesets")

        return Vertex(
            id=data.get("id"),
            annotation_object=data.get("annotationObject"),
            date_created=parse_iso(data.get("dateCreated")),
            date_modified=parse_iso(data.get("dateModified")),
            node_identity=data.get("nodeIdentity"),
            aliases=[self._decode_alias(a) for a in aliases] if aliases is not None else None,
            resources=(
                [self._decode_resource(r) for r in resources] if resources is not None else None
            ),
            edges=[self._decode_edge(e) for e in edges] if edges is not None else None,
            changesets=(
                [self._decode_changeset(c) for c in changesets] if changesets is not None else None
            ),
            verified=data.get("verified"),
            verification=self._decode_epoch_verification(data.get("verification")),
            document=dict(data),
        )

    def decode_page(self, body: Any) -> VertexPage:
        data = self._require_object(body, "vertex list")

        if ITEM_LIST_ELEMENT in data:
            items, cursor = data.get(ITEM_LIST_ELEMENT), data.get(NEXT_ITEM)
        elif "vertices" in data:
            items, cursor = data.get("vertices"), data.get("cursor")
        else:
            items, cursor = data.get("entities"), data.get("cursor")

        return VertexPage(
            vertices=[self.decode_vertex(item) for item in items or []],
            cursor=cursor or None,
        )

    def _decode_alias(self, item: dict[str, Any]) -> Alias:
        return Alias(
            id=item.get("id"),
            alias_format=item.get("aliasFormat"),
            annotation_object=item.get("annotationObject"),
            date_created=parse_iso(item.get("dateCreated")),
            date_modified=parse_iso(item.get("dateModified")),
            date_deleted=parse_iso(item.get("dateDeleted")),
        )

    def _decode_resource(self, item: dict[str, Any]) -> Resource:
        return Resource(
            id=item.get("id"),
            resource_object=item.get("resourceObject"),
            date_created=parse_iso(item.get("dateCreated")),
            date_modified=parse_iso(item.get("dateModified")),
            date_deleted=parse_iso(item.get("dateDeleted")),
        )

    def _decode_edge(self, item: dict[str, Any]) -> Edge:
        return Edge(
            id=item.get("id"),
            edge_relationship=item.get("edgeRelationship"),
            annotation_object=item.get("annotationObject"),
            date_created=parse_iso(item.get("dateCreated")),
            date_modified=parse_iso(item.get("dateModified")),
            date_deleted=parse_iso(item.get("dateDeleted")),
        )

    def _decode_changeset(self, item: dict[str, Any]) -> Changeset:
        epoch = item.get("epoch", item.get("dateCreated"))
        return Changeset(
            epoch=epoch_key(epoch) if epoch is not None else None,
            user_identity=item.get("userIdentity"),
            hash=item.get("hash"),
            signature=item.get("signature"),
            immutable_storage_id=item.get("immutableStorageId"),
            date_created=parse_iso(item.get("dateCreated")),
        )
