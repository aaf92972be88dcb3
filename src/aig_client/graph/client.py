"""REST client for auditable item graph services."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from .. import guards
from ..codecs import WireCodec, get_codec
from ..component import AuditableItemGraphComponent
from ..config import ClientConfig
from ..errors import GuardError, NotSupportedError, RestClientError
from ..models import (
    IdMode,
    OrderBy,
    QueryOptions,
    ResponseType,
    SortDirection,
    Vertex,
    VertexInput,
    VertexPage,
    VerifyDepth,
)
from ..rest import RestClient

logger = logging.getLogger(__name__)

# Resource path used when the configuration has no path prefix
BASE_PATH = "auditable-item-graph"


class AuditableItemGraphClient(AuditableItemGraphComponent):
    """Performs auditable item graph operations through the REST endpoints.

    Every operation is a single request; nothing is cached, retried or held
    between calls. Errors from the executor reach the caller unchanged.
    """

    CLASS_NAME = "AuditableItemGraphClient"

    def __init__(
        self,
        config: ClientConfig,
        *,
        codec: WireCodec | None = None,
        executor: RestClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Endpoint, path prefix and protocol version
            codec: Wire codec, defaults to the one for config.protocol
            executor: Object with a RestClient-compatible fetch coroutine
        """
        self.config = config
        self.codec = codec or get_codec(config.protocol)
        self.executor = executor or RestClient(config, BASE_PATH)

    def _headers(self, response_type: ResponseType | None) -> dict[str, str] | None:
        accept = self.codec.accept_header(response_type)
        return {"Accept": accept} if accept else None

    def _optional_enum(self, name: str, value: Any, enum_type: type) -> Any:
        if value is None:
            return None
        return guards.enum_value(self.CLASS_NAME, name, value, enum_type)

    async def create(self, vertex: VertexInput | Mapping[str, Any]) -> str:
        """Create a new graph vertex.

        Args:
            vertex: Annotation object plus optional aliases, resources and
                edges; the server assigns the id

        Returns:
            The id of the new vertex, taken from the Location header
        """
        body = self.codec.encode_vertex(vertex)

        response = await self.executor.fetch("/", "POST", body=body)

        location = response.header("Location")
        if not location:
            raise RestClientError(
                self.CLASS_NAME,
                "Create response did not include a Location header",
                status_code=response.status,
            )

        vertex_id = location.rsplit("/", 1)[-1]
        logger.info(f"Created vertex {vertex_id}")
        return vertex_id

    async def get(
        self,
        vertex_id: str,
        *,
        include_deleted: bool | None = None,
        include_changesets: bool | None = None,
        verify_signature_depth: VerifyDepth | str | None = None,
        response_type: ResponseType | str | None = None,
    ) -> Vertex:
        """Get a graph vertex.

        Args:
            vertex_id: Id of the vertex
            include_deleted: Include soft-deleted aliases, resources and edges
            include_changesets: Include the changeset history
            verify_signature_depth: How many changeset signatures the server
                verifies: none, current or all
            response_type: json or jsonld, where the protocol negotiates it

        Returns:
            The vertex, with verification results when they were requested

        Raises:
            GuardError: If vertex_id is not a non-empty string
            NotFoundError: If the vertex does not exist
        """
        guards.string_value(self.CLASS_NAME, "id", vertex_id)
        depth = self._optional_enum("verifySignatureDepth", verify_signature_depth, VerifyDepth)
        response_type = self._optional_enum("responseType", response_type, ResponseType)

        logger.debug(f"Getting vertex {vertex_id}")
        response = await self.executor.fetch(
            "/:id",
            "GET",
            headers=self._headers(response_type),
            path_params={"id": vertex_id},
            query=self.codec.encode_get_query(include_deleted, include_changesets, depth),
        )
        return self.codec.decode_vertex(response.body)

    async def update(self, vertex: VertexInput | Mapping[str, Any]) -> None:
        """Update a graph vertex.

        Collections left out of the payload are unchanged on the server, an
        empty list clears them.

        Args:
            vertex: Vertex payload including its id

        Raises:
            GuardError: If the id is not a non-empty string
            NotFoundError: If the vertex does not exist
        """
        if isinstance(vertex, VertexInput):
            vertex_id = vertex.id
            payload: VertexInput | dict[str, Any] = replace(vertex, id=None)
        elif isinstance(vertex, Mapping):
            vertex_id = vertex.get("id")
            payload = {key: value for key, value in vertex.items() if key != "id"}
        else:
            raise GuardError(
                self.CLASS_NAME,
                "vertex",
                vertex,
                message=f"{self.CLASS_NAME}: 'vertex' must be a VertexInput or a mapping",
            )
        guards.string_value(self.CLASS_NAME, "id", vertex_id)

        body = self.codec.encode_vertex(payload)
        body.pop("id", None)

        logger.debug(f"Updating vertex {vertex_id}")
        await self.executor.fetch("/:id", "PUT", path_params={"id": vertex_id}, body=body)

    async def remove_immutable(self, vertex_id: str) -> None:
        """Not available over REST.

        Raises:
            NotSupportedError: Always
        """
        raise NotSupportedError(self.CLASS_NAME, "removeImmutable")

    async def query(
        self,
        options: QueryOptions | None = None,
        conditions: Any = None,
        order_by: OrderBy | str | None = None,
        order_by_direction: SortDirection | str | None = None,
        properties: Sequence[str] | None = None,
        cursor: str | None = None,
        page_size: int | None = None,
        response_type: ResponseType | str | None = None,
    ) -> VertexPage:
        """Query the graph for vertices.

        Paging, sorting and filtering all happen on the server.

        Args:
            options: Optional id filter and where to match it (id, alias, both)
            conditions: Structured filter predicates, passed through untouched
            order_by: dateCreated or dateModified
            order_by_direction: asc or desc
            properties: Vertex fields to return
            cursor: Cursor from a previous page
            page_size: Maximum number of vertices in the page
            response_type: json or jsonld, where the protocol negotiates it

        Returns:
            The page; a cursor is present when more results may exist
        """
        if options is not None and not isinstance(options, QueryOptions):
            raise GuardError(
                self.CLASS_NAME,
                "options",
                options,
                message=f"{self.CLASS_NAME}: 'options' must be QueryOptions",
            )
        if options is not None and options.id_mode is not None:
            id_mode = guards.enum_value(self.CLASS_NAME, "idMode", options.id_mode, IdMode)
            options = replace(options, id_mode=id_mode)
        if page_size is not None and (isinstance(page_size, bool) or not isinstance(page_size, int)):
            raise GuardError(
                self.CLASS_NAME,
                "pageSize",
                page_size,
                message=f"{self.CLASS_NAME}: 'pageSize' must be an integer",
            )
        if isinstance(properties, str):
            raise GuardError(
                self.CLASS_NAME,
                "properties",
                properties,
                message=f"{self.CLASS_NAME}: 'properties' must be a list of field names",
            )

        response_type = self._optional_enum("responseType", response_type, ResponseType)
        query = self.codec.encode_query(
            options,
            conditions,
            self._optional_enum("orderBy", order_by, OrderBy),
            self._optional_enum("orderByDirection", order_by_direction, SortDirection),
            properties,
            cursor,
            page_size,
        )

        logger.debug(f"Querying vertices with {query}")
        response = await self.executor.fetch(
            "/",
            "GET",
            headers=self._headers(response_type),
            query=query,
        )
        return self.codec.decode_page(response.body)
