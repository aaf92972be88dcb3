"""Contract shared by every auditable item graph implementation."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from .models import (
    OrderBy,
    QueryOptions,
    ResponseType,
    SortDirection,
    Vertex,
    VertexInput,
    VertexPage,
    VerifyDepth,
)


class AuditableItemGraphComponent(ABC):
    """Create, read, update and query auditable item graph vertices."""

    @abstractmethod
    async def create(self, vertex: VertexInput | Mapping[str, Any]) -> str:
        """Create a vertex and return its id."""

    @abstractmethod
    async def get(
        self,
        vertex_id: str,
        *,
        include_deleted: bool | None = None,
        include_changesets: bool | None = None,
        verify_signature_depth: VerifyDepth | str | None = None,
        response_type: ResponseType | str | None = None,
    ) -> Vertex:
        """Get a vertex by id."""

    @abstractmethod
    async def update(self, vertex: VertexInput | Mapping[str, Any]) -> None:
        """Update a vertex; omitted collections are left unchanged."""

    @abstractmethod
    async def remove_immutable(self, vertex_id: str) -> None:
        """Remove the immutable storage held for a vertex."""

    @abstractmethod
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
        """Query vertices, one page at a time."""
