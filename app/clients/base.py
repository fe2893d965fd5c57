from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

Record = Dict[str, Any]
Filters = Mapping[str, Any]
# (column, descending)
Ordering = Sequence[Tuple[str, bool]]


class RecordStore(Protocol):
    """Query interface of the hosted relational backend.

    Filters are exact-match equality on each column. Implementations raise
    ``NotFoundError`` from ``update``/``delete`` when no row has the given id
    and ``StoreUnavailableError`` when the backend call itself fails.
    """

    async def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        ...

    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        ...

    async def delete(self, table: str, record_id: str) -> None:
        ...

    async def find(self, table: str, filters: Filters) -> Optional[Record]:
        ...

    async def query(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        order: Ordering | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Record]:
        ...

    async def count(self, table: str, filters: Filters | None = None) -> int:
        ...

    async def close(self) -> None:
        ...
