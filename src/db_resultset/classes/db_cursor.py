from __future__ import annotations
from typing import Protocol, Any, Mapping, Sequence, runtime_checkable

# NOTE: every supported driver returns rows as tuples by default
Row = Sequence[Any]


@runtime_checkable
class DBCursor(Protocol):
    """The subset of a DB-API 2.0 cursor that the ResultCursor relies on."""

    # Common DB-API attributes
    description: Sequence[Sequence[Any]] | None
    rowcount: int

    def execute(
        self,
        operation: str,
        params: Sequence[Any] | Mapping[str, Any] | None = None,
    ) -> Any: ...

    def fetchall(self) -> list[Row]: ...

    def close(self) -> None: ...


@runtime_checkable
class DBConnection(Protocol):
    """The subset of a DB-API 2.0 connection that the ResultCursor holds on to."""

    def cursor(self) -> DBCursor: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def close(self) -> None: ...
