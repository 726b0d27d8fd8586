from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Iterable, Iterator


class Record(Mapping):
    """One materialized result row: an ordered, immutable mapping of column name -> value.

    Fields can be read by key (record["name"]) or by attribute (record.name).
    """

    __slots__ = ("_fields",)

    def __init__(self, columns:Iterable[str], values:Iterable[Any]): 
        # NOTE: duplicate column names (e.g. from a join) keep the last value
        object.__setattr__(self, "_fields", dict(zip(columns, values)))

    def __getitem__(self, key:str) -> Any: 
        return self._fields[key]

    def __iter__(self) -> Iterator[str]: 
        return iter(self._fields)

    def __len__(self) -> int: 
        return len(self._fields)

    def __getattr__(self, name:str) -> Any: 
        if name.startswith("_"): raise AttributeError(name)
        try: 
            return self._fields[name]
        except KeyError: 
            raise AttributeError(f"Record has no field {name!r}") from None

    def __setattr__(self, name:str, value:Any) -> None: 
        raise AttributeError("Record is immutable")

    def __delattr__(self, name:str) -> None: 
        raise AttributeError("Record is immutable")

    def __reduce__(self):
        # Rebuild through __init__ so copy/pickle never go through __setattr__
        return (self.__class__, (tuple(self._fields), tuple(self._fields.values())))

    def __repr__(self) -> str:
        return f"Record({self._fields!r})"

    @classmethod
    def from_rows(cls, columns:list[str], rows:Iterable[Iterable[Any]]) -> list["Record"]: 
        """Builds a Record for each raw driver row, using the same column list for all of them."""
        return [cls(columns, row) for row in rows]
