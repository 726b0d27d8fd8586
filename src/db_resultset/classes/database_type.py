from enum import Enum

from ..exceptions import DatabaseTypeNotSupported


class DatabaseType(Enum): 
    """Enum of Database types for standardization and type checking."""
    MYSQL = 1
    POSTGRESQL = 2
    SQLITE = 3
    MSSQL = 4
    ODBC_MSSQL = 5

    @classmethod
    def from_selector(cls, selector:"DatabaseType|str") -> "DatabaseType":
        """Resolves a DatabaseType from an enum member or a case-insensitive selector string (e.g. "mysql", "odbc_sybase").
        Raises DatabaseTypeNotSupported for anything else."""

        # Already resolved
        if isinstance(selector, cls): return selector

        key:str = str(selector or "").strip().lower()
        try: 
            return _SELECTORS[key]
        except KeyError: 
            raise DatabaseTypeNotSupported(selector) from None


# NOTE: Sybase speaks the same TDS protocol as SQL Server, so both selectors share a driver
_SELECTORS:dict[str, DatabaseType] = {
    "mysql": DatabaseType.MYSQL,
    "postgresql": DatabaseType.POSTGRESQL,
    "postgres": DatabaseType.POSTGRESQL,
    "sqlite": DatabaseType.SQLITE,
    "mssql": DatabaseType.MSSQL,
    "sybase": DatabaseType.MSSQL,
    "odbc_mssql": DatabaseType.ODBC_MSSQL,
    "odbc_sybase": DatabaseType.ODBC_MSSQL,
}
