# Standard imports
import logging
from typing import Any

# Imports for DB drivers
import mysql.connector as mysql
import psycopg2 as psql
import psycopg2.extensions as _psql_ext
import sqlite3 as sqlite

from mysql.connector import MySQLConnection
from psycopg2.extensions import connection as PSQLConnection
from sqlite3 import Connection as SQLiteConnection

# Custom utils and objs
from ..utils.general import setup_logger
from ..exceptions import DatabaseNotConnected
from .database_type import DatabaseType
from .db_cursor import DBConnection
from .loggable import Loggable
from .result_cursor import ResultCursor


# Default ports per DB type (SQLite has none)
DEFAULT_PORTS:dict[DatabaseType, int] = {
    DatabaseType.MYSQL: 3306,
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.MSSQL: 1433,
    DatabaseType.ODBC_MSSQL: 1433,
}

DEFAULT_ODBC_DRIVER:str = 'ODBC Driver 17 for SQL Server'


def odbc_connection_string(host:str, port:int, database:str|None, username:str, password:str, driver:str=DEFAULT_ODBC_DRIVER) -> str:
    """Builds a SQL Server/Sybase ODBC connection string. Values containing ';' or '}' are wrapped in braces (with '}' doubled)."""

    def _value(v:Any) -> str:
        s:str = "" if v is None else str(v)
        if any(c in s for c in ";{}") or s != s.strip():
            return "{" + s.replace("}", "}}") + "}"
        return s

    parts:list[str] = [
        f"Driver={{{driver}}}",
        f"Server={_value(host)},{port}",
    ]
    if database: parts.append(f"Database={_value(database)}")
    parts.append(f"UID={_value(username)}")
    parts.append(f"PWD={_value(password)}")
    return ";".join(parts)


# DatabaseConnection class definition
class DatabaseConnection(Loggable):
    """Opens a driver connection for the given DatabaseType and owns one ResultCursor ([self.results]) that runs
    queries on it. Use as a context manager so the connection is closed on every exit path."""

    database_type:DatabaseType                              # The DatabaseType for this instance
    cxn:DBConnection|MySQLConnection|PSQLConnection|SQLiteConnection|None     # The database connection object
    results:ResultCursor                                    # Buffered result cursor bound to [cxn]


    def __init__(
            self,
            database_type:DatabaseType|str,
            host:str,
            username:str,
            password:str,
            *,
            port:int|None=None,
            database:str|None=None,
            charset:str='utf8',
            timezone:str|None=None,
            odbc_driver:str=DEFAULT_ODBC_DRIVER,
            enable_logging:bool=True,
            log_file_path:str='./database_connection.log',
            logger_name:str='database_connection_logger',
            logger_min_level:int=logging.DEBUG,
            logger_format:str="%(asctime)s - %(levelname)s: %(message)s"
        ):

        # NOTE: an unsupported selector is a configuration error - raised before anything else happens
        database_type = DatabaseType.from_selector(database_type)

        # Set the base attributes
        self.database_type = database_type
        self.host = host
        self.port = port if port is not None else DEFAULT_PORTS.get(database_type)
        self.username = username
        self.password = password
        self.database = database
        self.charset = charset
        self.timezone = timezone
        self.odbc_driver = odbc_driver
        self.enable_logging = enable_logging
        self.logger = None
        self.cxn = None

        # Setup logging if configured
        if enable_logging:
            self.logger = setup_logger(
                log_file_path=log_file_path,
                logger_name=logger_name,
                min_level=logger_min_level,
                log_format=logger_format,
            )

        # Connect, log and re-raise driver errors
        try:
            self.cxn = self._connect()
        except Exception as e:
            self.log_error('__init__()', e)
            raise

        self.results = ResultCursor(self.cxn, logger=self.logger, enable_logging=enable_logging)
        self.log_debug('__init__()', f'Connected to {self.database_type.name} database "{self.database}".')


    def _connect(self) -> DBConnection:
        """Opens the driver connection for [self.database_type]."""

        match self.database_type:

            # MYSQL DATABASE
            case DatabaseType.MYSQL:
                kwargs:dict[str, Any] = dict(
                    database=self.database,
                    host=self.host,
                    port=self.port,
                    user=self.username,
                    password=self.password,
                    charset=self.charset,
                )
                if self.timezone: kwargs['time_zone'] = self.timezone
                return mysql.connect(**kwargs)

            # POSTGRESQL DATABASE
            case DatabaseType.POSTGRESQL:
                kwargs = dict(
                    dbname=self.database,
                    host=self.host,
                    port=self.port,
                    user=self.username,
                    password=self.password,
                    client_encoding=self.charset,
                )
                if self.timezone: kwargs['options'] = f'-c timezone={self.timezone}'
                return psql.connect(**kwargs)

            # SQLITE DATABASE
            case DatabaseType.SQLITE:
                if self.database is None or not self.database:
                    raise ValueError("For SQLite, 'database' must be a file path or ':memory:'.")
                return sqlite.connect(self.database)

            # MSSQL / SYBASE (TDS)
            case DatabaseType.MSSQL:
                import pymssql
                return pymssql.connect(
                    server=self.host,
                    port=self.port,
                    user=self.username,
                    password=self.password,
                    database=self.database or '',
                    charset=self.charset.upper().replace('UTF8', 'UTF-8'),
                )

            # MSSQL / SYBASE (ODBC)
            case DatabaseType.ODBC_MSSQL:
                import pyodbc
                return pyodbc.connect(
                    odbc_connection_string(self.host, self.port, self.database, self.username, self.password, self.odbc_driver)
                )


    # ---- Functions for checking if the database connection is running and healthy ---- #
    def _ensure_cxn(self) -> None:
        """Raises a DatabaseNotConnected exception if the DB is not connected."""
        if not self._check_connection():
            self.log_error('_ensure_cxn()', DatabaseNotConnected())
            raise DatabaseNotConnected()


    def _check_connection(self) -> bool:
        """Returns True if the connection is running and is healthy, False otherwise."""

        # Base case: self.cxn is None
        if self.cxn is None: return False

        # Check based on db type
        match self.database_type:
            case DatabaseType.MYSQL:
                try:
                    self.cxn.ping(reconnect=False, attempts=1, delay=0)
                    return True
                except Exception:
                    pass
            case DatabaseType.POSTGRESQL:
                if getattr(self.cxn, "closed", 1) == 0 and getattr(self.cxn, "status", _psql_ext.STATUS_BAD) != _psql_ext.STATUS_BAD:
                    return True
            case _:
                # SQLite and both SQL Server drivers raise once the connection is closed
                cursor = None
                try:
                    cursor = self.cxn.cursor()
                    cursor.execute('SELECT 1')
                    cursor.fetchall()
                    return True
                except Exception:
                    pass
                finally:
                    if cursor is not None:
                        try: cursor.close()
                        except Exception: pass

        # Not connected if we make it here
        return False


    def is_connected(self) -> bool:
        """Public method for checking if the DB is connected and the connection is healthy (does not raise Exceptions)."""
        return self._check_connection()


    def quote(self, value:Any) -> str:
        """Returns [value] as a SQL string literal: None -> NULL, otherwise single quotes are doubled and the text wrapped in quotes."""
        if value is None: return 'NULL'
        return "'" + str(value).replace("'", "''") + "'"


    def commit(self) -> None:
        """Commits the current transaction (for statements run with commit=False). Errors are logged and re-raised."""
        self._ensure_cxn()
        try:
            self.cxn.commit()
        except Exception as e:
            self.log_error('commit()', e)
            raise


    def rollback(self) -> None:
        """Rolls back the current transaction. Errors are logged and re-raised."""
        self._ensure_cxn()
        try:
            self.cxn.rollback()
        except Exception as e:
            self.log_error('rollback()', e)
            raise


    def close(self) -> None:
        """Closes the connection (safe to call more than once). The ResultCursor keeps its buffered rows."""
        if self.cxn is None: return
        try:
            self.cxn.close()
            self.log_debug('close()', 'Connection closed.')
        finally:
            self.cxn = None
            self.results.cxn = None


    def __enter__(self) -> "DatabaseConnection":
        try:
            self._ensure_cxn()
        except DatabaseNotConnected:
            # Release the unhealthy driver connection before surfacing the error
            try: self.close()
            except Exception as e:
                self.log_warning('__enter__()', f'Error when closing connection: {e.__class__.__name__} - {e}')
            raise
        return self


    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
