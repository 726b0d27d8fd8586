from __future__ import annotations
import logging
from typing import Any, Iterator, Mapping, Sequence

import pandas as pd

from ..exceptions import DatabaseNotConnected, RowIndexOutOfRange
from ..utils.general import column_names
from .db_cursor import DBConnection, DBCursor
from .loggable import Loggable
from .param_type import bind_params
from .record import Record


Params = Mapping[str, Any] | Sequence[Any] | None


# ResultCursor class definition
class ResultCursor(Loggable):
    """Runs queries against a DB-API connection and buffers the full result set in memory, so that rows can be
    walked (current/next/previous/indexed) without re-querying.

    The cursor holds the connection handle; it never opens or closes it. A new query replaces the buffer wholesale.
    """

    cxn:DBConnection|None           # The connection handle this cursor runs queries on
    rows:list[Record]               # Buffered rows of the most recent query
    columns:list[str]               # Column names of the most recent query
    row_count:int                   # Always len(rows)
    position:int                    # Index of the "current" row
    affected_rows:int               # Affected row count of the last write statement (see run())


    def __init__(self, cxn:DBConnection|None, *, logger:logging.Logger|None=None, enable_logging:bool=True):
        self.cxn = cxn
        self.logger = logger
        self.enable_logging = enable_logging and logger is not None
        self.affected_rows = 0
        self._replace_rows([], [])


    def _replace_rows(self, columns:list[str], rows:list[Record]) -> None:
        """Swaps in a new buffer and resets the row count and position with it."""
        self.columns = columns
        self.rows = rows
        self.row_count = len(rows)
        self.position = 0


    def _cursor(self) -> DBCursor:
        """Returns a new driver cursor, raising DatabaseNotConnected if there is no handle to create one from."""
        if self.cxn is None:
            self.log_error('_cursor()', DatabaseNotConnected())
            raise DatabaseNotConnected()
        return self.cxn.cursor()


    def _execute(self, cursor:DBCursor, sql:str, parameters:Params) -> None:
        """Runs the statement directly when there are no parameters, otherwise binds them by inferred type."""
        if parameters is None or not parameters:
            cursor.execute(sql)
        else:
            cursor.execute(sql, bind_params(parameters))


    def _rollback(self) -> None:
        try:
            self.cxn.rollback()
        except Exception as e:
            # NOTE: don't mask the original exception
            self.log_warning('_rollback()', f'{e.__class__.__name__} - {e}')


    # ---- Query execution ---- #
    def execute(self, sql:str, parameters:Params=None, *, commit:bool=True, raise_on_error:bool=True) -> bool:
        """Executes the given statement and buffers its result rows. Returns True on success.

            NOTE:
                - Named parameters are given as a mapping, positional ones as a sequence; every value is bound as
                  boolean, null, integer or string (in that order of checks)
                - Driver errors are re-raised by default; with [raise_on_error] False they are logged, the
                  transaction is rolled back, the buffer is emptied and False is returned
                - Statements without a result set (INSERT, CREATE, ...) leave an empty buffer
        """
        cursor:DBCursor = self._cursor()

        try:
            self._execute(cursor, sql, parameters)
            columns:list[str] = column_names(cursor.description)

            # NOTE: psycopg2 raises if fetchall() is called on a statement with no result set
            rows:list[Record] = Record.from_rows(columns, cursor.fetchall()) if columns else []
            if commit: self.cxn.commit()

        except Exception as e:
            self._rollback()
            self._replace_rows([], [])
            self.log_error('execute()', e)
            if raise_on_error: raise
            return False

        finally:
            try: cursor.close()
            except Exception as e:
                self.log_warning('execute()', f'Error when closing cursor: {e.__class__.__name__} - {e}')

        self._replace_rows(columns, rows)
        self.log_debug('execute()', f'Buffered {self.row_count} row(s).')
        return True


    def run(self, sql:str, parameters:Params=None, *, commit:bool=True, raise_on_error:bool=True) -> bool:
        """Executes a write statement (INSERT/UPDATE/DELETE) with the same binding rules as execute(), without
        touching the buffered rows. The driver's affected row count is stored in [self.affected_rows]."""
        cursor:DBCursor = self._cursor()

        try:
            self._execute(cursor, sql, parameters)
            self.affected_rows = cursor.rowcount
            if commit: self.cxn.commit()

        except Exception as e:
            self._rollback()
            self.affected_rows = 0
            self.log_error('run()', e)
            if raise_on_error: raise
            return False

        finally:
            try: cursor.close()
            except Exception as e:
                self.log_warning('run()', f'Error when closing cursor: {e.__class__.__name__} - {e}')

        self.log_debug('run()', f'{self.affected_rows} row(s) affected.')
        return True


    def insert(self, sql:str, parameters:Params=None, **kwargs) -> bool:
        return self.run(sql, parameters, **kwargs)


    def update(self, sql:str, parameters:Params=None, **kwargs) -> bool:
        return self.run(sql, parameters, **kwargs)


    def delete(self, sql:str, parameters:Params=None, **kwargs) -> bool:
        return self.run(sql, parameters, **kwargs)


    # ---- Buffered row access ---- #
    def fetch_all(self) -> list[Record]:
        """Returns a copy of the full buffered result set (does not move the position)."""
        return list(self.rows)


    def fetch_at(self, index:int) -> Record:
        """Returns the row at [index]; raises RowIndexOutOfRange outside [0, row_count). Negative indices do not wrap."""
        if not 0 <= index < self.row_count:
            raise RowIndexOutOfRange(index, self.row_count)
        return self.rows[index]


    def fetch_current(self) -> Record:
        return self.fetch_at(self.position)


    def fetch_next(self) -> Record:
        """Moves one row forward (staying on the last row at the end) and returns that row."""
        if self.row_count == 0: raise RowIndexOutOfRange(self.position + 1, 0)
        self.position = min(self.position + 1, self.row_count - 1)
        return self.rows[self.position]


    def fetch_previous(self) -> Record:
        """Moves one row back (staying on the first row at the start) and returns that row."""
        if self.row_count == 0: raise RowIndexOutOfRange(self.position - 1, 0)
        self.position = max(self.position - 1, 0)
        return self.rows[self.position]


    def row_count_value(self) -> int:
        return self.row_count


    # ---- Convenience queries ---- #
    def query_first_row(self, sql:str, parameters:Params=None) -> Record|None:
        """Executes the query and returns its first row, or None if it returned no rows."""
        self.execute(sql, parameters)
        if self.row_count == 0: return None
        return self.fetch_at(0)


    def query_first_field(self, sql:str, field:str, parameters:Params=None) -> Any:
        """Executes the query and returns [field] from its first row, or None if it returned no rows.
        A [field] that is not a column of the result raises KeyError."""
        record:Record|None = self.query_first_row(sql, parameters)
        if record is None: return None
        return record[field]


    def to_df(self) -> pd.DataFrame:
        """Returns the buffered rows as a DataFrame (columns in result order, duplicate names collapsed like in Record)."""
        return pd.DataFrame(
            [tuple(r.values()) for r in self.rows],
            columns=list(dict.fromkeys(self.columns))
        )


    def __len__(self) -> int:
        return self.row_count


    def __iter__(self) -> Iterator[Record]:
        return iter(self.rows)
