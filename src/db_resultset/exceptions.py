class DatabaseNotConnected(ConnectionError): 
    """Raised when the DatabaseConnection (or its ResultCursor) attempts a query but does not have an active [cxn] attribute."""
    
    def __init__(self): 
        super().__init__('The database is not connected or the connection is not healthy.')


class DatabaseTypeNotSupported(ValueError): 
    """Raised when a DatabaseConnection is given a database_type (or selector string) that is not one of the Enum values in the DatabaseType class."""

    def __init__(self, db_type:str|int): 
        self.db_type = db_type
        super().__init__(f'The current database_type "{db_type}" is not supported. See the DatabaseType enum class for supported types.')


class RowIndexOutOfRange(IndexError):
    """Raised when a ResultCursor is asked for a row outside of the buffered range [0, row_count)."""

    def __init__(self, index:int, row_count:int):
        self.index = index
        self.row_count = row_count
        super().__init__(f'Row index {index} is out of range for a result set of {row_count} row(s).')
