from .classes import DatabaseConnection, DatabaseType, ParamType, Record, ResultCursor, infer_param_type
from .exceptions import DatabaseNotConnected, DatabaseTypeNotSupported, RowIndexOutOfRange
from .utils import *

__version__ = "2024.11.28"

__all__ = [
    "DatabaseConnection",
    "DatabaseType",
    "ParamType",
    "Record",
    "ResultCursor",
    "infer_param_type",
    "DatabaseNotConnected",
    "DatabaseTypeNotSupported",
    "RowIndexOutOfRange",
]
