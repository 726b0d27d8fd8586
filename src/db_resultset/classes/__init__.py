from .database_type import DatabaseType
from .param_type import ParamType, infer_param_type
from .record import Record
from .result_cursor import ResultCursor
from .database_connection import DatabaseConnection
