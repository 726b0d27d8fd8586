from .general import setup_logger, column_names

__all__ = [
    "setup_logger",
    "column_names",
]
