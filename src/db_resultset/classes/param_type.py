from __future__ import annotations
from enum import Enum
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd


class ParamType(Enum): 
    """Storage types a bound parameter can be inferred as."""
    INTEGER = 1
    BOOLEAN = 2
    NULL = 3
    STRING = 4


def infer_param_type(value:Any) -> ParamType: 
    """Infers the storage type of a parameter value.

    NOTE: the checks are ordered - bool is a subclass of int in Python, so booleans (and nulls) must be
    matched before integers or True/False would bind as 1/0 integers.
    """
    if isinstance(value, (bool, np.bool_)): return ParamType.BOOLEAN
    if value is None or (pd.api.types.is_scalar(value) and not isinstance(value, str) and pd.isna(value)): 
        return ParamType.NULL
    if isinstance(value, (int, np.integer)): return ParamType.INTEGER
    return ParamType.STRING


def coerce_param(value:Any) -> bool|int|str|bytes|bytearray|memoryview|None:
    """Returns the value converted to the Python type its inferred ParamType binds as.
    Text and binary values are passed through as-is so BLOB data reaches the driver unchanged."""
    match infer_param_type(value):
        case ParamType.BOOLEAN: return bool(value)
        case ParamType.NULL: return None
        case ParamType.INTEGER: return int(value)
        case _:
            if isinstance(value, (str, bytes, bytearray, memoryview)): return value
            return str(value)


def bind_params(params:Mapping[str, Any]|Sequence[Any]) -> dict[str, Any]|tuple[Any, ...]: 
    """Coerces every parameter to its inferred type.

        - Mappings are named parameters; a leading ':' on a key (":id") is stripped so both styles work
        - Any other sequence is treated as positional parameters
    """
    if isinstance(params, Mapping): 
        return {str(k).lstrip(":"): coerce_param(v) for k, v in params.items()}
    return tuple(coerce_param(v) for v in params)
