"""
repseries – per-rep biomechanical sample series: text codec and SQLite store.
"""

from .core import (
    MalformedInputError,
    NonFiniteValueError,
    encode_series,
    decode_series,
    decode_float_series,
    decode_int_series,
)
from .models import RepMetricData
from .storage import RepMetricStore

__all__ = [
    "MalformedInputError",
    "NonFiniteValueError",
    "encode_series",
    "decode_series",
    "decode_float_series",
    "decode_int_series",
    "RepMetricData",
    "RepMetricStore",
]
