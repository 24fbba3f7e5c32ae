"""Column dtype predicates for choosing which columns to convert.

Each predicate works for both pandas and polars dtypes.

Note: polars dtype equality (==) has surprising behavior with non-polars
types (e.g., `np.dtype('O') == pl.Int8` returns True). We guard against
this by checking the dtype is a polars DataType before polars comparisons.
"""
import pandas as pd
import polars as pl


def _is_polars_dtype(dtype) -> bool:
    return isinstance(dtype, pl.DataType) or (
        isinstance(dtype, type) and issubclass(dtype, pl.DataType)
    )


def is_string(dtype) -> bool:
    """String/object columns: the ones a loader leaves as raw text."""
    if _is_polars_dtype(dtype):
        return dtype in (pl.Utf8, pl.String)
    return bool(pd.api.types.is_string_dtype(dtype))


def is_categorical(dtype) -> bool:
    if _is_polars_dtype(dtype):
        return isinstance(dtype, (pl.Categorical, pl.Enum)) or dtype in (pl.Categorical, pl.Enum)
    return isinstance(dtype, pd.CategoricalDtype)
