"""Categorical value types.

A categorical value is one of three cases:
  - Label(value)  a label drawn from a CategorySet
  - ABSENT        no raw input was supplied
  - REJECTED      raw input was supplied but matched no label

The two missing kinds are distinct singletons so the distinction survives
parsing and recoding; they only collapse when rendered (pandas NaN, polars
null).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Label:
    """A value drawn from a CategorySet."""
    value: str

    def __repr__(self):
        return f"Label({self.value!r})"


class _MissingKind:
    """Base for the two missing singletons."""
    _instance = None
    _name = 'missing'

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return f'<{self._name}>'

    def __bool__(self):
        return False

    def __reduce__(self):
        return (type(self), ())


class AbsentMissing(_MissingKind):
    """Missing because no raw input was supplied."""
    _instance = None
    _name = 'absent'


class RejectedMissing(_MissingKind):
    """Missing because the raw input did not match any label."""
    _instance = None
    _name = 'rejected'


ABSENT = AbsentMissing()
REJECTED = RejectedMissing()

MISSING_KINDS = (ABSENT, REJECTED)

CategoricalValue = Union[Label, AbsentMissing, RejectedMissing]


def is_missing(value: Any) -> bool:
    return value is ABSENT or value is REJECTED


def is_absent_scalar(raw: Any) -> bool:
    """True for the null scalars a table loader hands us for an empty cell.

    Covers None, float NaN and the pandas NA/NaT singletons. Empty strings are
    handled by ParseConf.absent_values, not here.
    """
    if raw is None or raw is pd.NA or raw is pd.NaT:
        return True
    if isinstance(raw, float):
        return math.isnan(raw)
    # float32 and float16 scalars are not float subclasses
    if isinstance(raw, np.floating):
        return bool(np.isnan(raw))
    return False
