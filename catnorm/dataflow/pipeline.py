"""ColumnPipeline: parse and recode several columns of a DataFrame at once.

All column specs are validated when the pipeline is built, so a bad level
list or rule fails before any data is read. Rejected values are collected
per column and returned next to the converted frame.

Usage::

    pipeline = ColumnPipeline({
        'hair_coronary_band': ColumnSpec(levels=['N', 'n', 'Y'],
                                         rules={'No': ['N', 'n'], 'Yes': 'Y'}),
        'sex': ColumnSpec(levels=['Female', 'Male', 'Non Diff']),
    })
    df_out, rejections = pipeline.process_df(df)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

import pandas as pd
import polars as pl

from catnorm.levels.category_set import CategorySet
from catnorm.levels.conf import ParseConf
from catnorm.levels.errors import RejectionReport
from catnorm.levels.factor import Factor
from catnorm.levels.builders import prefixed
from catnorm.levels.parser import parse_column
from catnorm.levels.recoder import RecodeRules, recode

from .column_filters import is_categorical, is_string

log = logging.getLogger("catnorm.dataflow.pipeline")


@dataclass(frozen=True)
class ColumnSpec:
    """How one column is parsed and, optionally, recoded.

    Attributes:
        levels: allowed labels; None infers them from the data
        ordered: mark the parsed levels as ordinal
        rules: recoding rules applied after parsing (None for no recode)
        exhaustive: labels not covered by ``rules`` become REJECTED
        include_absent_as_level: keep absent inputs distinct from rejections
        prefix: text stuck in front of every value before parsing, for
            numeric codes such as parity -> 'Parity_3'
    """
    levels: Optional[Sequence[str]] = None
    ordered: bool = False
    rules: Any = None
    exhaustive: bool = False
    include_absent_as_level: bool = True
    prefix: Optional[str] = None

    def validate(self) -> None:
        """Raise LevelConfigError if this spec can never succeed."""
        rules = RecodeRules.coerce(self.rules)
        if self.levels is None:
            # levels come from the data; only rule structure can be checked
            rules.source_map()
            return
        rules.validate(CategorySet(self.levels, ordered=self.ordered))


def _column_values(df, name: str) -> List[Any]:
    if name not in df.columns:
        raise KeyError(f"Column '{name}' not found in dataframe")
    return df[name].to_list()


class ColumnPipeline:
    """Top-level orchestrator for converting text columns to categoricals.

    Builds and validates one ColumnSpec per column, then converts columns of
    pandas or polars DataFrames. The factors of the last run are kept in
    ``factors`` so callers can still tell ABSENT from REJECTED after the
    frame has rendered both as missing.
    """

    def __init__(self, specs: Mapping[str, ColumnSpec], conf: Type[ParseConf] = ParseConf):
        self.specs: Dict[str, ColumnSpec] = dict(specs)
        self.conf = conf
        for spec in self.specs.values():
            spec.validate()
        self.factors: Dict[str, Factor] = {}

    def process_column(self, name: str, values: Sequence[Any]) -> Tuple[Factor, List[RejectionReport]]:
        """Parse then recode a single column.

        Returns (factor, rejections); rejections carry the column name.
        """
        spec = self.specs[name]
        if spec.prefix is not None:
            values = prefixed(spec.prefix, values)
        factor, rejections = parse_column(
            values, name, spec.levels,
            ordered=spec.ordered,
            include_absent_as_level=spec.include_absent_as_level,
            conf=self.conf,
        )
        if spec.rules is not None:
            factor = recode(factor, spec.rules, exhaustive=spec.exhaustive)
        return factor, rejections

    def process_df(self, df) -> Tuple[Any, List[RejectionReport]]:
        """Convert every column that has a spec.

        Returns:
            (df_out, rejections) where df_out is a new frame of the same
            library as ``df`` and rejections lists every rejected value,
            column by column in spec order.
        """
        if not isinstance(df, (pd.DataFrame, pl.DataFrame)):
            raise TypeError(f"Expected a pandas or polars DataFrame, got {type(df).__name__}")

        # Fail on a missing column before converting anything
        columns = {name: _column_values(df, name) for name in self.specs}

        factors: Dict[str, Factor] = {}
        all_rejections: List[RejectionReport] = []
        for name, values in columns.items():
            factor, rejections = self.process_column(name, values)
            factors[name] = factor
            all_rejections.extend(rejections)
            log.info("column=%s levels=%d rejected=%d",
                     name, len(factor.levels), len(rejections))

        self.factors = factors
        return _replace_columns(df, factors), all_rejections


def _replace_columns(df, factors: Dict[str, Factor]):
    if isinstance(df, pl.DataFrame):
        return df.with_columns([f.to_polars(name) for name, f in factors.items()])
    out = df.copy()
    for name, factor in factors.items():
        out[name] = factor.to_pandas(name=name, index=df.index)
    return out


def parse_string_columns(df, conf: Type[ParseConf] = ParseConf):
    """Turn every string column into a categorical with inferred levels.

    A quick look at what text values a freshly loaded frame contains; no
    levels are declared so nothing is rejected.
    """
    # categorical columns already have their levels; leave them alone
    names = [name for name in df.columns
             if is_string(df[name].dtype) and not is_categorical(df[name].dtype)]
    pipeline = ColumnPipeline({name: ColumnSpec() for name in names}, conf=conf)
    df_out, _ = pipeline.process_df(df)
    return df_out
