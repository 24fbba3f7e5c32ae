"""Categorical normalization for tabular columns.

Parse free-text cells against a closed set of levels, keeping "no input"
apart from "input that matched nothing", then recode the levels.
"""
from catnorm.levels import (
    Label, ABSENT, REJECTED, DROP, is_missing,
    CategorySet, Factor, LevelConfigError, RejectionReport,
    ParseConf, TrimmedParseConf, ReadrConf,
    parse, parse_column, recode, collapse, relabel, drop_unused,
    RecodeRule, RecodeRules,
    prefixed, level_range, zero_padded, cut, summarize,
)
from catnorm.dataflow import ColumnSpec, ColumnPipeline, parse_string_columns

__version__ = "0.1.0"
