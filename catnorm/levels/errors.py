"""Error and report types for level parsing and recoding.

Two failure modes clearly distinguished:
  - Config error (LevelConfigError) raised before any value is processed
  - Data-quality problem (RejectionReport) returned alongside the result
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


class LevelConfigError(Exception):
    """Raised when a CategorySet or a set of recoding rules is invalid.

    This is a configuration-time error, not a data error. It means the
    levels or rules supplied by the caller can never form a valid transform,
    whatever the data looks like.
    """

    def __init__(self, message: str, labels: Iterable = ()):
        self.labels: Tuple = tuple(labels)
        super().__init__(message)


@dataclass(frozen=True)
class RejectionReport:
    """A raw value that failed to match the declared levels."""
    position: int  # 1-based
    text: str
    column: Optional[str] = None

    def describe(self) -> str:
        where = f"row {self.position}"
        if self.column is not None:
            where = f"column '{self.column}', {where}"
        return f"{where}: value {self.text!r} not in levels"


def format_labels(labels: Iterable) -> str:
    return ', '.join(repr(lbl) for lbl in labels)
