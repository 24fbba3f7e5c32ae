"""Factor: a positional sequence of categorical values and its CategorySet."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import pandas as pd
import polars as pl

from .category_set import CategorySet
from .errors import LevelConfigError, format_labels
from .values import ABSENT, REJECTED, CategoricalValue, Label, is_missing


@dataclass(frozen=True)
class Factor:
    """Immutable categorical column.

    Attributes:
        values: one CategoricalValue per input position
        levels: the CategorySet every Label is drawn from
        absent_as_level: whether ABSENT is rendered as its own level in
            summaries (readr's include_na)
    """
    values: Tuple[CategoricalValue, ...]
    levels: CategorySet
    absent_as_level: bool = True

    def __init__(self, values: Iterable[CategoricalValue], levels: CategorySet,
                 absent_as_level: bool = True):
        values = tuple(values)
        unknown = []
        for v in values:
            if isinstance(v, Label):
                if v.value not in levels and v.value not in unknown:
                    unknown.append(v.value)
            elif not is_missing(v):
                raise TypeError(f"Expected Label, ABSENT or REJECTED, got {v!r}")
        if unknown:
            raise LevelConfigError(
                f"Values not in category set {levels!r}: {format_labels(unknown)}",
                labels=unknown,
            )
        object.__setattr__(self, 'values', values)
        object.__setattr__(self, 'levels', levels)
        object.__setattr__(self, 'absent_as_level', bool(absent_as_level))

    def __len__(self):
        return len(self.values)

    def __iter__(self) -> Iterator[CategoricalValue]:
        return iter(self.values)

    def __getitem__(self, i):
        return self.values[i]

    @property
    def ordered(self) -> bool:
        return self.levels.ordered

    def labels(self) -> List[Optional[str]]:
        """Plain labels, with None for both missing kinds."""
        return [v.value if isinstance(v, Label) else None for v in self.values]

    def absent_positions(self) -> List[int]:
        return [i for i, v in enumerate(self.values) if v is ABSENT]

    def rejected_positions(self) -> List[int]:
        return [i for i, v in enumerate(self.values) if v is REJECTED]

    def observed_labels(self) -> List[str]:
        """Levels that occur at least once, in level order."""
        seen = {v.value for v in self.values if isinstance(v, Label)}
        return [lbl for lbl in self.levels if lbl in seen]

    def to_pandas(self, name=None, index=None) -> pd.Series:
        """Render as a pandas ``category`` series. Both missing kinds become NaN."""
        cat = pd.Categorical(
            self.labels(),
            categories=list(self.levels.labels),
            ordered=self.levels.ordered,
        )
        return pd.Series(cat, name=name, index=index)

    def to_polars(self, name: str = '') -> pl.Series:
        """Render as a polars ``Enum`` series. Both missing kinds become null."""
        return pl.Series(name, self.labels(), dtype=pl.Enum(list(self.levels.labels)))
