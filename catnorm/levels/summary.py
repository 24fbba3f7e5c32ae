"""Per-level counts for a Factor, the way R's summary() shows a factor."""
from __future__ import annotations

import pandas as pd

from .factor import Factor
from .values import ABSENT, REJECTED, Label

ABSENT_ROW = 'NA'
REJECTED_ROW = "NA's"


def summarize(factor: Factor) -> pd.Series:
    """Counts per level in level order, then the missing rows.

    Unobserved levels show 0. When the factor keeps absent as a level an
    'NA' row counts absent inputs (only if there are any); the "NA's" row
    counts every other missing value and is omitted when zero.
    """
    counts = {lbl: 0 for lbl in factor.levels}
    absent = rejected = 0
    for v in factor:
        if isinstance(v, Label):
            counts[v.value] += 1
        elif v is ABSENT:
            absent += 1
        elif v is REJECTED:
            rejected += 1

    rows = list(counts.items())
    if factor.absent_as_level:
        if absent:
            rows.append((ABSENT_ROW, absent))
    else:
        rejected += absent
    if rejected:
        rows.append((REJECTED_ROW, rejected))
    # a level may itself be called 'NA'; keep both rows rather than merge them
    return pd.Series([n for _, n in rows], index=[k for k, _ in rows],
                     dtype='int64', name='count')
