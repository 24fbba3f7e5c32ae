"""Binning continuous numbers into a Factor."""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from .category_set import CategorySet
from .errors import LevelConfigError, RejectionReport
from .factor import Factor
from .parser import raw_to_text
from .values import ABSENT, REJECTED, CategoricalValue, Label, is_absent_scalar


def cut(
    values: Iterable[Any],
    breaks: Sequence[float],
    labels: Sequence[str],
    *,
    right: bool = True,
    ordered: bool = False,
) -> Tuple[Factor, List[RejectionReport]]:
    """Assign each number to the interval it falls in.

    With ``right=True`` intervals are open on the left and closed on the
    right, so breaks [0, 100, 200] give (0, 100] and (100, 200]. Use
    -inf / inf as outer breaks to accept every number.

    Absent inputs become ABSENT. Numbers outside the breaks, and cells that
    are not numbers at all, become REJECTED and are reported like unmatched
    text in ``parse``.
    """
    breaks_arr = np.asarray(breaks, dtype=float)
    if breaks_arr.ndim != 1 or len(breaks_arr) < 2:
        raise LevelConfigError("cut needs at least two breaks")
    if np.any(np.diff(breaks_arr) <= 0):
        raise LevelConfigError("breaks must be strictly increasing")
    if len(labels) != len(breaks_arr) - 1:
        raise LevelConfigError(
            f"cut needs {len(breaks_arr) - 1} labels for {len(breaks_arr)} breaks, "
            f"got {len(labels)}"
        )
    category_set = CategorySet(labels, ordered=ordered)

    values = list(values)
    absent = np.array([is_absent_scalar(v) for v in values], dtype=bool)
    # cells that are present but not numbers, e.g. 'unknown' in an age column
    unparsable = np.zeros(len(values), dtype=bool)
    numbers = np.full(len(values), np.nan, dtype=float)
    for i, (v, is_abs) in enumerate(zip(values, absent)):
        if is_abs:
            continue
        try:
            numbers[i] = float(v)
        except (TypeError, ValueError):
            unparsable[i] = True

    side = 'left' if right else 'right'
    # bin i covers (breaks[i-1], breaks[i]] when right, else [breaks[i-1], breaks[i])
    idx = np.searchsorted(breaks_arr, numbers, side=side)

    out: List[CategoricalValue] = []
    rejections: List[RejectionReport] = []
    for position, (is_abs, bad, i, raw) in enumerate(
            zip(absent, unparsable, idx, values), start=1):
        if is_abs:
            out.append(ABSENT)
        elif not bad and 1 <= i <= len(labels):
            out.append(Label(category_set.labels[i - 1]))
        else:
            out.append(REJECTED)
            rejections.append(RejectionReport(position=position, text=raw_to_text(raw)))
    return Factor(out, category_set), rejections
