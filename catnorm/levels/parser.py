"""Level parser: raw text values -> Factor + RejectionReports.

Unmatched values never raise. They become REJECTED and are reported so the
caller can accept them, widen the levels, or recode them explicitly.
Only structural problems (duplicate levels) raise LevelConfigError.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type

import numpy as np

from .category_set import CategorySet
from .conf import ParseConf
from .errors import RejectionReport
from .factor import Factor
from .values import ABSENT, REJECTED, CategoricalValue, Label, is_absent_scalar

log = logging.getLogger("catnorm.levels.parser")


def raw_to_text(raw: Any) -> str:
    """Render a non-absent raw value as the text it is matched by.

    Integral floats lose their '.0' so a spreadsheet column of 1.0, 2.0
    matches levels '1', '2'.
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, bool):
        return str(raw)
    if isinstance(raw, np.generic):
        raw = raw.item()
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def _classify(raw: Any, conf: Type[ParseConf]) -> Optional[str]:
    """Return the text to match, or None when the value is absent."""
    if is_absent_scalar(raw):
        return None
    text = raw_to_text(raw)
    if conf.trim_ws:
        text = text.strip()
    if text in conf.absent_values:
        return None
    return text


def parse(
    raw_values: Iterable[Any],
    levels: Optional[Iterable[str]] = None,
    *,
    ordered: bool = False,
    include_absent_as_level: bool = True,
    conf: Type[ParseConf] = ParseConf,
) -> Tuple[Factor, List[RejectionReport]]:
    """Parse raw values against a closed set of levels.

    Args:
        raw_values: raw cell values, text or numeric-as-text
        levels: allowed labels in reference order; None infers them from the
            data in order of first appearance (nothing is rejected then)
        ordered: mark the resulting CategorySet as ordinal
        include_absent_as_level: when False, absent inputs fold into REJECTED
            so no distinction survives downstream
        conf: ParseConf subclass with absent strings and whitespace handling

    Returns:
        (factor, rejections) with one RejectionReport per rejected input

    Raises:
        LevelConfigError: if ``levels`` contains duplicates
    """
    # Validate before reading any value
    category_set = None
    if levels is not None:
        if isinstance(levels, CategorySet):
            category_set = levels.with_ordered(ordered or levels.ordered)
        else:
            category_set = CategorySet(levels, ordered=ordered)

    raw_values = list(raw_values)
    texts = [_classify(raw, conf) for raw in raw_values]

    if category_set is None:
        category_set = CategorySet.from_observed(
            (t for t in texts if t is not None), ordered=ordered)

    absent_value = ABSENT if include_absent_as_level else REJECTED
    values: List[CategoricalValue] = []
    rejections: List[RejectionReport] = []
    for position, (raw, text) in enumerate(zip(raw_values, texts), start=1):
        if text is None:
            values.append(absent_value)
        elif text in category_set:
            values.append(Label(text))
        else:
            values.append(REJECTED)
            # report the cell as written, not the trimmed text used for matching
            rejections.append(RejectionReport(position=position, text=raw_to_text(raw)))

    if rejections:
        _warn_rejections(rejections, category_set, conf.report_preview)

    return Factor(values, category_set, absent_as_level=include_absent_as_level), rejections


def parse_column(
    raw_values: Sequence[Any],
    column: str,
    levels: Optional[Iterable[str]] = None,
    **kwargs,
) -> Tuple[Factor, List[RejectionReport]]:
    """``parse`` with every RejectionReport tagged with its column name."""
    factor, rejections = parse(raw_values, levels, **kwargs)
    return factor, [
        RejectionReport(position=r.position, text=r.text, column=column)
        for r in rejections
    ]


def _warn_rejections(rejections: List[RejectionReport], category_set: CategorySet,
                     preview: int) -> None:
    shown = ', '.join(f"{r.text!r}@{r.position}" for r in rejections[:preview])
    more = len(rejections) - preview
    if more > 0:
        shown += f", ... ({more} more)"
    log.warning(
        "%d value(s) not in levels %s: %s",
        len(rejections), list(category_set.labels), shown,
    )
