"""Helpers that turn numbers into label text before parsing."""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .parser import raw_to_text
from .values import is_absent_scalar


def prefixed(prefix: str, values: Iterable[Any]) -> List[Optional[str]]:
    """Prefix every non-absent value, e.g. 3 -> 'Parity_3'. Absent stays None."""
    return [None if is_absent_scalar(v) else f"{prefix}{raw_to_text(v)}" for v in values]


def level_range(prefix: str, start: int, stop: int, step: int = 1) -> List[str]:
    """Generated level names, inclusive of ``stop``: Parity_1 ... Parity_10."""
    if step == 0:
        raise ValueError("step must not be zero")
    end = stop + (1 if step > 0 else -1)
    return [f"{prefix}{i}" for i in range(start, end, step)]


def zero_padded(prefix: str, values: Iterable[Any]) -> List[Optional[str]]:
    """IDs padded to the widest value so text order matches numeric order.

    [1, 10, 100] -> ['ID_001', 'ID_010', 'ID_100']
    """
    values = list(values)
    texts = [None if is_absent_scalar(v) else raw_to_text(v) for v in values]
    width = max((len(t) for t in texts if t is not None), default=0)
    return [None if t is None else f"{prefix}{t.zfill(width)}" for t in texts]
