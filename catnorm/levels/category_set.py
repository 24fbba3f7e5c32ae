"""CategorySet: the closed, ordered vocabulary of a categorical column."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Tuple

from .errors import LevelConfigError, format_labels


@dataclass(frozen=True)
class CategorySet:
    """An ordered sequence of unique label strings.

    Order defines the reference level (first label) and, when ``ordered`` is
    true, a total order among labels.

    Usage::

        yes_no = CategorySet(['N', 'Y'])
        parity = CategorySet(level_range('Parity_', 1, 10), ordered=True)
    """
    labels: Tuple[str, ...]
    ordered: bool = False
    _positions: Dict[str, int] = field(init=False, repr=False, compare=False, hash=False)

    def __init__(self, labels: Iterable[str] = (), ordered: bool = False):
        if isinstance(labels, str):
            # tuple('NY') would silently become ('N', 'Y')
            raise LevelConfigError(
                f"Category labels must be a collection of strings, got the string {labels!r}",
                labels=[labels],
            )
        labels = tuple(labels)
        bad_types = [lbl for lbl in labels if not isinstance(lbl, str)]
        if bad_types:
            raise LevelConfigError(
                f"Category labels must be strings, got {format_labels(bad_types)}",
                labels=bad_types,
            )
        dupes = [lbl for lbl, n in Counter(labels).items() if n > 1]
        if dupes:
            raise LevelConfigError(
                f"Duplicate labels in category set: {format_labels(dupes)}",
                labels=dupes,
            )
        object.__setattr__(self, 'labels', labels)
        object.__setattr__(self, 'ordered', bool(ordered))
        object.__setattr__(self, '_positions', {lbl: i for i, lbl in enumerate(labels)})

    @classmethod
    def from_observed(cls, labels: Iterable[str], ordered: bool = False) -> 'CategorySet':
        """Build a set from possibly repeated labels, keeping first appearance order."""
        return cls(dict.fromkeys(labels), ordered=ordered)

    def __len__(self):
        return len(self.labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __contains__(self, label) -> bool:
        return label in self._positions

    def __repr__(self):
        sep = ' < ' if self.ordered else ', '
        return f"CategorySet({sep.join(repr(lbl) for lbl in self.labels)})"

    def index(self, label: str) -> int:
        try:
            return self._positions[label]
        except KeyError:
            raise KeyError(f"{label!r} is not a level of {self!r}") from None

    def compare(self, a: str, b: str) -> int:
        """Return -1, 0 or 1 comparing two labels by declaration order.

        Only defined for ordered sets; comparing labels of an unordered set
        raises TypeError, as pandas does for unordered categoricals.
        """
        if not self.ordered:
            raise TypeError("Labels of an unordered category set cannot be compared")
        ia, ib = self.index(a), self.index(b)
        return (ia > ib) - (ia < ib)

    def sort_key(self, label: str) -> int:
        if not self.ordered:
            raise TypeError("Labels of an unordered category set cannot be sorted by rank")
        return self.index(label)

    def with_ordered(self, ordered: bool) -> 'CategorySet':
        return CategorySet(self.labels, ordered=ordered)
