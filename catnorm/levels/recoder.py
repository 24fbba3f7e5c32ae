"""Level recoder: many-to-one relabeling of a Factor.

Rules are validated as a whole before any value is touched. A rule's target
is a new label or DROP; its sources are old labels or the ABSENT / REJECTED
markers, which lets a prior missing kind be renamed or dropped explicitly.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .category_set import CategorySet
from .errors import LevelConfigError, format_labels
from .factor import Factor
from .values import (
    REJECTED, AbsentMissing, CategoricalValue, Label, RejectedMissing, is_missing,
)

log = logging.getLogger("catnorm.levels.recoder")


class _DropMarker:
    """Rule target meaning 'map every source to REJECTED'."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return '<DROP>'

    def __reduce__(self):
        return (type(self), ())


DROP = _DropMarker()

Source = Union[str, AbsentMissing, RejectedMissing]
Target = Union[str, _DropMarker]


def _as_sources(sources) -> Tuple[Source, ...]:
    # a bare label or marker is a one-element source list
    if isinstance(sources, str) or is_missing(sources):
        sources = [sources]
    out = []
    for src in sources:
        if not (isinstance(src, str) or is_missing(src)):
            raise LevelConfigError(
                f"Rule sources must be labels, ABSENT or REJECTED, got {src!r}",
                labels=[src],
            )
        if src not in out:
            out.append(src)
    return tuple(out)


@dataclass(frozen=True)
class RecodeRule:
    target: Target
    sources: Tuple[Source, ...]

    @property
    def drops(self) -> bool:
        return self.target is DROP


@dataclass(frozen=True)
class RecodeRules:
    """Ordered recoding rules. Declaration order defines the new level order."""
    rules: Tuple[RecodeRule, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> 'RecodeRules':
        return cls.from_pairs(mapping.items())

    @classmethod
    def from_pairs(cls, pairs: Iterable) -> 'RecodeRules':
        rules = []
        for pair in pairs:
            if isinstance(pair, RecodeRule):
                rules.append(pair)
                continue
            target, sources = pair
            if not (isinstance(target, str) or target is DROP):
                raise LevelConfigError(
                    f"Rule targets must be labels or DROP, got {target!r}",
                    labels=[target],
                )
            rules.append(RecodeRule(target, _as_sources(sources)))
        return cls(tuple(rules))

    @classmethod
    def coerce(cls, rules) -> 'RecodeRules':
        if rules is None:
            return cls()
        if isinstance(rules, RecodeRules):
            return rules
        if isinstance(rules, Mapping):
            return cls.from_mapping(rules)
        return cls.from_pairs(rules)

    def __iter__(self):
        return iter(self.rules)

    def __len__(self):
        return len(self.rules)

    def source_map(self) -> Dict[Source, Target]:
        """Map each source to its target, raising if a source is claimed twice."""
        counts = Counter(src for rule in self.rules for src in rule.sources)
        claimed_twice = [src for src, n in counts.items() if n > 1]
        if claimed_twice:
            raise LevelConfigError(
                f"Labels claimed by more than one rule: {format_labels(claimed_twice)}",
                labels=claimed_twice,
            )
        return {src: rule.target for rule in self.rules for src in rule.sources}

    def validate(self, levels: CategorySet) -> Dict[Source, Target]:
        """Check the rules against ``levels`` and return the source map."""
        source_map = self.source_map()
        unknown = [src for src in source_map
                   if isinstance(src, str) and src not in levels]
        if unknown:
            raise LevelConfigError(
                f"Rules reference labels not in {levels!r}: {format_labels(unknown)}",
                labels=unknown,
            )
        return source_map


def recode(factor: Factor, rules, *, exhaustive: bool = False) -> Factor:
    """Remap the labels of ``factor`` according to ``rules``.

    Args:
        factor: the Factor to recode; it is not modified
        rules: RecodeRules, a mapping of target -> sources, or
            (target, sources) pairs
        exhaustive: when True, labels not named by any rule become REJECTED
            instead of passing through

    Returns:
        A new Factor, index-aligned with ``factor``. Its levels are the rule
        targets in declaration order followed by pass-through labels in
        their original order.

    Raises:
        LevelConfigError: a source is claimed by two rules, or names a label
            that is not a level of ``factor``
    """
    rules = RecodeRules.coerce(rules)
    source_map = rules.validate(factor.levels)

    new_labels: List[str] = [rule.target for rule in rules if not rule.drops]
    if not exhaustive:
        new_labels.extend(lbl for lbl in factor.levels if lbl not in source_map)
    new_levels = CategorySet.from_observed(new_labels, ordered=factor.levels.ordered)
    log.debug("recode %r -> %r (exhaustive=%s)", factor.levels, new_levels, exhaustive)

    def convert(value: CategoricalValue) -> CategoricalValue:
        key = value.value if isinstance(value, Label) else value
        if key in source_map:
            target = source_map[key]
            return REJECTED if target is DROP else Label(target)
        if is_missing(value) or not exhaustive:
            return value
        return REJECTED

    return Factor([convert(v) for v in factor], new_levels,
                  absent_as_level=factor.absent_as_level)


def collapse(factor: Factor, rules=None, *, exhaustive: bool = False, **named) -> Factor:
    """Keyword form of ``recode``, as in ``collapse(f, No=['N', 'n'], Yes='Y')``.

    Positional ``rules`` come first, keyword rules follow in call order.
    """
    pairs = list(RecodeRules.coerce(rules))
    pairs.extend(RecodeRule(target, _as_sources(sources)) for target, sources in named.items())
    return recode(factor, RecodeRules(tuple(pairs)), exhaustive=exhaustive)


def relabel(factor: Factor, func: Callable[[str], str]) -> Factor:
    """Apply ``func`` to every level label.

    Labels that collide after relabeling are merged at the position of the
    first one.
    """
    mapping: Dict[str, str] = {}
    for lbl in factor.levels:
        new = func(lbl)
        if not isinstance(new, str):
            raise LevelConfigError(
                f"relabel function returned {new!r} for {lbl!r}; labels must be strings",
                labels=[lbl],
            )
        mapping[lbl] = new
    grouped: Dict[str, List[str]] = {}
    for old, new in mapping.items():
        grouped.setdefault(new, []).append(old)
    return recode(factor, RecodeRules.from_mapping(grouped))


def drop_unused(factor: Factor, only: Optional[Iterable[str]] = None) -> Factor:
    """Remove levels with no observations, optionally only those in ``only``."""
    observed = set(factor.observed_labels())
    if isinstance(only, str):
        only = [only]
    candidates = set(factor.levels) if only is None else set(only)
    unknown = [lbl for lbl in candidates if lbl not in factor.levels]
    if unknown:
        raise LevelConfigError(
            f"Cannot drop labels not in {factor.levels!r}: {format_labels(sorted(unknown))}",
            labels=unknown,
        )
    kept = [lbl for lbl in factor.levels if lbl in observed or lbl not in candidates]
    return Factor(factor.values, CategorySet(kept, ordered=factor.levels.ordered),
                  absent_as_level=factor.absent_as_level)
