"""
Weighted transition table attached to each canonical Markov chain state.

Most contexts in natural text are followed by a single distinct word, so a
table starts out holding just that one code (the scalar form). The first
add() promotes it to an insertion-ordered code -> count dict (the weighted
form). Counts are kept as the narrowest numpy integer that fits them.
"""
from __future__ import annotations

import json
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import numpy as np

from textchain.services.tokenizer import RandomSource

_INT_WIDTHS = [(width, np.iinfo(width)) for width in (np.int8, np.int16, np.int32)]

# Shared int8 scalars; nearly every count fits here, so tables reuse them
_INT8_MIN = int(np.iinfo(np.int8).min)
_INT8_CACHE = tuple(np.int8(n) for n in range(_INT8_MIN, int(np.iinfo(np.int8).max) + 1))


def narrowest_int(number: int):
    """
    Return number as the smallest of int8/int16/int32 that holds it (else a plain int).

    Values in the int8 range come from a shared cache, so equal small counts
    are the same object across all tables.
    """
    if -128 <= number <= 127:
        return _INT8_CACHE[number - _INT8_MIN]
    for width, info in _INT_WIDTHS[1:]:
        if info.min <= number <= info.max:
            return width(number)
    return number


class TransitionTable:
    """
    Multiset of observed next-word codes for one context.

    Scalar form: ``_counts is None`` and ``_value`` is the only code seen.
    Weighted form: ``_counts`` maps code -> count and ``_value`` is unused.
    """

    __slots__ = ("_value", "_counts")

    def __init__(self, initial: Hashable):
        self._value: Optional[Hashable] = initial
        self._counts: Optional[Dict[Hashable, object]] = None

    @classmethod
    def from_counts(cls, items: Iterable[Tuple[Hashable, int]]) -> "TransitionTable":
        """Rebuild a table from (code, count) pairs in their original order."""
        items = [(code, int(count)) for code, count in items]
        if not items:
            raise ValueError("a transition table needs at least one observation")
        table = cls(items[0][0])
        if len(items) > 1 or items[0][1] != 1:
            table._value = None
            table._counts = {code: narrowest_int(count) for code, count in items}
        return table

    @property
    def is_weighted(self) -> bool:
        return self._counts is not None

    def add(self, code: Hashable) -> None:
        """Record one more observation of code."""
        if self._counts is None:
            self._counts = {self._value: narrowest_int(1)}
            self._value = None
        self._counts[code] = narrowest_int(int(self._counts.get(code, 0)) + 1)

    def as_map(self) -> Dict[Hashable, object]:
        if self._counts is None:
            return {self._value: narrowest_int(1)}
        return dict(self._counts)

    def choose_transition(self, rnd: RandomSource) -> Hashable:
        """
        Pick a code with probability proportional to its count.

        Every code is repeated count times in a working list and one element
        is drawn uniformly, so the draw depends on the table's insertion
        order. The random source is advanced once even in the scalar form.
        """
        options: List[Hashable] = []
        for code, count in self.as_map().items():
            options.extend([code] * int(count))
        return options[rnd.randrange(len(options))]

    def size(self) -> int:
        if self._counts is None:
            return 1
        return len(self._counts)

    def total(self) -> int:
        """Total number of observations recorded."""
        if self._counts is None:
            return 1
        return sum(int(count) for count in self._counts.values())

    def __repr__(self) -> str:
        if self._counts is None:
            return f"TransitionTable({self._value!r})"
        return "TransitionTable(%s)" % json.dumps(
            {str(code): int(count) for code, count in self._counts.items()}
        )
