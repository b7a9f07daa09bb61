"""
Collaborators consumed by the Markov chain: a tokenizer and a random source.
"""
from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Tokenizer(Protocol):
    """Splits text into tokens and joins tokens back into readable text."""

    def tokenize(self, text: str) -> List[str]:
        ...

    def join(self, tokens: Sequence[str]) -> str:
        ...


@runtime_checkable
class RandomSource(Protocol):
    """Anything that draws a uniform index in [0, n); random.Random qualifies."""

    def randrange(self, stop: int) -> int:
        ...


class WhitespaceTokenizer:
    """Splits on runs of whitespace and joins with single spaces."""

    def tokenize(self, text: str) -> List[str]:
        return text.strip().split()

    def join(self, tokens: Sequence[str]) -> str:
        return " ".join(tokens)

    def __repr__(self) -> str:
        return "WhitespaceTokenizer()"
