"""
Shared pytest fixtures for Markov chain tests.
"""
import random
from typing import List

import pytest

from textchain.services.coding_dict import ShortHashArrayCodingDictionary
from textchain.services.markov_chain import MarkovChain
from textchain.services.tokenizer import WhitespaceTokenizer


# Small corpus whose order-2 transition table is easy to check by hand
SAMPLE_SENTENCES = [
    "This is foo.",
    "This is bar.",
    "This is baz.",
    "Poshel ti na huy.",
    "Poshel na huy.",
    "Poshel ti na huy.",
    "Poshel ti v zhopu.",
    "Poshel ti v zad.",
    "Poshel ti v pizdu.",
]


class FixedRandom:
    """Random source that always returns the same index (clamped to the range)."""

    def __init__(self, index: int = 0):
        self.index = index
        self.calls: List[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return min(self.index, stop - 1)


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom: fixed_random(2) always draws index 2."""
    return FixedRandom


@pytest.fixture
def sample_sentences() -> List[str]:
    return list(SAMPLE_SENTENCES)


@pytest.fixture
def sample_corpus() -> List[str]:
    """Longer free-form corpus for generation tests."""
    return [
        "Alice was beginning to get very tired of sitting by her sister on the bank",
        "and of having nothing to do once or twice she had peeped into the book her sister was reading",
        "but it had no pictures or conversations in it",
        "and what is the use of a book thought Alice without pictures or conversations",
        "So she was considering in her own mind as well as she could",
        "for the hot day made her feel very sleepy and stupid",
    ]


@pytest.fixture
def bigram_chain(sample_sentences) -> MarkovChain:
    """Order-2 chain trained on SAMPLE_SENTENCES with a seeded random source."""
    chain = MarkovChain(
        2,
        tokenizer=WhitespaceTokenizer(),
        dictionary=ShortHashArrayCodingDictionary(),
        rnd=random.Random(0),
    )
    chain.train_many(sample_sentences)
    return chain


@pytest.fixture
def corpus_path(sample_corpus, tmp_path):
    """Write sample_corpus to a temporary text file."""
    file_path = tmp_path / "corpus.txt"
    file_path.write_text("\n".join(sample_corpus) + "\n", encoding="utf-8")
    return file_path
