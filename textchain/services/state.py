"""
N-gram context states.

A State is the encoded sequence of (up to `order`) words preceding a point
in the text. Equality and hashing only look at the encoded words, so states
built from the same words through the same dictionary collapse onto one
canonical entry in the chain. The dictionary is passed to every operation
rather than stored, and states from different dictionaries must never be
mixed in one table.

Variants exist for 0, 1, 2 and N words purely to keep per-state memory low.
Always go through create_state() (or lookup_state()) so that equal word
sequences end up as the same variant.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Optional, Sequence

from textchain.services.coding_dict import CodingDictionary
from textchain.services.tokenizer import RandomSource
from textchain.services.transition_table import TransitionTable


class State(ABC):
    """Base class; `_transitions` is attached to canonical instances only and ignored by ==."""

    __slots__ = ("_transitions",)

    def __init__(self):
        self._transitions: Optional[TransitionTable] = None

    # --- words ---
    @abstractmethod
    def word_count(self) -> int:
        """Number of words in this context."""

    @abstractmethod
    def get_word(self, index: int, dictionary: CodingDictionary) -> str:
        """
        Decode the index-th word of this context.

        Raises:
            IndexError: if index is not in [0, word_count())
        """

    def get_words(self, dictionary: CodingDictionary) -> List[str]:
        return [self.get_word(i, dictionary) for i in range(self.word_count())]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.word_count():
            raise IndexError(
                f"word index {index} out of range for a {self.word_count()}-word state"
            )

    # --- transitions ---
    def add_transition(self, next_word: str, dictionary: CodingDictionary) -> None:
        code = dictionary.encode(next_word)
        if self._transitions is None:
            self._transitions = TransitionTable(code)
        else:
            self._transitions.add(code)

    def choose_transition(self, rnd: RandomSource, dictionary: CodingDictionary) -> str:
        """Randomly pick the next word according to the recorded counts."""
        return dictionary.decode(self._transitions.choose_transition(rnd))

    def transition_count(self) -> int:
        if self._transitions is None:
            return 0
        return self._transitions.size()

    def get_transitions(self) -> Dict[Hashable, object]:
        if self._transitions is None:
            return {}
        return self._transitions.as_map()

    @property
    def transition_table(self) -> Optional[TransitionTable]:
        return self._transitions

    @transition_table.setter
    def transition_table(self, table: Optional[TransitionTable]) -> None:
        self._transitions = table

    # --- identity ---
    @abstractmethod
    def _key(self) -> tuple:
        """Encoded words; the sole basis of equality and hashing."""

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._key()!r}"


class StartState(State):
    """The empty context that precedes the first word of every text."""

    __slots__ = ()

    def word_count(self) -> int:
        return 0

    def get_word(self, index: int, dictionary: CodingDictionary) -> str:
        raise IndexError(f"word index {index} out of range for the start state")

    def _key(self) -> tuple:
        return ()


class UnigramState(State):
    __slots__ = ("_w0",)

    def __init__(self, code: Hashable):
        super().__init__()
        self._w0 = code

    def word_count(self) -> int:
        return 1

    def get_word(self, index: int, dictionary: CodingDictionary) -> str:
        self._check_index(index)
        return dictionary.decode(self._w0)

    def _key(self) -> tuple:
        return (self._w0,)


class BigramState(State):
    __slots__ = ("_w0", "_w1")

    def __init__(self, first: Hashable, second: Hashable):
        super().__init__()
        self._w0 = first
        self._w1 = second

    def word_count(self) -> int:
        return 2

    def get_word(self, index: int, dictionary: CodingDictionary) -> str:
        self._check_index(index)
        return dictionary.decode(self._w1 if index else self._w0)

    def _key(self) -> tuple:
        return (self._w0, self._w1)


class NgramState(State):
    __slots__ = ("_words",)

    def __init__(self, codes: Sequence[Hashable]):
        super().__init__()
        self._words = tuple(codes)

    def word_count(self) -> int:
        return len(self._words)

    def get_word(self, index: int, dictionary: CodingDictionary) -> str:
        self._check_index(index)
        return dictionary.decode(self._words[index])

    def _key(self) -> tuple:
        return self._words


def _is_start(words: Sequence[str]) -> bool:
    return len(words) == 0 or (len(words) == 1 and words[0] == "")


def _from_codes(codes: Sequence[Hashable]) -> State:
    if len(codes) == 1:
        return UnigramState(codes[0])
    if len(codes) == 2:
        return BigramState(codes[0], codes[1])
    return NgramState(codes)


def create_state(dictionary: CodingDictionary, words: Sequence[str] = ()) -> State:
    """
    Build the State variant matching len(words), registering unseen words.

    A lone empty-string word is the start context, the same as no words at all.
    """
    if _is_start(words):
        return StartState()
    return _from_codes([dictionary.encode(w) for w in words])


def lookup_state(dictionary: CodingDictionary, words: Sequence[str] = ()) -> Optional[State]:
    """
    Like create_state(), but leaves the dictionary untouched.

    Returns None if any word was never registered, since no trained state
    can contain it.
    """
    if _is_start(words):
        return StartState()
    codes = []
    for word in words:
        code = dictionary.find_code(word)
        if code is None:
            return None
        codes.append(code)
    return _from_codes(codes)
