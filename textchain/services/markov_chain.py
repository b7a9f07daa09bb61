"""
Order-N Markov chain text generator.

Training records, for every token of a text, which token followed the (up
to N) tokens before it. Contexts are canonicalized: the chain keeps exactly
one State instance per distinct encoded context, and that instance carries
the context's TransitionTable. Generation walks the chain from the start
context, backing off to shorter contexts whenever the exact one was never
seen during training.

Usage:
    chain = MarkovChain(order=2)
    chain.train("This is foo.")
    chain.train("This is bar.")
    text = chain.generate(100)

Not thread-safe: callers sharing a chain must serialize train/generate.
"""
from __future__ import annotations

import json
import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from textchain.services.coding_dict import (
    CodingDictionary,
    ShortHashArrayCodingDictionary,
    create_dictionary,
)
from textchain.services.state import State, create_state, lookup_state
from textchain.services.tokenizer import RandomSource, Tokenizer, WhitespaceTokenizer
from textchain.services.transition_table import TransitionTable

logger = logging.getLogger(__name__)


class UntrainedChainError(RuntimeError):
    """Raised when generating from a chain that has never been trained."""


@dataclass
class ChainStats:
    """Summary of a trained chain."""
    order: int = 0
    state_count: int = 0
    vocabulary_size: int = 0
    total_observations: int = 0
    # number of distinct transitions -> number of states having that many
    transition_histogram: Dict[int, int] = field(default_factory=dict)


class MarkovChain:
    """
    Markov chain over word tokens with a canonical (flyweight) state table.

    The chain owns its coding dictionary, tokenizer and random source. States
    and their transition tables only ever grow.
    """

    def __init__(
        self,
        order: int,
        tokenizer: Optional[Tokenizer] = None,
        dictionary: Optional[CodingDictionary] = None,
        rnd: Optional[RandomSource] = None,
    ):
        """
        Args:
            order: Maximum number of preceding tokens in a context (fixed for life)
            tokenizer: Splits training text and joins generated tokens
            dictionary: Token coding strategy; ShortHashArrayCodingDictionary is the
                fastest to train, ShortArrayCodingDictionary the smallest
            rnd: Random source for sampling; pass random.Random(seed) for
                reproducible output
        """
        if order < 0:
            raise ValueError(f"order must be >= 0, got {order}")
        self._order = order
        self._tokenizer = tokenizer or WhitespaceTokenizer()
        self._dict = dictionary if dictionary is not None else ShortHashArrayCodingDictionary()
        self._rnd = rnd or random.Random()
        # canonical state -> itself, in creation order
        self._states: Dict[State, State] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def order(self) -> int:
        return self._order

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def coding_dictionary(self) -> CodingDictionary:
        return self._dict

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train(self, text: str) -> None:
        """Record every N-gram transition found in text."""
        tokens = self._tokenizer.tokenize(text)
        for i, token in enumerate(tokens):
            context = tokens[max(0, i - self._order):i]
            self._add_or_update_state(create_state(self._dict, context), token)
        logger.debug(f"[MARKOV] Trained on {len(tokens)} tokens, {len(self._states)} states")

    def train_many(self, lines: Iterable[str]) -> "MarkovChain":
        """Train on each line separately, so contexts never span lines."""
        for line in lines:
            self.train(line)
        return self

    def _add_or_update_state(self, state: State, next_word: str) -> None:
        canonical = self._states.setdefault(state, state)
        canonical.add_transition(next_word, self._dict)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(self, max_length: int) -> str:
        """
        Generate random text of at least max_length characters.

        Whole tokens are appended until the joined text reaches max_length, so
        the result is usually a little longer than requested. Returns "" when
        max_length <= 0.

        Raises:
            UntrainedChainError: if the chain was never trained (the start
                state backoff depends on at least one training call)
        """
        generated: List[str] = []
        text = ""
        while len(text) < max_length:
            if generated:
                context: Sequence[str] = generated[-self._order:] if self._order else []
            else:
                context = [""]
            state = self._find_state(context)
            generated.append(state.choose_transition(self._rnd, self._dict))
            text = self._tokenizer.join(generated)
        return text

    def _find_state(self, words: Sequence[str]) -> State:
        """Back off from the full context to shorter ones until a trained state matches."""
        while True:
            state = lookup_state(self._dict, words)
            if state is not None and state in self._states:
                return self._states[state]
            if not words or words == [""]:
                raise UntrainedChainError("generate() called on a chain that has not been trained")
            words = words[1:]

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def count_states(self) -> int:
        return len(self._states)

    def list_states(self) -> List[State]:
        """Canonical states in the order they were created."""
        return list(self._states)

    def get_state(self, words: Sequence[str]) -> Optional[State]:
        """Canonical state for words, or None; never registers new words."""
        state = lookup_state(self._dict, words)
        return None if state is None else self._states.get(state)

    def state_to_text(self, state: State) -> str:
        return self._tokenizer.join(state.get_words(self._dict))

    def transitions_to_dict(self, state: State) -> Dict[str, int]:
        return {
            self._dict.decode(code): int(count)
            for code, count in state.get_transitions().items()
        }

    def get_stats(self) -> ChainStats:
        histogram = Counter(state.transition_count() for state in self._states)
        return ChainStats(
            order=self._order,
            state_count=len(self._states),
            vocabulary_size=self._dict.size(),
            total_observations=sum(
                state.transition_table.total() for state in self._states
            ),
            transition_histogram=dict(sorted(histogram.items())),
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": self._order,
            "dictionary": type(self._dict).__name__,
            "states": [
                {
                    "words": state.get_words(self._dict),
                    "transitions": self.transitions_to_dict(state),
                }
                for state in self._states
            ],
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        tokenizer: Optional[Tokenizer] = None,
        rnd: Optional[RandomSource] = None,
    ) -> "MarkovChain":
        """Rebuild a chain saved with to_dict(); codes are re-assigned by a fresh dictionary."""
        chain = cls(
            int(data["order"]),
            tokenizer=tokenizer,
            dictionary=create_dictionary(data.get("dictionary", "ShortHashArrayCodingDictionary")),
            rnd=rnd,
        )
        for entry in data.get("states", []):
            state = create_state(chain._dict, entry["words"])
            state.transition_table = TransitionTable.from_counts(
                (chain._dict.encode(word), count)
                for word, count in entry["transitions"].items()
            )
            chain._states[state] = state
        logger.info(f"[MARKOV] Loaded order {chain.order} chain with {chain.count_states()} states")
        return chain

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(
        cls,
        s: str,
        tokenizer: Optional[Tokenizer] = None,
        rnd: Optional[RandomSource] = None,
    ) -> "MarkovChain":
        return cls.from_dict(json.loads(s), tokenizer=tokenizer, rnd=rnd)


def train_from_corpus(
    lines: Iterable[str],
    order: int = 2,
    dictionary: Optional[CodingDictionary] = None,
    rnd: Optional[RandomSource] = None,
) -> MarkovChain:
    chain = MarkovChain(order, dictionary=dictionary, rnd=rnd)
    chain.train_many(lines)
    return chain
