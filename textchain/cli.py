#!/usr/bin/env python3
"""
Train a Markov chain on a text corpus and print generated samples.

Usage:
    textchain-train --corpus data/alice.txt --order 2 --length 500 --count 5
    textchain-train --corpus data/alice.txt --dictionary ShortArrayCodingDictionary \\
        --stats --save models/alice.json
    textchain-train --load models/alice.json --count 3
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

from textchain.config import settings
from textchain.services.coding_dict import DICTIONARY_TYPES, create_dictionary
from textchain.services.markov_chain import MarkovChain


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train an order-N Markov chain and generate text")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--corpus", type=str, help="Path to a UTF-8 text corpus")
    source.add_argument("--load", type=str, help="Path to a chain saved with --save")

    parser.add_argument("--order", type=int, default=settings.MARKOV_ORDER, help="Chain order")
    parser.add_argument("--dictionary", type=str, default=settings.MARKOV_DICTIONARY,
                        choices=sorted(DICTIONARY_TYPES), help="Token coding strategy")
    parser.add_argument("--whole-text", action="store_true",
                        help="Train on the whole file at once instead of line by line")
    parser.add_argument("--length", type=int, default=settings.MARKOV_DEFAULT_LENGTH,
                        help="Minimum length (characters) of each generated text")
    parser.add_argument("--count", type=int, default=3, help="Number of texts to generate")
    parser.add_argument("--seed", type=int, default=settings.MARKOV_RANDOM_SEED, help="Random seed")
    parser.add_argument("--stats", action="store_true", help="Print chain statistics")
    parser.add_argument("--save", type=str, default=None, help="Save the trained chain as JSON")

    return parser.parse_args(argv)


def build_chain(args: argparse.Namespace) -> MarkovChain:
    rnd = random.Random(args.seed)
    if args.load:
        return MarkovChain.from_json(Path(args.load).read_text(encoding="utf-8"), rnd=rnd)

    chain = MarkovChain(args.order, dictionary=create_dictionary(args.dictionary), rnd=rnd)
    text = Path(args.corpus).read_text(encoding="utf-8")
    if args.whole_text:
        chain.train(text)
    else:
        chain.train_many(line for line in text.splitlines() if line.strip())
    return chain


def print_stats(chain: MarkovChain) -> None:
    stats = chain.get_stats()
    print(f"📊 Order {stats.order} Markov chain with {stats.state_count} states "
          f"({stats.vocabulary_size} distinct tokens, {stats.total_observations} observations)")
    for transitions, states in sorted(stats.transition_histogram.items(), key=lambda kv: -kv[1]):
        print(f"  {states} states with {transitions} transitions")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        chain = build_chain(args)
    except (OSError, ValueError, KeyError) as e:
        print(f"❌ Could not build chain: {e}", file=sys.stderr)
        return 1

    if chain.count_states() == 0:
        print("❌ Corpus contains no tokens", file=sys.stderr)
        return 1

    if args.stats:
        print_stats(chain)

    for i in range(args.count):
        text = chain.generate(args.length)
        print(f"\n--- Sample {i + 1} ({len(text)} chars) ---")
        print(text)

    if args.save:
        output_path = Path(args.save)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(chain.to_json(), encoding="utf-8")
        print(f"\n✅ Saved chain to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
