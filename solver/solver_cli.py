"""
solver/solver_cli.py

Interactive solver (human-in-the-loop):
- The solver proposes the best guesses for the current template.
- You play one of them (or any valid word) in your game and type the
  feedback you saw.
- Feedback accepted as: 'gybby', '21001', 'voxxo' or a list '[2, 1, 0, 0, 1]'.
- The solver prints the information actually gained, prunes its candidates
  and proposes again, until the word is found.

The first proposals of a template are the expensive ones; they are cached
per dictionary under the cache directory (see alphadocte/config.py).

Run:
  python -m solver.solver_cli --dictionary data/french_wordlist.txt
  python -m solver.solver_cli --dictionary french --rules motus --size 7 --first-letter c

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from alphadocte.cache import cached_top_guesses
from alphadocte.config import (
    DEFAULT_NUMBER_OF_GUESSES,
    WORDLE_DEFAULT_SIZE,
    load_settings,
    resolve_data_dir,
)
from alphadocte.data_utils import dictionary_name, load_dictionary, resolve_dictionary_path
from alphadocte.entropy import EntropyMaximizer
from alphadocte.exceptions import AlphadocteError, ArgumentError, StateError
from alphadocte.hints import HintType, parse_hints
from alphadocte.rules import RULES_NAMES, create_rules

log = logging.getLogger(__name__)

QUIT_WORDS = {"q", "quit", "exit"}


def initial_template(rules_name: str, size: int, first_letter: Optional[str] = None) -> str:
    """Template known before the first guess: nothing for Wordle, the first letter for Motus."""
    if size <= 0:
        raise ArgumentError("size must be a positive integer")
    if rules_name != "motus":
        return "." * size
    if not first_letter or len(first_letter) != 1 or not first_letter.isalpha():
        raise ArgumentError("motus needs the first letter of the word (--first-letter)")
    return first_letter.lower() + "." * (size - 1)


def cache_path_for(dictionary_path: Path, enabled: bool = True) -> Optional[Path]:
    if not enabled:
        return None
    try:
        settings = load_settings()
    except StateError as e:
        log.warning("guess cache disabled: %s", e)
        return None
    return settings.cache_path(dictionary_name(dictionary_path))


def format_proposals(guesses: List[Tuple[str, float]], solver: EntropyMaximizer) -> str:
    lines = []
    for i, (word, entropy) in enumerate(guesses, 1):
        mark = "*" if solver.is_potential_solution(word) else " "
        lines.append(f"  {i:>2}. {word} {mark} (H={entropy:.3f} bits)")
    return "\n".join(lines)


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _ask(prompt: str) -> Optional[str]:
    text = input(prompt).strip().lower()
    if text in QUIT_WORDS:
        return None
    return text


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Interactive Wordle/Motus solver (manual feedback)")
    ap.add_argument("--dictionary", required=True, help="Word list path, or dictionary name in the data directory")
    ap.add_argument("--rules", choices=RULES_NAMES, default="wordle")
    ap.add_argument("--size", type=int, default=WORDLE_DEFAULT_SIZE, help="Number of letters of the word")
    ap.add_argument("--first-letter", default=None, help="First letter of the word (motus)")
    ap.add_argument("--guesses", type=positive_int, default=DEFAULT_NUMBER_OF_GUESSES, help="Number of proposals per turn")
    ap.add_argument("--no-cache", action="store_true", help="Do not read nor write the guess cache")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        dictionary_path = resolve_dictionary_path(args.dictionary, resolve_data_dir(os.environ))
        dictionary = load_dictionary(dictionary_path)
        rules = create_rules(args.rules, dictionary, word_size=args.size)
        template = initial_template(args.rules, args.size, args.first_letter)
    except (OSError, AlphadocteError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    solver = EntropyMaximizer(rules)
    solver.set_template(template)
    cache_path = cache_path_for(dictionary_path, enabled=not args.no_cache)

    print("\nAfter EACH guess you play, type the feedback you saw.")
    print("Accepted: g/y/b, 2/1/0, v/o/x or [2,1,0,...]. Type 'quit' to exit.\n")

    first_turn = True
    proposals = None
    while True:
        solutions = solver.potential_solutions
        if not solutions:
            print("No candidates remain. Check your feedback inputs.")
            return 0
        if len(solutions) == 1:
            print(f"The word is: {solutions[0]}")
            return 0

        print(f"Remaining candidates: {len(solutions)} ({solver.compute_current_entropy():.3f} bits)")
        if len(solutions) <= 10:
            print("Candidates:", ", ".join(solutions))

        if proposals is None:
            if first_turn:
                proposals = cached_top_guesses(solver, args.guesses, dictionary_path, cache_path)
                first_turn = False
            else:
                proposals = solver.compute_next_guesses(args.guesses)
        print("Top suggestions (* may be the word):")
        print(format_proposals(proposals, solver))

        guess = _ask("Type your guess (or press Enter to use #1): ")
        if guess is None:
            print("bye!")
            return 0
        if not guess:
            guess = proposals[0][0]
        if not rules.is_guess_valid(guess, template):
            print(f"'{guess}' is not a valid guess for {solver.template}.")
            continue

        while True:
            fb = _ask("Feedback (g/y/b or 2/1/0 or [..]): ")
            if fb is None:
                print("bye!")
                return 0
            try:
                hints = parse_hints(fb, len(guess))
                break
            except ArgumentError as e:
                print("Invalid feedback:", e)

        if all(h == HintType.CORRECT for h in hints):
            print("Solved!")
            return 0

        gained = solver.compute_actual_entropy(guess, hints)
        if gained < 0:
            print("No candidate gives this feedback, the word may not be in the dictionary.")
        else:
            print(f"Information gained: {gained:.3f} bits")

        try:
            solver.add_hint(guess, hints)
            proposals = None
        except AlphadocteError as e:
            print("Cannot use this hint:", e)


if __name__ == "__main__":
    sys.exit(main())
