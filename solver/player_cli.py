"""
solver/player_cli.py

Play Wordle or Motus against a random secret word from a dictionary.

Each turn shows the template (known letters, '.' elsewhere), reads a guess
and prints its feedback under the word:
  g = correct, y = elsewhere in the word, b = not in the word (or used too often)
(coloured cells on a terminal, unless --no-colour is given)

Run:
  python -m solver.player_cli --dictionary data/french_wordlist.txt
  python -m solver.player_cli --dictionary french --rules motus --max-guesses 6 --seed 1

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from alphadocte.config import DEFAULT_MAX_GUESSES, WORDLE_DEFAULT_SIZE, resolve_data_dir
from alphadocte.data_utils import load_dictionary, resolve_dictionary_path
from alphadocte.exceptions import AlphadocteError, StateError
from alphadocte.game import Game
from alphadocte.hints import HintType, format_hints
from alphadocte.rules import RULES_NAMES, GameRules, create_rules
from alphadocte.sampler import WordSampler

QUIT_WORDS = {"q", "quit", "exit"}

_COLOURS = {HintType.CORRECT: "\033[1;42m",    # green background
            HintType.MISPLACED: "\033[1;43m",  # yellow
            HintType.WRONG: "\033[1;47m"}      # white/grey
_RESET = "\033[0m"


def colourise(word: str, hints: Sequence[HintType]) -> str:
    """Return ANSI-coloured representation of `word`, one coloured cell per hint."""
    return "".join(f"{_COLOURS[HintType(h)]} {letter.upper()} {_RESET}" for letter, h in zip(word, hints))


def render_guess(word: str, hints: Sequence[HintType]) -> str:
    """'arbre', [C, W, M, W, W] -> 'a r b r e\\ng b y b b'"""
    return " ".join(word) + "\n" + " ".join(format_hints(hints))


def play_round(game: Game, rules: GameRules, secret: str, colour: bool = False) -> Optional[bool]:
    """Play one game; True if won, False if lost, None if the player quit."""
    game.reset()
    game.set_word(secret)
    game.start()

    limit = rules.max_guesses or "unlimited"
    while not game.is_over:
        print(f"\n[{game.nb_guess + 1}/{limit}]  {' '.join(rules.get_template(game))}")
        guess = input("Your guess: ").strip().lower()
        if guess in QUIT_WORDS:
            return None
        try:
            hints = game.try_guess(guess)
        except StateError:
            print(f"'{guess}' is not a valid guess ({len(secret)} letters, in the dictionary).")
            continue
        print(colourise(guess, hints) if colour else render_guess(guess, hints))

    return game.is_won


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play Wordle/Motus in the terminal")
    ap.add_argument("--dictionary", required=True, help="Word list path, or dictionary name in the data directory")
    ap.add_argument("--rules", choices=RULES_NAMES, default="wordle")
    ap.add_argument("--size", type=int, default=WORDLE_DEFAULT_SIZE, help="Number of letters (wordle)")
    ap.add_argument("--max-guesses", type=int, default=DEFAULT_MAX_GUESSES, help="0 for unlimited")
    ap.add_argument("--seed", type=int, default=None, help="Seed of the secret word draws")
    ap.add_argument("--no-colour", action="store_true", help="Print the feedback as g/y/b letters only")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        path = resolve_dictionary_path(args.dictionary, resolve_data_dir(os.environ))
        rules = create_rules(args.rules, load_dictionary(path), word_size=args.size, max_guesses=args.max_guesses)
    except (OSError, AlphadocteError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sampler = WordSampler(rules.dictionary, seed=args.seed)
    colour = sys.stdout.isatty() and not args.no_colour
    game = Game(rules)

    while True:
        secret = sampler.choice_word()
        result = play_round(game, rules, secret, colour=colour)
        if result is None:
            print(f"The word was: {secret}. bye!")
            return 0
        if result:
            print(f"Won in {game.nb_guess} guess(es)!")
        else:
            print(f"Lost! The word was: {secret}")

        again = input("Play again? [y/N] ").strip().lower()
        if again not in {"y", "yes"}:
            return 0


if __name__ == "__main__":
    sys.exit(main())
