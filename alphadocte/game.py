"""
game.py

One round of a Wordle/Motus-like game.

Lifecycle
---------
Game(rules) -> set_word(word) -> start() -> try_guess(word) ... until is_over

    pending  --start()-->  started  --try_guess()-->  over (won or out of guesses)

reset() goes back to pending and forgets the word; the rules are kept.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from alphadocte.exceptions import ArgumentError, StateError
from alphadocte.hints import HintType, compute_hints
from alphadocte.rules import GameRules

log = logging.getLogger(__name__)


class Game:
    def __init__(self, rules: GameRules) -> None:
        if rules is None:
            raise ArgumentError("rules cannot be null")

        self._rules = rules

        # Round state
        self._word: str = ""
        self._guesses: List[str] = []
        self._hints: List[List[HintType]] = []
        self._started = False
        self._won = False

    # -------------------------
    # State
    # -------------------------
    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def word(self) -> str:
        """The secret word, empty if not set yet."""
        return self._word

    @property
    def tried_guesses(self) -> List[str]:
        return list(self._guesses)

    @property
    def guesses_hints(self) -> List[List[HintType]]:
        return [list(h) for h in self._hints]

    @property
    def nb_guess(self) -> int:
        return len(self._guesses)

    @property
    def has_started(self) -> bool:
        return self._started

    @property
    def is_won(self) -> bool:
        return self._won

    @property
    def is_over(self) -> bool:
        max_guesses = self._rules.max_guesses
        return self._won or (max_guesses != 0 and len(self._guesses) >= max_guesses)

    # -------------------------
    # Core API
    # -------------------------
    def set_word(self, word: str) -> None:
        if not self._rules.is_solution_valid(word):
            raise ArgumentError(f"the word {word} is not a valid solution")
        if self._started and word != self._word:
            raise StateError("Cannot change word while the game is playing.")
        self._word = word

    def set_rules(self, rules: Optional[GameRules]) -> None:
        """
        Swap the rules. The round is reset if it had started, and the secret
        is forgotten if the new rules do not accept it.
        """
        if rules is None or rules is self._rules:
            return

        if self._started:
            self.reset()

        self._rules = rules

        if self._word and not self._rules.is_solution_valid(self._word):
            self._word = ""

    def start(self) -> None:
        if self._started:
            raise StateError("Cannot start game: game has already been started")
        if not self._word:
            raise StateError("Cannot start game: no word has been set")
        self._started = True
        log.debug("game started, %d letters", len(self._word))

    def try_guess(self, word: str) -> List[HintType]:
        """
        Try `word` against the secret and return its hints.

        Raises
        ------
        StateError
            If the game has not started, is over, or `word` is not a valid guess.
        """
        if not self._started:
            raise StateError("Cannot try a guess: game has not been started")
        if self.is_over:
            raise StateError("Cannot try a guess: game is over")
        if not self._rules.is_guess_valid(word, self._word):
            raise StateError("Cannot try a guess: invalid guess")

        hints = compute_hints(word, self._word)
        self._guesses.append(word)
        self._hints.append(hints)
        self._won = all(h == HintType.CORRECT for h in hints)

        log.debug("guess %d: %s won=%s", len(self._guesses), word, self._won)
        return list(hints)

    def reset(self) -> None:
        self._started = False
        self._won = False
        self._guesses = []
        self._hints = []
        self._word = ""
