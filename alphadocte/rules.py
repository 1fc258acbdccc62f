"""
Game rules: which words are valid guesses/solutions and how the template
shown to the player is built.

Two variants:
- Motus:  any word length, the first letter is always revealed and every
          guess must start with it.
- Wordle: fixed word length, any dictionary word of that length is a guess.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from alphadocte.config import DEFAULT_MAX_GUESSES, WORDLE_DEFAULT_SIZE
from alphadocte.dictionary import Dictionary, FixedSizeDictionary
from alphadocte.exceptions import ArgumentError
from alphadocte.hints import compute_template

if TYPE_CHECKING:
    from alphadocte.game import Game


class GameRules(ABC):
    """Interface shared by every rule variant."""

    def __init__(self, dictionary: Dictionary, max_guesses: int = DEFAULT_MAX_GUESSES) -> None:
        if dictionary is None or len(dictionary) == 0:
            raise ArgumentError("dictionary is missing or empty")
        self._dictionary = dictionary
        self._max_guesses = 0
        self.max_guesses = max_guesses

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    @property
    def max_guesses(self) -> int:
        """Maximum number of guesses for one game, 0 meaning unlimited."""
        return self._max_guesses

    @max_guesses.setter
    def max_guesses(self, value: int) -> None:
        if not isinstance(value, int) or value < 0:
            raise ArgumentError("max_guesses must be a non-negative integer")
        self._max_guesses = value

    @abstractmethod
    def is_guess_valid(self, word: str, solution: str) -> bool:
        """
        Check that `word` can be tried against `solution`.
        Does not check that the solution itself is valid.
        """

    @abstractmethod
    def is_solution_valid(self, word: str) -> bool:
        """Check that `word` can be the secret of a game."""

    @abstractmethod
    def get_template(self, game: "Game") -> str:
        """
        Template of the secret of `game` from the hints collected so far:
        the confirmed letters, and '.' where nothing is known yet.
        """

    def _base_template(self, game: "Game") -> str:
        if not game.word:
            raise ArgumentError("no word has been set.")
        return compute_template(len(game.word), game.tried_guesses, game.guesses_hints)


class MotusGameRules(GameRules):
    def is_guess_valid(self, word: str, solution: str) -> bool:
        if not solution:
            return False
        return (
            len(word) == len(solution)
            and word[0] == solution[0]
            and self._dictionary.contains(word)
        )

    def is_solution_valid(self, word: str) -> bool:
        return bool(word) and self._dictionary.contains(word)

    def get_template(self, game: "Game") -> str:
        pattern = self._base_template(game)
        # first letter is always known
        return game.word[0] + pattern[1:]


class WordleGameRules(GameRules):
    def __init__(self, dictionary: FixedSizeDictionary, max_guesses: int = DEFAULT_MAX_GUESSES) -> None:
        if dictionary is not None and not isinstance(dictionary, FixedSizeDictionary):
            raise ArgumentError("wordle rules need a FixedSizeDictionary")
        super().__init__(dictionary, max_guesses)

    @property
    def word_size(self) -> int:
        return self._dictionary.word_size

    def is_guess_valid(self, word: str, solution: str) -> bool:
        size = self.word_size
        return len(solution) == size and len(word) == size and self._dictionary.contains(word)

    def is_solution_valid(self, word: str) -> bool:
        return len(word) == self.word_size and self._dictionary.contains(word)

    def get_template(self, game: "Game") -> str:
        return self._base_template(game)


RULES_NAMES = ("wordle", "motus")


def create_rules(
    name: str,
    dictionary: Dictionary,
    word_size: int | None = None,
    max_guesses: int = DEFAULT_MAX_GUESSES,
) -> GameRules:
    """
    Build the rules called `name` ('wordle' or 'motus') over `dictionary`.

    Wordle keeps the words of `word_size` letters only (WORDLE_DEFAULT_SIZE if None).
    """
    if name == "motus":
        return MotusGameRules(dictionary, max_guesses)
    if name == "wordle":
        size = WORDLE_DEFAULT_SIZE if word_size is None else word_size
        if not isinstance(dictionary, FixedSizeDictionary) or dictionary.word_size != size:
            dictionary = FixedSizeDictionary(dictionary, size)
        return WordleGameRules(dictionary, max_guesses)
    raise ArgumentError(f"unknown rules {name!r}, expected one of {', '.join(RULES_NAMES)}")
