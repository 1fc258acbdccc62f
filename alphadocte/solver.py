"""
solver.py

Base class of the solvers: keeps the candidate guesses and solutions of a
session consistent with a template and with every hint received so far.

States
------
no template --set_template()--> template set --add_hint()--> narrowing
    ... until one candidate solution is left (solved) or none (exhausted).
reset() goes back to "no template".
"""

from __future__ import annotations

import bisect
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from alphadocte.exceptions import ArgumentError, StateError
from alphadocte.hints import WILDCARD, HintType, matches
from alphadocte.rules import GameRules

log = logging.getLogger(__name__)

_TEMPLATE_RE = re.compile(r"[a-z.]*")


class Solver(ABC):
    """
    Parameters
    ----------
    rules : GameRules
        Rules of the game being solved; their dictionary provides the words.
    solver_name : str
        Identifies the solver class (used as a cache key).
    solver_version : int
        Bumped whenever a change of the algorithm invalidates previous results.
    """

    def __init__(self, rules: GameRules, solver_name: str, solver_version: int) -> None:
        if rules is None:
            raise ArgumentError("rules cannot be null")
        self._rules = rules
        self._solver_name = solver_name
        self._solver_version = solver_version

        self._template = ""
        self._hints: Dict[str, List[HintType]] = {}
        self._potential_guesses: Tuple[str, ...] = ()
        self._potential_solutions: Tuple[str, ...] = ()

    # -------------------------
    # State
    # -------------------------
    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def solver_name(self) -> str:
        return self._solver_name

    @property
    def solver_version(self) -> int:
        return self._solver_version

    @property
    def template(self) -> str:
        return self._template

    @property
    def hints(self) -> Dict[str, List[HintType]]:
        """Hints received so far, by guess."""
        return {guess: list(h) for guess, h in self._hints.items()}

    @property
    def potential_guesses(self) -> Tuple[str, ...]:
        """Words accepted as a guess under the rules and the template, sorted."""
        return self._potential_guesses

    @property
    def potential_solutions(self) -> Tuple[str, ...]:
        """Words still consistent with the template and every hint, sorted."""
        return self._potential_solutions

    def is_potential_solution(self, word: str) -> bool:
        i = bisect.bisect_left(self._potential_solutions, word)
        return i < len(self._potential_solutions) and self._potential_solutions[i] == word

    # -------------------------
    # Core API
    # -------------------------
    def set_rules(self, rules: Optional[GameRules]) -> None:
        if rules is None or rules is self._rules:
            return
        self._rules = rules
        self.reset()

    def set_template(self, template: str) -> None:
        """
        Start a new session for secrets matching `template`.

        The template is lowercased; each char is either a letter or '.'.
        An invalid template is rejected before anything is reset.
        """
        template = template.lower()
        if _TEMPLATE_RE.fullmatch(template) is None:
            raise ArgumentError("invalid template, must contain either '.' or letters.")

        self.reset()
        self._template = template
        if not template:
            return

        words = self._rules.dictionary.words
        self._potential_guesses = tuple(
            w for w in words if self._rules.is_guess_valid(w, template)
        )
        self._potential_solutions = tuple(
            w for w in words
            if self._rules.is_solution_valid(w) and _fits_template(w, template)
        )
        log.debug(
            "template %r: %d guesses, %d solutions",
            template, len(self._potential_guesses), len(self._potential_solutions),
        )

    def add_hint(self, guess: str, hints: Sequence[HintType]) -> None:
        """
        Record the hints obtained for `guess` and drop the solutions they rule out.

        Raises
        ------
        StateError
            If no template has been set.
        ArgumentError
            If `guess` is not a valid guess, or `hints` does not match its length.
        """
        if not self._template:
            raise StateError("template needs to be set before adding hints.")
        if not self._rules.is_guess_valid(guess, self._template):
            raise ArgumentError("guess is not a valid guess.")
        if len(guess) != len(hints):
            raise ArgumentError("the number of hints does not match the guess' number of letters.")

        try:
            hints = [HintType(h) for h in hints]
        except ValueError as e:
            raise ArgumentError("hints must be WRONG, MISPLACED or CORRECT.") from e

        self._hints[guess] = hints
        self._potential_solutions = tuple(
            w for w in self._potential_solutions if matches(w, guess, hints)
        )
        log.debug("hint for %s: %d solutions left", guess, len(self._potential_solutions))

    def reset(self) -> None:
        self._hints = {}
        self._template = ""
        self._potential_guesses = ()
        self._potential_solutions = ()

    @abstractmethod
    def compute_next_guess(self) -> str:
        """
        Best next guess, or an empty string if none is available.

        Raises StateError if the template has not been set.
        """

    @abstractmethod
    def compute_next_guesses(self, n: int) -> List[Tuple[str, float]]:
        """
        Up to `n` (guess, trust) pairs sorted by descending trust.

        Trust is solver-specific: the higher, the better the guess.
        Raises StateError if the template has not been set.
        """


def _fits_template(word: str, template: str) -> bool:
    if len(word) != len(template):
        return False
    return all(t == WILDCARD or t == c for t, c in zip(template, word))
