"""
entropy.py

Solver choosing the guess that maximises the expected information gain.

For a guess g and the n current candidate solutions, the candidates are
partitioned by the hint vector g would produce against each of them. A
part of size k has probability p = k/n, and the expected information of g
is the Shannon entropy of the partition:

    H(g) = -sum(p * log2(p))

Every value is in bits.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence, Tuple

import numpy as np

from alphadocte.exceptions import StateError
from alphadocte.hints import HintType, compute_hints, pattern_to_int
from alphadocte.rules import GameRules
from alphadocte.solver import Solver

log = logging.getLogger(__name__)

# returned when an entropy is undefined (no candidate solution)
UNDEFINED_ENTROPY = -1.0


class EntropyMaximizer(Solver):
    NAME = "entropy_maximizer"
    VERSION = 1

    def __init__(self, rules: GameRules) -> None:
        super().__init__(rules, self.NAME, self.VERSION)

    def hint_partition(self, guess: str) -> Counter:
        """Number of candidate solutions per hint pattern (base-3 code) for `guess`."""
        return Counter(
            pattern_to_int(compute_hints(guess, solution))
            for solution in self.potential_solutions
        )

    def compute_current_entropy(self) -> float:
        """
        Bits of information still missing to win: log2 of the number of
        candidate solutions, or UNDEFINED_ENTROPY if there is none.
        """
        n = len(self.potential_solutions)
        if n == 0:
            return UNDEFINED_ENTROPY
        return float(np.log2(n))

    def compute_expected_entropy(self, guess: str) -> float:
        """Mean information (bits) that `guess` is expected to reveal."""
        n = len(self.potential_solutions)
        if n <= 1:
            # no choice, no information
            return 0.0

        counts = np.fromiter(self.hint_partition(guess).values(), dtype=np.float64)
        p = counts / n
        return float(-(p * np.log2(p)).sum())

    def compute_actual_entropy(self, guess: str, hints: Sequence[HintType]) -> float:
        """
        Information (bits) actually revealed by `hints` for `guess`.

        Relative to the current candidates, so it must be called before
        add_hint(guess, hints). Returns UNDEFINED_ENTROPY if no candidate
        would give these hints (the solution is not in the dictionary, or
        the hints are wrong).
        """
        solutions = self.potential_solutions
        expected = [HintType(h) for h in hints]
        occurrences = sum(1 for s in solutions if compute_hints(guess, s) == expected)
        if occurrences == 0:
            return UNDEFINED_ENTROPY
        return float(-np.log2(occurrences / len(solutions)))

    def compute_next_guesses(self, n: int) -> List[Tuple[str, float]]:
        """
        Up to `n` (guess, expected entropy) pairs, best first.

        Equal entropies favour guesses that may be the solution; among full
        ties the dictionary order is kept.
        """
        if not self.template:
            raise StateError("cannot compute next guess with an empty template.")

        solutions = self.potential_solutions
        if not solutions:
            return []
        if len(solutions) == 1:
            # only one solution possible, no choice means 0 bit of entropy
            return [(solutions[0], 0.0)]

        scored = [
            (guess, self.compute_expected_entropy(guess), self.is_potential_solution(guess))
            for guess in self.potential_guesses
        ]
        # sort is stable: ties stay in dictionary order
        scored.sort(key=lambda item: (-item[1], not item[2]))

        log.debug("ranked %d guesses against %d solutions", len(scored), len(solutions))
        return [(guess, score) for guess, score, _ in scored[: max(n, 0)]]

    def compute_next_guess(self) -> str:
        guesses = self.compute_next_guesses(1)
        if not guesses:
            # solution probably not in the dictionary, or hints are incorrect
            return ""
        return guesses[0][0]
