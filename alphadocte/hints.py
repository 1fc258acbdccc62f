"""
Hint (feedback) utilities shared by the game and the solvers.

A hint vector holds one HintType per letter of a guess:
- WRONG     (0, gray)   letter absent, or over-used relative to the solution
- MISPLACED (1, yellow) letter present elsewhere in the solution
- CORRECT   (2, green)  letter at the right position
"""

from __future__ import annotations

import re
from collections import Counter
from enum import IntEnum
from typing import Sequence

from alphadocte.exceptions import ArgumentError

WILDCARD = "."

_LOWER_ALPHA = re.compile(r"[a-z]*")


class HintType(IntEnum):
    WRONG = 0
    MISPLACED = 1
    CORRECT = 2

    def __str__(self) -> str:
        return _HINT_LABELS[self]


_HINT_LABELS = {
    HintType.CORRECT: "correct",
    HintType.MISPLACED: "not here",
    HintType.WRONG: "wrong",
}

# feedback alphabets accepted by parse_hints, ordered WRONG / MISPLACED / CORRECT
ALPHABETS = ("byg", "012", "xov")


def is_lower_alpha(word: str) -> bool:
    """Return True iff `word` only contains the letters a-z."""
    return _LOWER_ALPHA.fullmatch(word) is not None


def compute_hints(word: str, solution: str) -> list[HintType]:
    """
    Compute the feedback for the guess `word` against `solution`.

    Duplicate letters follow the two-pass rule:

    1) CORRECT pass: every position where both words agree is CORRECT and
       consumes one occurrence of the letter from the solution's multiset.
    2) MISPLACED pass, left to right over the other positions: the letter is
       MISPLACED if it is still available (and consumes it), WRONG otherwise.

    So with a single 'e' in the solution, the guess "maree" gets its first
    non-correct 'e' MISPLACED and the next one WRONG, never the reverse.

    Raises
    ------
    ArgumentError
        If the words differ in length or are not lowercase alphabetic.
    """
    if len(word) != len(solution):
        raise ArgumentError(
            f'Cannot compute hints: words "{word}" and "{solution}" does not have the same size'
        )
    if not is_lower_alpha(word) or not is_lower_alpha(solution):
        raise ArgumentError(
            f'Cannot compute hints: words "{word}" and "{solution}" '
            "must be lower-case alphabetical characters."
        )

    hints = [HintType.WRONG] * len(word)
    remaining = Counter(solution)

    # Pass 1: correct letters consume their occurrence first
    for i, (w, s) in enumerate(zip(word, solution)):
        if w == s:
            hints[i] = HintType.CORRECT
            remaining[w] -= 1

    # Pass 2: misplaced where counts allow (else wrong)
    for i, w in enumerate(word):
        if hints[i] != HintType.CORRECT and remaining[w] > 0:
            hints[i] = HintType.MISPLACED
            remaining[w] -= 1

    return hints


def matches(word: str, guess: str, hints: Sequence[HintType]) -> bool:
    """
    Return True iff `word`, taken as the solution, would give `hints` for `guess`.

    Equivalent to ``compute_hints(guess, word) == list(hints)`` but exits as
    soon as a hint is violated. Arguments of different lengths never match.
    """
    if len(word) != len(guess) or len(guess) != len(hints):
        return False

    remaining = Counter(word)

    for i, hint in enumerate(hints):
        if hint == HintType.CORRECT:
            if word[i] != guess[i]:
                return False
            remaining[word[i]] -= 1

    # misplaced hints always come before wrong ones for a duplicated letter,
    # so a left to right scan consumes letters in the same order as compute_hints
    for i, hint in enumerate(hints):
        letter = guess[i]
        if hint == HintType.MISPLACED:
            if word[i] == letter or remaining[letter] <= 0:
                return False
            remaining[letter] -= 1
        elif hint == HintType.WRONG:
            if word[i] == letter or remaining[letter] > 0:
                return False

    return True


def compute_template(
    size: int,
    guesses: Sequence[str],
    hints: Sequence[Sequence[HintType]],
) -> str:
    """
    Fold every CORRECT letter of the (guess, hints) pairs into a template.

    The template has `size` characters, each either a confirmed letter or
    WILDCARD.
    """
    if (
        len(guesses) != len(hints)
        or any(len(guess) != size for guess in guesses)
        or any(len(hint_vector) != size for hint_vector in hints)
    ):
        raise ArgumentError(
            "number of guesses and hint vectors must be the same, and word(/hints) sizes also."
        )
    if not all(is_lower_alpha(guess) for guess in guesses):
        raise ArgumentError("guesses must contain only lower-case alphabetical characters.")

    pattern = [WILDCARD] * size
    for guess, hint_vector in zip(guesses, hints):
        for j, hint in enumerate(hint_vector):
            if hint == HintType.CORRECT:
                pattern[j] = guess[j]
    return "".join(pattern)


def pattern_to_int(hints: Sequence[HintType]) -> int:
    """
    Encode a hint vector (any length) into a single integer.

    Base-3 positional encoding: ``value = value * 3 + hint`` for each hint, so
    two vectors of the same length share a code iff they are equal.
    """
    value = 0
    for hint in hints:
        value = value * 3 + int(hint)
    return value


def parse_hints(text: str, size: int) -> list[HintType]:
    """
    Parse user feedback into a hint vector of `size` entries.

    Accepted forms:
      - letters: b/y/g  (black/yellow/green)
      - digits:  0/1/2
      - letters: x/o/v  (wrong/misplaced/correct)
      - list:   [0, 1, 2, 2, 0]
    Raises ArgumentError on invalid input.
    """
    s = text.strip().lower()
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"[012]", s)
        if len(nums) != size:
            raise ArgumentError(f"list form must contain exactly {size} 0/1/2 values")
        return [HintType(int(x)) for x in nums]

    if len(s) != size:
        raise ArgumentError(f"feedback must be {size} characters long (e.g. gybgy / 21001 / voxvo)")
    mapping = {ch: HintType(value) for alphabet in ALPHABETS for value, ch in enumerate(alphabet)}
    try:
        return [mapping[ch] for ch in s]
    except KeyError as e:
        raise ArgumentError("feedback must use only g/y/b, 2/1/0 or v/o/x") from e


def format_hints(hints: Sequence[HintType], alphabet: str = "byg") -> str:
    """Render a hint vector with one character per hint (WRONG, MISPLACED, CORRECT order)."""
    if len(alphabet) != 3:
        raise ArgumentError("alphabet must have exactly three characters")
    return "".join(alphabet[int(hint)] for hint in hints)
