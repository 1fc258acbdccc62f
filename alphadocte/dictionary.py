from __future__ import annotations

import bisect
import logging
import random
from pathlib import Path
from typing import Iterable, Iterator, Union

import pandas as pd

from alphadocte.exceptions import ArgumentError
from alphadocte.hints import is_lower_alpha

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Dictionary:
    """
    Sorted, duplicate-free list of lowercase words.

    The sort order is relied upon by the solvers: their candidate sequences
    are filtered copies of `words` and are searched with bisect.
    """

    def __init__(self, words: Iterable[str]) -> None:
        words = list(words)
        if not all(isinstance(w, str) for w in words):
            raise ArgumentError("all items in `words` must be str")
        bad = [w for w in words if not w or not is_lower_alpha(w)]
        if bad:
            raise ArgumentError(f"words must be lower-case alphabetical: {bad[:5]}")

        self._words: tuple[str, ...] = tuple(sorted(words))

        # duplicates are adjacent once sorted
        for prev, cur in zip(self._words, self._words[1:]):
            if prev == cur:
                raise ArgumentError(f"duplicate word detected: {cur!r}")

    # ---------- Construction helpers ----------

    @classmethod
    def from_txt(cls, path: PathLike) -> "Dictionary":
        """
        Load a plain-text word list, one word per line.

        Empty lines are skipped; any other line must be a single lowercase
        word, otherwise the whole file is rejected.

        Raises
        ------
        FileNotFoundError, ArgumentError
        """
        src = Path(path)
        words: list[str] = []
        with src.open("r", encoding="utf-8") as f:
            for lineno, raw in enumerate(f, start=1):
                w = raw.rstrip("\r\n")
                if not w:
                    continue
                if not is_lower_alpha(w):
                    raise ArgumentError(f"{src}:{lineno}: not a lower-case word: {w!r}")
                words.append(w)

        dictionary = cls(words)
        log.info("loaded %d words from %s", len(dictionary), src)
        return dictionary

    @classmethod
    def from_csv(cls, path: PathLike, column: str = "word") -> "Dictionary":
        """
        Load words from a CSV column.

        Values are lowercased, non-alphabetic rows are dropped and the first
        occurrence of a duplicated word is kept.

        Raises
        ------
        FileNotFoundError, KeyError, ArgumentError
        """
        df = pd.read_csv(path)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")

        series = df[column].dropna().astype(str).str.strip().str.lower()
        series = series[series.str.fullmatch(r"[a-z]+")].drop_duplicates()
        if series.empty:
            raise ArgumentError(f"no valid words in column '{column}' of {path}")

        dictionary = cls(series.tolist())
        log.info("loaded %d words from %s", len(dictionary), path)
        return dictionary

    # ---------- Basic protocol ----------

    @property
    def words(self) -> tuple[str, ...]:
        """All the words, sorted."""
        return self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        """Return True iff `word` is in the dictionary (binary search, case-sensitive)."""
        i = bisect.bisect_left(self._words, word)
        return i < len(self._words) and self._words[i] == word

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]

    def index_of(self, word: str) -> int:
        """Return the position of `word`; raise KeyError if unknown."""
        i = bisect.bisect_left(self._words, word)
        if i < len(self._words) and self._words[i] == word:
            return i
        raise KeyError(f"unknown word: {word}")

    def get_random_word(self, rng: random.Random) -> str:
        """Draw a word uniformly; empty string for an empty dictionary."""
        if not self._words:
            return ""
        return self._words[rng.randrange(len(self._words))]


class FixedSizeDictionary(Dictionary):
    """The words of another dictionary that have exactly `word_size` letters."""

    def __init__(self, dictionary: Dictionary, word_size: int) -> None:
        if word_size <= 0:
            raise ArgumentError("word_size must be a positive integer")
        # filtering a sorted sequence keeps it sorted
        super().__init__(w for w in dictionary.words if len(w) == word_size)
        if not self.words:
            raise ArgumentError(f"no word of {word_size} letters in the dictionary")
        self._word_size = word_size

    @property
    def word_size(self) -> int:
        return self._word_size
