from __future__ import annotations

import random

from alphadocte.dictionary import Dictionary
from alphadocte.exceptions import ArgumentError


class WordSampler:
    def __init__(self, dictionary: Dictionary, seed: int | None = None) -> None:
        if not isinstance(dictionary, Dictionary):
            raise ArgumentError("dictionary must be a Dictionary")
        if len(dictionary) == 0:
            raise ArgumentError("dictionary is empty")

        self._dictionary = dictionary

        # deterministic if seed provided
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    @property
    def seed(self) -> int | None:
        return self._seed

    def set_seed(self, seed: int | None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    def choice_word(self) -> str:
        return self._dictionary.get_random_word(self._rng)
