from pathlib import Path

import pytest

from alphadocte.data_utils import load_dictionary
from alphadocte.dictionary import Dictionary, FixedSizeDictionary
from alphadocte.rules import MotusGameRules, WordleGameRules

DATA_DIR = Path(__file__).parent / "data"
WORDLE_WORDLIST = DATA_DIR / "wordle_test_wordlist.txt"
MOTUS_WORDLIST = DATA_DIR / "motus_test_wordlist.txt"


@pytest.fixture
def wordle_dictionary() -> FixedSizeDictionary:
    # 67 five-letter words, plus a few of other lengths filtered out
    return load_dictionary(WORDLE_WORDLIST, word_size=5)


@pytest.fixture
def motus_dictionary() -> Dictionary:
    return load_dictionary(MOTUS_WORDLIST)


@pytest.fixture
def wordle_rules(wordle_dictionary) -> WordleGameRules:
    return WordleGameRules(wordle_dictionary, max_guesses=6)


@pytest.fixture
def motus_rules(motus_dictionary) -> MotusGameRules:
    return MotusGameRules(motus_dictionary, max_guesses=6)
