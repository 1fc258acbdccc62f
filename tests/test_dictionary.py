import random

import pytest

from alphadocte.data_utils import available_dictionaries, dictionary_name, load_dictionary, resolve_dictionary_path
from alphadocte.dictionary import Dictionary, FixedSizeDictionary
from alphadocte.exceptions import ArgumentError
from alphadocte.sampler import WordSampler

from conftest import DATA_DIR, WORDLE_WORDLIST


def test_dictionary_is_sorted_and_searchable():
    d = Dictionary(["marie", "abri", "tarie"])
    assert d.words == ("abri", "marie", "tarie")
    assert len(d) == 3
    assert d.contains("marie")
    assert "tarie" in d
    assert not d.contains("Marie")
    assert 42 not in d
    assert d.word_at(0) == "abri"
    assert d.index_of("tarie") == 2
    with pytest.raises(KeyError):
        d.index_of("zebre")
    with pytest.raises(IndexError):
        d.word_at(3)


@pytest.mark.parametrize("words", [["abri", "abri"], ["Abri"], ["ab ri"], [""], ["abri", 3]])
def test_dictionary_rejects_bad_words(words):
    with pytest.raises(ArgumentError):
        Dictionary(words)


def test_from_txt(wordle_dictionary):
    full = Dictionary.from_txt(WORDLE_WORDLIST)
    assert len(full) == 71
    assert "ski" in full and "arbres" in full
    assert len(wordle_dictionary) == 67
    assert wordle_dictionary.word_size == 5
    assert all(len(w) == 5 for w in wordle_dictionary)


def test_from_txt_rejects_bad_line(tmp_path):
    path = tmp_path / "bad_wordlist.txt"
    path.write_text("abri\n\nArbre\n", encoding="utf-8")
    with pytest.raises(ArgumentError, match="bad_wordlist.txt:3"):
        Dictionary.from_txt(path)


def test_from_csv(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("word,freq\nMarie,3\ntarie,1\nmarie,2\nl'eau,5\n", encoding="utf-8")
    d = load_dictionary(path)
    assert d.words == ("marie", "tarie")

    with pytest.raises(KeyError):
        Dictionary.from_csv(path, column="mot")


def test_fixed_size_dictionary():
    d = Dictionary(["abri", "amont", "ski", "tarie"])
    fixed = FixedSizeDictionary(d, 5)
    assert fixed.words == ("amont", "tarie")
    with pytest.raises(ArgumentError):
        FixedSizeDictionary(d, 7)
    with pytest.raises(ArgumentError):
        FixedSizeDictionary(d, 0)


def test_get_random_word_is_uniform_and_seeded(wordle_dictionary):
    a = [wordle_dictionary.get_random_word(random.Random(3)) for _ in range(5)]
    b = [wordle_dictionary.get_random_word(random.Random(3)) for _ in range(5)]
    assert a == b
    assert all(w in wordle_dictionary for w in a)


def test_sampler_is_deterministic(wordle_dictionary):
    s1 = WordSampler(wordle_dictionary, seed=7)
    s2 = WordSampler(wordle_dictionary, seed=7)
    draws = [s1.choice_word() for _ in range(10)]
    assert draws == [s2.choice_word() for _ in range(10)]

    s1.set_seed(7)
    assert s1.seed == 7
    assert [s1.choice_word() for _ in range(10)] == draws


def test_sampler_rejects_non_dictionary():
    with pytest.raises(ArgumentError):
        WordSampler(["amont"])


def test_dictionary_names(tmp_path):
    assert dictionary_name("data/french_wordlist.txt") == "french"
    assert dictionary_name("words.csv") == "words"

    (tmp_path / "english_wordlist.txt").write_text("house\n", encoding="utf-8")
    (tmp_path / "french_wordlist.txt").write_text("maison\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x\n", encoding="utf-8")
    found = available_dictionaries(tmp_path)
    assert list(found) == ["english", "french"]
    assert available_dictionaries(tmp_path / "missing") == {}

    assert resolve_dictionary_path("french", tmp_path) == tmp_path / "french_wordlist.txt"
    assert resolve_dictionary_path(WORDLE_WORDLIST, tmp_path) == WORDLE_WORDLIST
    with pytest.raises(FileNotFoundError):
        resolve_dictionary_path("german", tmp_path)


def test_test_data_dictionaries_are_discoverable():
    assert set(available_dictionaries(DATA_DIR)) == {"motus_test", "wordle_test"}
