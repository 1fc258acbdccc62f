import pytest

from alphadocte.exceptions import ArgumentError
from alphadocte.hints import (
    HintType,
    compute_hints,
    compute_template,
    format_hints,
    matches,
    parse_hints,
    pattern_to_int,
)

W, M, C = HintType.WRONG, HintType.MISPLACED, HintType.CORRECT


@pytest.mark.parametrize(
    "guess, solution, expected",
    [
        ("marie", "tarie", [W, C, C, C, C]),
        ("quart", "parts", [W, W, M, M, M]),
        ("parts", "quart", [W, M, M, M, W]),
        ("email", "maree", [M, M, M, W, W]),
        ("maree", "email", [M, M, W, M, W]),
        ("clees", "maree", [W, W, M, C, W]),
        ("maree", "clees", [W, W, W, C, M]),
        ("puree", "maree", [W, W, C, C, C]),
        ("raies", "culot", [W, W, W, W, W]),
        ("amont", "amont", [C, C, C, C, C]),
        ("", "", []),
    ],
)
def test_compute_hints(guess, solution, expected):
    assert compute_hints(guess, solution) == expected


def test_compute_hints_duplicates_misplaced_before_wrong():
    # a single 'e' available for two misplaced 'e': leftmost wins
    assert compute_hints("eexxx", "abcde") == [M, W, W, W, W]


def test_compute_hints_rejects_bad_words():
    with pytest.raises(ArgumentError, match="same size"):
        compute_hints("abc", "abcd")
    with pytest.raises(ArgumentError, match="lower-case"):
        compute_hints("Amont", "amont")
    with pytest.raises(ArgumentError):
        compute_hints("am0nt", "amont")


def test_correct_positions_are_symmetric():
    for a, b in [("email", "maree"), ("quart", "parts"), ("clees", "maree")]:
        ab = compute_hints(a, b)
        ba = compute_hints(b, a)
        assert [h == C for h in ab] == [h == C for h in ba]
    # the rest is not symmetric
    assert compute_hints("email", "maree") != compute_hints("maree", "email")


@pytest.mark.parametrize(
    "solution, guess",
    [
        ("maree", "email"),
        ("email", "maree"),
        ("clees", "maree"),
        ("parts", "quart"),
        ("amont", "agaca"),
        ("amont", "aient"),
        ("culot", "raies"),
    ],
)
def test_matches_own_hints(solution, guess):
    assert matches(solution, guess, compute_hints(guess, solution))


def test_matches_rejects_other_hints():
    assert not matches("amont", "agaca", [W, W, W, W, W])
    assert not matches("maree", "email", [M, M, W, M, W])
    # same letter at the same place can never be WRONG
    assert not matches("bac", "aax", [M, W, W])
    assert not matches("amont", "aient", [C, W, W, C])  # length mismatch


def test_matches_agrees_with_compute_hints():
    words = ["maree", "email", "clees", "puree", "tarie", "marie", "eeeee", "aient"]
    for solution in words:
        for guess in words:
            hints = compute_hints(guess, solution)
            for other in words:
                assert matches(other, guess, hints) == (compute_hints(guess, other) == hints)


def test_compute_template():
    assert compute_template(5, [], []) == "....."
    assert compute_template(5, ["agaca"], [[C, W, W, W, W]]) == "a...."
    assert (
        compute_template(5, ["agaca", "embas", "dakat"], [[C, W, W, W, W], [W, C, W, M, W], [W, M, W, W, C]])
        == "am..t"
    )


def test_compute_template_rejects_bad_input():
    with pytest.raises(ArgumentError):
        compute_template(5, ["agaca"], [])
    with pytest.raises(ArgumentError):
        compute_template(5, ["agac"], [[C, W, W, W]])
    with pytest.raises(ArgumentError, match="lower-case"):
        compute_template(5, ["AGACA"], [[C, W, W, W, W]])


def test_pattern_to_int():
    assert pattern_to_int([W, W, W, W, W]) == 0
    assert pattern_to_int([C, C, C, C, C]) == 242
    assert pattern_to_int([W, W, W, W, M]) == 1
    assert pattern_to_int([M, W]) == 3
    assert pattern_to_int([]) == 0


@pytest.mark.parametrize("text", ["gbbyb", "20010", "vxxox", "[2, 0, 0, 1, 0]", "  GBBYB "])
def test_parse_hints(text):
    assert parse_hints(text, 5) == [C, W, W, M, W]


@pytest.mark.parametrize("text", ["gbby", "gbbyq", "[2, 0, 0, 1]", ""])
def test_parse_hints_rejects(text):
    with pytest.raises(ArgumentError):
        parse_hints(text, 5)


def test_format_hints():
    assert format_hints([C, W, W, M, W]) == "gbbyb"
    assert format_hints([C, W, M], "012") == "201"
    with pytest.raises(ArgumentError):
        format_hints([C], "gy")


def test_hint_labels():
    assert str(W) == "wrong"
    assert str(M) == "not here"
    assert str(C) == "correct"
    assert int(C) == 2
