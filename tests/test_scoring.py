from __future__ import annotations

import copy

import pytest

from quiz_core.scoring import check_match, is_correct
from quiz_core.types import (
    EffectiveOptions,
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    TrueFalse,
)

OPTS = EffectiveOptions()
ANY_ORDER = EffectiveOptions(order_sensitive=False)
PETS = Enumeration(question="pets", correct_answer=(("cat", "feline"), "dog"))
LETTERS = Matching(question="m", items=("X", "Y"), matches=("A", "B"), correct_matches={"A": "X", "B": "Y"})


@pytest.mark.parametrize(
    "answer, expected",
    [(2, True), ("2", True), (1, False), (None, False), (True, False), (99, False), ("two", False)],
)
def test_multiple_choice(answer, expected):
    q = MultipleChoice(question="q", choices=("a", "b", "c", "d"), correct_answer=2)
    assert is_correct(q, answer, OPTS) is expected


def test_multiple_choice_out_of_range_key_is_never_correct():
    q = MultipleChoice(question="q", choices=("a", "b"), correct_answer=7)
    assert is_correct(q, 7, OPTS) is False


def test_true_false_compares_canonical_text():
    q = TrueFalse(question="t", correct_answer=True)
    assert is_correct(q, True, OPTS)
    assert is_correct(q, "true", OPTS)
    assert not is_correct(q, False, OPTS)
    assert not is_correct(q, "false", OPTS)
    assert not is_correct(q, None, OPTS)
    assert not is_correct(q, 1, OPTS)


@pytest.mark.parametrize(
    "answer, expected",
    [({3, 1}, True), ([1, 3], True), ({1, 2, 3}, False), ({1}, False), ([1, 1], False), (None, False), ("13", False)],
)
def test_multiple_answer_requires_exact_set(answer, expected):
    q = MultipleAnswer(question="q", choices=("a", "b", "c", "d"), correct_answer=frozenset({1, 3}))
    assert is_correct(q, answer, OPTS) is expected


def test_identification_case_policy():
    q = Identification(question="capital", correct_answer="Paris")
    assert is_correct(q, "paris", OPTS)
    assert is_correct(q, "  Paris ", OPTS)
    assert not is_correct(q, "", OPTS)
    assert not is_correct(q, None, OPTS)
    assert not is_correct(q, 5, OPTS)
    assert not is_correct(q, "paris", EffectiveOptions(case_sensitive=True))
    assert is_correct(q, "Paris", EffectiveOptions(case_sensitive=True))


def test_identification_accepts_any_listed_answer():
    q = Identification(question="planet", correct_answer=("Mars", "Planet Mars"), kind="text")
    assert is_correct(q, "planet mars", OPTS)
    assert is_correct(q, "MARS", OPTS)
    assert not is_correct(q, "Venus", OPTS)


def test_enumeration_in_order():
    q = Enumeration(question="rgb", correct_answer=("red", ("green", "lime"), "blue"))
    assert is_correct(q, ["Red", "lime", "blue"], OPTS)
    assert not is_correct(q, ["blue", "green", "red"], OPTS)
    assert not is_correct(q, ["red", "green"], OPTS)
    assert not is_correct(q, ["Red", "green", "blue"], EffectiveOptions(case_sensitive=True))
    assert not is_correct(q, [], OPTS)
    assert not is_correct(q, "red green blue", OPTS)


def test_enumeration_any_order_claims_distinct_slots():
    assert is_correct(PETS, ["dog", "feline"], ANY_ORDER)
    assert not is_correct(PETS, ["dog", "dog"], ANY_ORDER), "Two answers cannot claim one slot"
    assert not is_correct(PETS, ["cat", "dog", "mouse"], ANY_ORDER), "More answers than slots"
    assert not is_correct(PETS, ["cat", "feline"], ANY_ORDER)
    assert not is_correct(PETS, ["cat", "mouse"], ANY_ORDER)


def test_enumeration_any_order_allows_partial_lists():
    assert is_correct(PETS, ["dog"], ANY_ORDER)
    assert is_correct(PETS, ["dog", "  "], ANY_ORDER), "Blank inputs are ignored"
    assert not is_correct(PETS, [], ANY_ORDER)
    assert not is_correct(PETS, [None, "dog"], ANY_ORDER)


def test_enumeration_any_order_reassigns_slots_when_needed():
    q = Enumeration(question="letters", correct_answer=(("a", "b"), "a"))
    # first-fit would give "a" the first slot and strand "b"
    assert is_correct(q, ["a", "b"], ANY_ORDER)
    assert is_correct(q, ["b", "a"], ANY_ORDER)
    assert not is_correct(q, ["b", "b"], ANY_ORDER)


def test_enumeration_any_order_handles_long_reassignment_chains():
    size = 1500
    q = Enumeration(question="chain", correct_answer=tuple((f"w{j}", f"w{j + 1}") for j in range(size)))
    words = [f"w{j}" for j in range(size)]
    assert is_correct(q, words, ANY_ORDER)
    assert not is_correct(q, words[:-1] + ["w0"], ANY_ORDER)


def test_matching():
    assert is_correct(LETTERS, {"A": "X", "B": "Y"}, OPTS)
    assert not is_correct(LETTERS, {"A": "X", "B": "Y", "C": "Z"}, OPTS)
    assert not is_correct(LETTERS, {"A": "X"}, OPTS)
    assert not is_correct(LETTERS, {"A": "Y", "B": "X"}, OPTS)
    assert not is_correct(LETTERS, None, OPTS)
    assert not is_correct(LETTERS, [("A", "X"), ("B", "Y")], OPTS)


def test_matching_decoy_pairs_cannot_score():
    answer = {"A": "X", "B": "Y", "Extra Option 1": "Distractor A"}
    assert not is_correct(LETTERS, answer, OPTS)


def test_matching_without_key_is_incorrect():
    q = Matching(question="m", items=("X",), matches=("A",), correct_matches={})
    assert not is_correct(q, {}, OPTS)


def test_unknown_question_is_incorrect():
    assert is_correct(object(), 1, OPTS) is False
    assert is_correct(None, None, OPTS) is False


def test_grading_is_idempotent_and_does_not_mutate_inputs():
    answer = {"A": "X", "B": "Y"}
    before_answer = copy.deepcopy(answer)
    before_key = dict(LETTERS.correct_matches)

    first = is_correct(LETTERS, answer, OPTS)
    second = is_correct(LETTERS, answer, OPTS)

    assert first is second is True
    assert answer == before_answer
    assert LETTERS.correct_matches == before_key

    enum_answer = ["dog", "feline"]
    assert is_correct(PETS, enum_answer, ANY_ORDER) == is_correct(PETS, enum_answer, ANY_ORDER)
    assert enum_answer == ["dog", "feline"]


def test_check_match_gives_per_target_feedback():
    assert check_match(LETTERS, "A", "X")
    assert not check_match(LETTERS, "A", "Y")
    assert not check_match(LETTERS, "Extra Option 1", "Distractor A")
    assert not check_match(PETS, "A", "X")
