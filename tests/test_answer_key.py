from __future__ import annotations

import pytest

from quiz_core.answer_key import answer_key_lines, option_badges, type_label
from quiz_core.results import percentage, result_message, summarize
from quiz_core.types import EffectiveOptions, Identification

from tests.conftest import build_sample_quiz


@pytest.mark.parametrize(
    "pct, prefix",
    [(100, "Excellent"), (90, "Excellent"), (89, "Good job"), (70, "Good job"), (50, "Not bad"), (49, "Keep studying")],
)
def test_result_message_tiers(pct, prefix):
    assert result_message(pct).startswith(prefix)


def test_percentage_rounds_and_handles_empty_quiz():
    assert percentage(2, 3) == 67
    assert percentage(1, 8) == 13, "Halves round up"
    assert percentage(5, 8) == 63
    assert percentage(0, 0) == 0
    res = summarize(1, 3)
    assert res.percentage == 33 and res.message.startswith("Keep studying")


def test_type_labels():
    quiz = build_sample_quiz()
    labels = [type_label(q) for q in quiz.questions]
    assert labels == [
        "Multiple Choice",
        "Multiple Answer",
        "True or False",
        "Identification",
        "Enumeration",
        "Matching Type",
    ]
    assert type_label(Identification(question="q", correct_answer="a", kind="text")) == "Text Answer"
    assert type_label(object()) == "Question"


def test_answer_key_lines():
    mc, ma, tf, ident, enum, match = build_sample_quiz().questions
    opts = EffectiveOptions()

    assert answer_key_lines(mc, opts) == ["Correct Answer: Paris", "Explanation: Paris is the capital."]
    assert answer_key_lines(ma, opts) == ["Correct Answers: 2, 7"]
    assert answer_key_lines(tf, opts) == ["Correct Answer: True"]
    assert answer_key_lines(ident, EffectiveOptions(case_sensitive=True)) == [
        "Acceptable Answers: Mars, Planet Mars",
        "Note: Case sensitive",
    ]
    assert answer_key_lines(enum, EffectiveOptions(order_sensitive=False)) == [
        "Correct Answers:",
        "1. cat or feline",
        "2. dog",
        "Note: Any order is acceptable",
    ]
    assert answer_key_lines(match, opts) == ["Correct Matches:", "A -> X", "B -> Y"]
    assert answer_key_lines(object(), opts) == []


def test_option_badges():
    assert option_badges(EffectiveOptions()) == [
        "Fixed Order",
        "Case Insensitive",
        "Order Matters",
        "Fixed Items",
        "Fixed Matches",
        "Equal Lists",
    ]
    badges = option_badges(EffectiveOptions(shuffle_answers=True, order_sensitive=False, unequal_list=True))
    assert "Shuffled" in badges and "Any Order" in badges and "Extra Options" in badges
