"""Plain-text answer key, question type labels and option badges for renderers."""
from __future__ import annotations

from typing import List

from .types import (
    EffectiveOptions,
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    TrueFalse,
)

_TEXT_LABELS = {"identification": "Identification", "text": "Text Answer"}


def type_label(question) -> str:
    if isinstance(question, MultipleChoice):
        return "Multiple Choice"
    if isinstance(question, MultipleAnswer):
        return "Multiple Answer"
    if isinstance(question, Identification):
        return _TEXT_LABELS.get(question.kind, "Identification")
    if isinstance(question, Matching):
        return "Matching Type"
    if isinstance(question, TrueFalse):
        return "True or False"
    if isinstance(question, Enumeration):
        return "Enumeration"
    return "Question"


def _choice_text(choices, idx) -> str:
    if isinstance(idx, int) and 0 <= idx < len(choices):
        return choices[idx]
    return "?"


def answer_key_lines(question, options: EffectiveOptions) -> List[str]:
    """Lines describing the expected answer, notes on active grading options, and the explanation."""

    lines: List[str] = []
    if isinstance(question, MultipleChoice):
        lines.append(f"Correct Answer: {_choice_text(question.choices, question.correct_answer)}")
    elif isinstance(question, TrueFalse):
        lines.append(f"Correct Answer: {'True' if question.correct_answer else 'False'}")
    elif isinstance(question, MultipleAnswer):
        picked = ", ".join(_choice_text(question.choices, i) for i in sorted(question.correct_answer))
        lines.append(f"Correct Answers: {picked}")
    elif isinstance(question, Identification):
        if isinstance(question.correct_answer, str):
            lines.append(f"Correct Answer: {question.correct_answer}")
        else:
            lines.append(f"Acceptable Answers: {', '.join(question.correct_answer)}")
        if options.case_sensitive:
            lines.append("Note: Case sensitive")
    elif isinstance(question, Enumeration):
        lines.append("Correct Answers:")
        for i, slot in enumerate(question.correct_answer, start=1):
            text = slot if isinstance(slot, str) else " or ".join(slot)
            lines.append(f"{i}. {text}")
        if not options.order_sensitive:
            lines.append("Note: Any order is acceptable")
        if options.case_sensitive:
            lines.append("Note: Case sensitive")
    elif isinstance(question, Matching):
        lines.append("Correct Matches:")
        for match_label, item in (question.correct_matches or {}).items():
            lines.append(f"{match_label} -> {item}")
    else:
        return lines

    if question.explanation:
        lines.append(f"Explanation: {question.explanation}")
    return lines


def option_badges(options: EffectiveOptions) -> List[str]:
    return [
        "Shuffled" if options.shuffle_answers else "Fixed Order",
        "Case Sensitive" if options.case_sensitive else "Case Insensitive",
        "Order Matters" if options.order_sensitive else "Any Order",
        "Mixed Items" if options.shuffle_choices else "Fixed Items",
        "Mixed Matches" if options.shuffle_matches else "Fixed Matches",
        "Extra Options" if options.unequal_list else "Equal Lists",
    ]
