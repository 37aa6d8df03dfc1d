from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from .types import (
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    QuizDefinition,
    TrueFalse,
)
from .answer_key import type_label

TYPE_BUCKETS: tuple[str, ...] = (
    "Multiple Choice",
    "Multiple Answer",
    "True or False",
    "Identification",
    "Text Answer",
    "Enumeration",
    "Matching Type",
)


def _blank_counts() -> dict[str, int]:
    return {label: 0 for label in TYPE_BUCKETS}


def _question_warnings(n: int, q) -> list[str]:
    warnings: list[str] = []
    if isinstance(q, MultipleChoice):
        if not 0 <= q.correct_answer < len(q.choices):
            warnings.append(f"Q{n} correct index {q.correct_answer} outside 0..{len(q.choices) - 1}")
        if len(set(q.choices)) != len(q.choices):
            warnings.append(f"Q{n} has duplicate choices")
    elif isinstance(q, MultipleAnswer):
        if not q.correct_answer:
            warnings.append(f"Q{n} has an empty answer set")
        bad = sorted(i for i in q.correct_answer if not 0 <= i < len(q.choices))
        if bad:
            warnings.append(f"Q{n} correct indices {bad} outside 0..{len(q.choices) - 1}")
    elif isinstance(q, Identification):
        expected = [q.correct_answer] if isinstance(q.correct_answer, str) else list(q.correct_answer)
        if not any(e.strip() for e in expected):
            warnings.append(f"Q{n} has no acceptable answer")
    elif isinstance(q, Enumeration):
        for i, slot in enumerate(q.correct_answer, start=1):
            alts = [slot] if isinstance(slot, str) else list(slot)
            if not any(a.strip() for a in alts):
                warnings.append(f"Q{n} slot {i} is empty")
    elif isinstance(q, Matching):
        if not q.correct_matches:
            warnings.append(f"Q{n} has no correct matches")
        for match_label, item in (q.correct_matches or {}).items():
            if match_label not in q.matches:
                warnings.append(f"Q{n} match '{match_label}' is not among matches")
            if item not in q.items:
                warnings.append(f"Q{n} item '{item}' is not among items")
    elif not isinstance(q, TrueFalse):
        warnings.append(f"Q{n} has unsupported type {type(q).__name__}")
    return warnings


def audit_questions(questions: Iterable) -> dict[str, object]:
    counts = _blank_counts()
    warnings: list[str] = []
    total = 0
    for n, q in enumerate(questions, start=1):
        total += 1
        label = type_label(q)
        counts[label] = counts.get(label, 0) + 1
        warnings.extend(_question_warnings(n, q))
    return {"counts": counts, "warnings": warnings, "total": total}


def audit_quiz(quiz: QuizDefinition) -> dict[str, object]:
    summary = audit_questions(quiz.questions)
    summary["title"] = quiz.title
    return summary


def print_report(summary: dict[str, object]) -> None:
    print(f"=== Quiz Audit: {summary.get('title', '')} ===")
    counts: dict[str, int] = summary["counts"]  # type: ignore[assignment]
    for label in TYPE_BUCKETS:
        print(f"  {label:<16}{counts.get(label, 0):3d}")
    print(f"  {'Total':<16}{summary['total']:3d}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text
