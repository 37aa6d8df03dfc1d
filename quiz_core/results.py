# quiz_core/results.py
from __future__ import annotations
from typing import Dict, Optional

from .config import RESULT_TIERS, RESULT_FLOOR_MESSAGE
from .types import QuizResult


def percentage(score: int, total: int) -> int:
    if total <= 0: return 0
    # halves round up
    return int(100.0 * score / total + 0.5)

def result_message(pct: float) -> str:
    p = float(pct)
    for threshold, message in RESULT_TIERS:
        if p >= threshold: return message
    return RESULT_FLOOR_MESSAGE

def summarize(score: int, total: int, answers: Optional[Dict[int, object]] = None) -> QuizResult:
    pct = percentage(score, total)
    return QuizResult(score=score, total=total, percentage=pct, message=result_message(pct), answers=dict(answers or {}))
