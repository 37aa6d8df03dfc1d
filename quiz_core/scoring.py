from __future__ import annotations
from collections import deque
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from .types import (
    EffectiveOptions,
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    TrueFalse,
)

log = logging.getLogger(__name__)


def _as_index(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _alternatives(expected: Any) -> List[str]:
    if isinstance(expected, str):
        return [expected]
    if isinstance(expected, (list, tuple, set, frozenset)):
        return [e for e in expected if isinstance(e, str)]
    return []


def _text_matcher(options: EffectiveOptions) -> Callable[[str, str], bool]:
    if options.case_sensitive:
        return lambda a, b: a == b
    return lambda a, b: a.casefold() == b.casefold()


def _text_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        return None
    if any(not isinstance(v, str) for v in value):
        return None
    # blank inputs are unanswered slots, not answers
    return [v.strip() for v in value if v.strip()]


def _grade_multiple_choice(q: MultipleChoice, answer: Any, options: EffectiveOptions) -> bool:
    chosen = _as_index(answer)
    if chosen is None:
        return False
    return 0 <= chosen < len(q.choices) and chosen == q.correct_answer


def _grade_true_false(q: TrueFalse, answer: Any, options: EffectiveOptions) -> bool:
    def canon(v: Any) -> Optional[str]:
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, str) and v.strip().lower() in ("true", "false"):
            return v.strip().lower()
        return None

    given, expected = canon(answer), canon(q.correct_answer)
    return given is not None and given == expected


def _grade_multiple_answer(q: MultipleAnswer, answer: Any, options: EffectiveOptions) -> bool:
    if answer is None or isinstance(answer, (str, bytes, Mapping)):
        return False
    try:
        picked = [_as_index(v) for v in answer]
    except TypeError:
        return False
    if not q.correct_answer or any(v is None or not 0 <= v < len(q.choices) for v in picked):
        return False
    # duplicates would let a short selection pass the cardinality check
    return len(picked) == len(set(picked)) == len(q.correct_answer) and set(picked) == set(q.correct_answer)


def _grade_identification(q: Identification, answer: Any, options: EffectiveOptions) -> bool:
    given = _as_text(answer)
    if not given:
        return False
    same = _text_matcher(options)
    return any(same(expected, given) for expected in _alternatives(q.correct_answer))


def _claim_slot(start: int, fits: List[List[int]], owner: Dict[int, int], held: Dict[int, int]) -> bool:
    """Breadth-first augmenting path from answer ``start``; on success slots are reassigned along the path."""
    reached_by: Dict[int, int] = {}
    queue = deque([start])
    while queue:
        i = queue.popleft()
        for slot in fits[i]:
            if slot in reached_by:
                continue
            reached_by[slot] = i
            if slot in owner:
                queue.append(owner[slot])
                continue
            while slot is not None:
                answer = reached_by[slot]
                prev = held.get(answer)
                owner[slot] = answer
                held[answer] = slot
                slot = prev
            return True
    return False


def _grade_enumeration(q: Enumeration, answer: Any, options: EffectiveOptions) -> bool:
    given = _text_list(answer)
    slots = [_alternatives(s) for s in (q.correct_answer or ())]
    if not given or not slots:
        return False
    same = _text_matcher(options)

    if options.order_sensitive:
        if len(given) != len(slots):
            return False
        return all(any(same(a, g) for a in slot) for g, slot in zip(given, slots))

    if len(given) > len(slots):
        return False
    fits = [[i for i, slot in enumerate(slots) if any(same(a, g) for a in slot)] for g in given]
    if any(not f for f in fits):
        return False
    # each answer must claim its own slot; augmenting paths avoid greedy dead ends
    owner: Dict[int, int] = {}
    held: Dict[int, int] = {}
    return all(_claim_slot(i, fits, owner, held) for i in range(len(given)))


def _grade_matching(q: Matching, answer: Any, options: EffectiveOptions) -> bool:
    key = q.correct_matches or {}
    if not key or not isinstance(answer, Mapping):
        return False
    for match_label, item in key.items():
        if answer.get(match_label) != item:
            return False
    return len(answer) == len(key)


_GRADERS: Dict[type, Callable[[Any, Any, EffectiveOptions], bool]] = {
    MultipleChoice: _grade_multiple_choice,
    MultipleAnswer: _grade_multiple_answer,
    TrueFalse: _grade_true_false,
    Identification: _grade_identification,
    Enumeration: _grade_enumeration,
    Matching: _grade_matching,
}

GRADED_TYPES = tuple(_GRADERS)


def is_correct(question, answer: Any, options: EffectiveOptions) -> bool:
    """
    Grade a canonical user answer. Pure: never raises, never mutates.
      MultipleChoice: int index      MultipleAnswer: collection of ints
      TrueFalse: bool or "true"/"false"
      Identification/Text: str      Enumeration: sequence of str
      Matching: mapping match label -> item
    """
    grader = _GRADERS.get(type(question))
    if grader is None:
        return False
    try:
        ok = bool(grader(question, answer, options))
    except (TypeError, ValueError, AttributeError, KeyError):
        log.debug("grading failed for %s; treated as incorrect", type(question).__name__, exc_info=True)
        return False
    log.debug("graded %s -> %s", type(question).__name__, ok)
    return ok


def check_match(question, match_key: str, item: Optional[str]) -> bool:
    """Live feedback for one drop target of a matching question."""
    if not isinstance(question, Matching) or not question.correct_matches:
        return False
    expected = question.correct_matches.get(match_key)
    return expected is not None and item == expected
