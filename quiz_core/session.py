# quiz_core/session.py
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from .types import DisplayPlan, EffectiveOptions, Feedback, QuizDefinition, QuizResult
from .options import resolve_options
from .planner import DecoyPolicy, plan_display
from .results import summarize
from .scoring import check_match, is_correct
from .shuffle import RandomSource, ShuffleState
from .config import load_config, make_rng


log = logging.getLogger(__name__)


def _is_blank(answer: Any) -> bool:
    if answer is None:
        return True
    if isinstance(answer, str):
        return not answer.strip()
    return False


class QuizSession:
    """Runtime state for one pass through a quiz: position, score, answers and shuffle history."""

    def __init__(self, quiz: QuizDefinition, rng: Optional[RandomSource] = None,
                 decoys: Optional[DecoyPolicy] = None):
        self.quiz = quiz
        self.rng: RandomSource = rng if rng is not None else make_rng(load_config())
        self.decoys = decoys or DecoyPolicy()
        self.shuffle_state = ShuffleState()
        self.index = 0
        self.score = 0
        self.answers: Dict[int, Any] = {}
        self.plans: Dict[int, DisplayPlan] = {}
        self.complete = False
        self.result: Optional[QuizResult] = None
        log.info("session started: %r (%d questions)", quiz.title, self.total)

    @property
    def total(self) -> int:
        return len(self.quiz.questions)

    @property
    def current(self):
        if 0 <= self.index < self.total:
            return self.quiz.questions[self.index]
        return None

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index >= self.total - 1

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return 100.0 * (self.index + 1) / self.total

    def options_for(self, index: Optional[int] = None) -> EffectiveOptions:
        i = self.index if index is None else index
        q = self.quiz.questions[i] if 0 <= i < self.total else None
        return resolve_options(self.quiz.options, getattr(q, "overrides", None))

    def plan(self) -> DisplayPlan:
        """Plan the current question; call once per render."""
        plan = plan_display(self.current, self.index, self.options_for(), self.shuffle_state, self.rng, self.decoys)
        self.plans[self.index] = plan
        log.debug("planned q%d: %s", self.index, type(plan).__name__)
        return plan

    def submit(self, answer: Any) -> Feedback:
        q = self.current
        if self.complete or q is None:
            return Feedback(index=self.index, correct=False, counted=False)
        correct = is_correct(q, answer, self.options_for())
        counted = False
        # first non-blank answer locks the score for this question
        if self.index not in self.answers and not _is_blank(answer):
            self.answers[self.index] = answer
            counted = True
            if correct:
                self.score += 1
        log.debug("submit q%d correct=%s counted=%s score=%d", self.index, correct, counted, self.score)
        return Feedback(
            index=self.index,
            correct=correct,
            counted=counted,
            explanation=getattr(q, "explanation", None),
        )

    def check_match(self, match_key: str, item: Optional[str]) -> bool:
        return check_match(self.current, match_key, item)

    def next(self) -> bool:
        """Advance; on the last question finish the quiz and return False."""
        if self.complete:
            return False
        if self.index < self.total - 1:
            self.index += 1
            return True
        self.finish()
        return False

    def previous(self) -> bool:
        if self.complete or self.index <= 0:
            return False
        self.index -= 1
        return True

    def finish(self) -> QuizResult:
        """Close the quiz; later calls return the same result."""
        if self.result is None:
            self.complete = True
            self.result = summarize(self.score, self.total, self.answers)
            log.info("session finished: %d/%d (%d%%)", self.result.score, self.result.total, self.result.percentage)
        return self.result

    def restart(self) -> None:
        self.index = 0
        self.score = 0
        self.answers.clear()
        self.plans.clear()
        self.complete = False
        self.result = None
        self.shuffle_state.clear()
        log.info("session restarted: %r", self.quiz.title)

    def shuffle_debug(self) -> Dict[str, object]:
        return self.shuffle_state.snapshot()
