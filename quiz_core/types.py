from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union, Literal

TextKind = Literal["identification", "text"]
Slot = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class QuizOptions:
    """Partial option set; ``None`` means inherit from the level above."""
    shuffle_answers: Optional[bool] = None
    case_sensitive: Optional[bool] = None
    order_sensitive: Optional[bool] = None
    shuffle_choices: Optional[bool] = None
    shuffle_matches: Optional[bool] = None
    unequal_list: Optional[bool] = None


@dataclass(frozen=True)
class EffectiveOptions:
    shuffle_answers: bool = False
    case_sensitive: bool = False
    order_sensitive: bool = True
    shuffle_choices: bool = False
    shuffle_matches: bool = False
    unequal_list: bool = False


# ---- questions ----
@dataclass(frozen=True)
class MultipleChoice:
    question: str; choices: Tuple[str, ...]; correct_answer: int
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

@dataclass(frozen=True)
class MultipleAnswer:
    question: str; choices: Tuple[str, ...]; correct_answer: frozenset
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

@dataclass(frozen=True)
class TrueFalse:
    question: str; correct_answer: bool
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

@dataclass(frozen=True)
class Identification:
    question: str; correct_answer: Union[str, Tuple[str, ...]]
    kind: TextKind = "identification"
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

@dataclass(frozen=True)
class Enumeration:
    question: str; correct_answer: Tuple[Slot, ...]
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

@dataclass(frozen=True)
class Matching:
    question: str; items: Tuple[str, ...]; matches: Tuple[str, ...]
    correct_matches: Dict[str, str] = field(default_factory=dict, hash=False)
    explanation: Optional[str] = None
    hint: Optional[str] = None
    overrides: Optional[QuizOptions] = None

Question = Union[MultipleChoice, MultipleAnswer, TrueFalse, Identification, Enumeration, Matching]
QUESTION_TYPES: Tuple[type, ...] = (MultipleChoice, MultipleAnswer, TrueFalse, Identification, Enumeration, Matching)


@dataclass(frozen=True)
class QuizDefinition:
    title: str
    description: str = ""
    questions: Tuple[Question, ...] = ()
    options: QuizOptions = field(default_factory=QuizOptions)


# ---- display plans ----
@dataclass(frozen=True)
class ChoicePlan:
    """Display order for multiple choice/answer; ``order[pos]`` is the canonical index."""
    kind: Literal["multiple-choice", "multiple-answer"]
    order: Tuple[int, ...]
    labels: Tuple[str, ...]
    multi: bool = False

    def to_canonical(self, display_pos: int) -> Optional[int]:
        if isinstance(display_pos, bool) or not isinstance(display_pos, int):
            return None
        if 0 <= display_pos < len(self.order):
            return self.order[display_pos]
        return None

@dataclass(frozen=True)
class TrueFalsePlan:
    true_first: bool = True

    @property
    def values(self) -> Tuple[bool, bool]:
        return (True, False) if self.true_first else (False, True)

    @property
    def labels(self) -> Tuple[str, str]:
        return tuple("True" if v else "False" for v in self.values)  # type: ignore[return-value]

    def to_canonical(self, display_pos: int) -> Optional[bool]:
        if display_pos in (0, 1) and not isinstance(display_pos, bool):
            return self.values[display_pos]
        return None

@dataclass(frozen=True)
class MatchingPlan:
    """Items/matches as displayed; real entries first (possibly shuffled), decoys appended."""
    items: Tuple[str, ...]
    matches: Tuple[str, ...]
    item_order: Tuple[int, ...]
    match_order: Tuple[int, ...]
    decoy_items: Tuple[str, ...] = ()
    decoy_matches: Tuple[str, ...] = ()

@dataclass(frozen=True)
class FreeTextPlan:
    kind: Literal["identification", "text", "enumeration"]
    inputs: int = 1

@dataclass(frozen=True)
class EmptyPlan:
    inputs: int = 0

DisplayPlan = Union[ChoicePlan, TrueFalsePlan, MatchingPlan, FreeTextPlan, EmptyPlan]


# ---- session outputs ----
@dataclass
class Feedback:
    index: int
    correct: bool
    counted: bool
    explanation: Optional[str] = None

@dataclass
class QuizResult:
    score: int
    total: int
    percentage: int
    message: str
    answers: Dict[int, object] = field(default_factory=dict)
