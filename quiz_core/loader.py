"""Load quiz definitions from the JSON format used by the browser quiz pages.

Only the shape is validated here (types, required keys, known question
types).  Semantic checks such as answer indices being in range live in
``quiz_core.audit``; the grader copes with such definitions by marking the
affected questions incorrect.
"""

from __future__ import annotations

import importlib.resources as ir
import json
import logging
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .types import (
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    QuizDefinition,
    QuizOptions,
    TrueFalse,
)

log = logging.getLogger(__name__)


class QuizDefinitionError(ValueError):
    """Raised when a quiz file cannot be read or does not match the expected shape."""


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OptionsSchema(_Schema):
    shuffle_answers: Optional[bool] = Field(None, alias="shuffleAnswers")
    case_sensitive: Optional[bool] = Field(None, alias="caseSensitive")
    order_sensitive: Optional[bool] = Field(None, alias="orderSensitive")
    shuffle_choices: Optional[bool] = Field(None, alias="shuffleChoices")
    shuffle_matches: Optional[bool] = Field(None, alias="shuffleMatches")
    unequal_list: Optional[bool] = Field(None, alias="unequalList")

    def to_options(self) -> QuizOptions:
        return QuizOptions(**self.model_dump())


class _QuestionSchema(_Schema):
    question: str
    explanation: Optional[str] = None
    hint: Optional[str] = None
    question_options: Optional[OptionsSchema] = Field(None, alias="questionOptions")

    def _common(self) -> dict:
        return {
            "question": self.question,
            "explanation": self.explanation,
            "hint": self.hint,
            "overrides": self.question_options.to_options() if self.question_options else None,
        }


class MultipleChoiceSchema(_QuestionSchema):
    type: Literal["multiple-choice"]
    options: List[str]
    correct_answer: int = Field(alias="correctAnswer")

    def build(self) -> MultipleChoice:
        return MultipleChoice(choices=tuple(self.options), correct_answer=self.correct_answer, **self._common())


class MultipleAnswerSchema(_QuestionSchema):
    type: Literal["multiple-answer"]
    options: List[str]
    correct_answer: List[int] = Field(alias="correctAnswer")

    def build(self) -> MultipleAnswer:
        return MultipleAnswer(choices=tuple(self.options), correct_answer=frozenset(self.correct_answer), **self._common())


class TrueFalseSchema(_QuestionSchema):
    type: Literal["true-false"]
    correct_answer: bool = Field(alias="correctAnswer")

    def build(self) -> TrueFalse:
        return TrueFalse(correct_answer=self.correct_answer, **self._common())


class IdentificationSchema(_QuestionSchema):
    type: Literal["identification", "text"]
    correct_answer: Union[str, List[str]] = Field(alias="correctAnswer")

    def build(self) -> Identification:
        expected = self.correct_answer if isinstance(self.correct_answer, str) else tuple(self.correct_answer)
        return Identification(correct_answer=expected, kind=self.type, **self._common())


class EnumerationSchema(_QuestionSchema):
    type: Literal["enumeration"]
    correct_answer: List[Union[str, List[str]]] = Field(alias="correctAnswer", min_length=1)

    def build(self) -> Enumeration:
        slots = tuple(s if isinstance(s, str) else tuple(s) for s in self.correct_answer)
        return Enumeration(correct_answer=slots, **self._common())


class MatchingSchema(_QuestionSchema):
    type: Literal["matching"]
    items: List[str]
    matches: List[str]
    correct_matches: Dict[str, str] = Field(alias="correctMatches")

    def build(self) -> Matching:
        return Matching(
            items=tuple(self.items),
            matches=tuple(self.matches),
            correct_matches=dict(self.correct_matches),
            **self._common(),
        )


QuestionSchema = Annotated[
    Union[
        MultipleChoiceSchema,
        MultipleAnswerSchema,
        TrueFalseSchema,
        IdentificationSchema,
        EnumerationSchema,
        MatchingSchema,
    ],
    Field(discriminator="type"),
]


class QuizSchema(_Schema):
    title: str
    description: str = ""
    options: OptionsSchema = Field(default_factory=OptionsSchema)
    questions: List[QuestionSchema] = Field(min_length=1)

    def build(self) -> QuizDefinition:
        return QuizDefinition(
            title=self.title,
            description=self.description,
            questions=tuple(q.build() for q in self.questions),
            options=self.options.to_options(),
        )


def parse_quiz(raw: dict) -> QuizDefinition:
    try:
        schema = QuizSchema.model_validate(raw)
    except ValidationError as e:
        log.warning("quiz definition rejected: %d error(s)", e.error_count())
        raise QuizDefinitionError(str(e)) from e
    quiz = schema.build()
    log.info("loaded quiz %r with %d question(s)", quiz.title, len(quiz.questions))
    return quiz


def parse_quiz_json(text: str) -> QuizDefinition:
    try:
        raw = json.loads(text)
    except ValueError as e:
        raise QuizDefinitionError(f"invalid JSON: {e}") from e
    return parse_quiz(raw)


def load_quiz(path: Union[str, Path]) -> QuizDefinition:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise QuizDefinitionError(f"cannot read {p}: {e}") from e
    return parse_quiz_json(text)


def load_sample() -> QuizDefinition:
    data = ir.files(__package__).joinpath("data").joinpath("sample_quiz.json").read_text(encoding="utf-8")
    return parse_quiz_json(data)
