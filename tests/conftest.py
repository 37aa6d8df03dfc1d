from __future__ import annotations

import pytest

from quiz_core.types import (
    Enumeration,
    Identification,
    Matching,
    MultipleAnswer,
    MultipleChoice,
    QuizDefinition,
    QuizOptions,
    TrueFalse,
)


class ScriptedRandom:
    """Deterministic stand-in for random.Random: replays floats in a cycle and counts draws."""

    def __init__(self, values: list[float]):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def build_sample_quiz(*, options: QuizOptions | None = None) -> QuizDefinition:
    """Create a small quiz with one question of every kind."""

    questions = (
        MultipleChoice(
            question="Capital of France?",
            choices=("Berlin", "Madrid", "Paris", "Rome"),
            correct_answer=2,
            explanation="Paris is the capital.",
            hint="City of Light",
        ),
        MultipleAnswer(
            question="Pick the primes",
            choices=("2", "4", "7", "9"),
            correct_answer=frozenset({0, 2}),
        ),
        TrueFalse(question="The sky is blue.", correct_answer=True),
        Identification(question="Red Planet?", correct_answer=("Mars", "Planet Mars")),
        Enumeration(
            question="Name two pets",
            correct_answer=(("cat", "feline"), "dog"),
            overrides=QuizOptions(order_sensitive=False),
        ),
        Matching(
            question="Match letters",
            items=("X", "Y"),
            matches=("A", "B"),
            correct_matches={"A": "X", "B": "Y"},
            overrides=QuizOptions(shuffle_choices=True, shuffle_matches=True),
        ),
    )
    return QuizDefinition(
        title="Sample",
        description="one of each",
        questions=questions,
        options=options or QuizOptions(),
    )


@pytest.fixture
def sample_quiz() -> QuizDefinition:
    return build_sample_quiz()


@pytest.fixture
def zero_rng() -> ScriptedRandom:
    return ScriptedRandom([0.0])
