from __future__ import annotations
from dataclasses import fields
from typing import Optional

from .types import QuizOptions, EffectiveOptions
from .config import (
    DEFAULT_SHUFFLE_ANSWERS,
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_ORDER_SENSITIVE,
    DEFAULT_SHUFFLE_CHOICES,
    DEFAULT_SHUFFLE_MATCHES,
    DEFAULT_UNEQUAL_LIST,
)

DEFAULTS = EffectiveOptions(
    shuffle_answers=DEFAULT_SHUFFLE_ANSWERS,
    case_sensitive=DEFAULT_CASE_SENSITIVE,
    order_sensitive=DEFAULT_ORDER_SENSITIVE,
    shuffle_choices=DEFAULT_SHUFFLE_CHOICES,
    shuffle_matches=DEFAULT_SHUFFLE_MATCHES,
    unequal_list=DEFAULT_UNEQUAL_LIST,
)


def resolve_options(global_options: Optional[QuizOptions], override: Optional[QuizOptions] = None) -> EffectiveOptions:
    """Merge per-question override over quiz-level options over defaults, field by field."""

    resolved = {}
    for f in fields(EffectiveOptions):
        value = getattr(DEFAULTS, f.name)
        for layer in (global_options, override):
            if layer is None:
                continue
            v = getattr(layer, f.name, None)
            if v is not None:
                value = bool(v)
        resolved[f.name] = value
    return EffectiveOptions(**resolved)
