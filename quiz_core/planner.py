from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple
import logging

from . import config
from .types import (
    ChoicePlan,
    DisplayPlan,
    EffectiveOptions,
    EmptyPlan,
    Enumeration,
    FreeTextPlan,
    Identification,
    Matching,
    MatchingPlan,
    MultipleAnswer,
    MultipleChoice,
    TrueFalse,
    TrueFalsePlan,
)
from .shuffle import RandomSource, ShuffleState, draw_index, shuffle_binary_orientation, shuffle_indices

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecoyPolicy:
    """Extra entries appended to matching lists when ``unequal_list`` is on."""
    items: Tuple[str, ...] = field(default_factory=lambda: tuple(config.DECOY_ITEMS))
    matches: Tuple[str, ...] = field(default_factory=lambda: tuple(config.DECOY_MATCHES))
    min_count: int = field(default_factory=lambda: config.DECOY_MIN)
    max_count: int = field(default_factory=lambda: config.DECOY_MAX)

    def count(self, rng: RandomSource) -> int:
        lo = max(0, int(self.min_count))
        hi = max(lo, int(self.max_count))
        return lo + draw_index(rng, hi - lo + 1)


def state_key(prefix: str, index: int) -> str:
    return f"{prefix}_{index}"


def _pick_decoys(pool: Tuple[str, ...], taken: Tuple[str, ...], n: int) -> Tuple[str, ...]:
    seen = set(taken)
    out = []
    for entry in pool:
        if len(out) >= n:
            break
        if entry in seen:
            continue
        seen.add(entry)
        out.append(entry)
    return tuple(out)


def _plan_choices(q, index: int, options: EffectiveOptions, state: ShuffleState, rng: RandomSource, decoys=None) -> ChoicePlan:
    multi = isinstance(q, MultipleAnswer)
    prefix = "ma" if multi else "mc"
    choices = tuple(q.choices or ())
    order: Tuple[int, ...] = tuple(range(len(choices)))
    if options.shuffle_answers:
        order = shuffle_indices(len(choices), state_key(prefix, index), state, rng)
    return ChoicePlan(
        kind="multiple-answer" if multi else "multiple-choice",
        order=order,
        labels=tuple(choices[i] for i in order),
        multi=multi,
    )


def _plan_true_false(q, index: int, options: EffectiveOptions, state: ShuffleState, rng: RandomSource, decoys=None) -> TrueFalsePlan:
    if not options.shuffle_answers:
        return TrueFalsePlan(true_first=True)
    return TrueFalsePlan(true_first=shuffle_binary_orientation(state_key("tf", index), state, rng))


def _plan_matching(q, index: int, options: EffectiveOptions, state: ShuffleState, rng: RandomSource,
                   decoys: DecoyPolicy) -> MatchingPlan:
    items = tuple(q.items or ())
    matches = tuple(q.matches or ())
    item_order: Tuple[int, ...] = tuple(range(len(items)))
    match_order: Tuple[int, ...] = tuple(range(len(matches)))
    if options.shuffle_choices:
        item_order = shuffle_indices(len(items), state_key("matching_items", index), state, rng)
    if options.shuffle_matches:
        match_order = shuffle_indices(len(matches), state_key("matching_matches", index), state, rng)

    decoy_items: Tuple[str, ...] = ()
    decoy_matches: Tuple[str, ...] = ()
    if options.unequal_list:
        decoy_items = _pick_decoys(decoys.items, items, decoys.count(rng))
        taken = matches + tuple((q.correct_matches or {}).keys())
        decoy_matches = _pick_decoys(decoys.matches, taken, decoys.count(rng))

    return MatchingPlan(
        items=tuple(items[i] for i in item_order) + decoy_items,
        matches=tuple(matches[i] for i in match_order) + decoy_matches,
        item_order=item_order,
        match_order=match_order,
        decoy_items=decoy_items,
        decoy_matches=decoy_matches,
    )


def _plan_identification(q, index, options, state, rng, decoys=None) -> FreeTextPlan:
    return FreeTextPlan(kind=q.kind if q.kind in ("identification", "text") else "identification", inputs=1)


def _plan_enumeration(q, index, options, state, rng, decoys=None) -> FreeTextPlan:
    return FreeTextPlan(kind="enumeration", inputs=len(q.correct_answer or ()))


_PLANNERS: Dict[type, Callable[..., DisplayPlan]] = {
    MultipleChoice: _plan_choices,
    MultipleAnswer: _plan_choices,
    TrueFalse: _plan_true_false,
    Identification: _plan_identification,
    Enumeration: _plan_enumeration,
    Matching: _plan_matching,
}


def plan_display(
    question,
    index: int,
    options: EffectiveOptions,
    state: ShuffleState,
    rng: RandomSource,
    decoys: Optional[DecoyPolicy] = None,
) -> DisplayPlan:
    """
    Decide what to show for one question. ``index`` namespaces the shuffle
    state keys. Unknown or malformed questions yield an EmptyPlan.
    """
    planner = _PLANNERS.get(type(question))
    if planner is None:
        log.debug("no planner for %s; empty plan", type(question).__name__)
        return EmptyPlan()
    try:
        return planner(question, index, options, state, rng, decoys or DecoyPolicy())
    except (TypeError, ValueError, AttributeError, IndexError):
        log.debug("malformed question %s; empty plan", index, exc_info=True)
        return EmptyPlan()


PLANNED_TYPES: Tuple[type, ...] = tuple(_PLANNERS)
