# quiz_core/shuffle.py
from __future__ import annotations
from typing import Dict, Optional, Protocol, Tuple, Union
import logging

from . import config

log = logging.getLogger(__name__)

Permutation = Tuple[int, ...]


class RandomSource(Protocol):
    def random(self) -> float: ...


class ShuffleState:
    """Last arrangement per state key: a permutation, or the True/False orientation."""

    def __init__(self) -> None:
        self._last: Dict[str, Union[Permutation, bool]] = {}

    def get(self, key: str) -> Optional[Union[Permutation, bool]]:
        return self._last.get(key)

    def set(self, key: str, value: Union[Permutation, bool]) -> None:
        self._last[key] = value

    def clear(self) -> None:
        self._last.clear()

    def snapshot(self) -> Dict[str, object]:
        return {k: (list(v) if isinstance(v, tuple) else v) for k, v in self._last.items()}

    def __contains__(self, key: str) -> bool:
        return key in self._last

    def __len__(self) -> int:
        return len(self._last)


def draw_index(rng: RandomSource, upper: int) -> int:
    # floor(random() * upper), clamped against sources that return 1.0
    j = int(rng.random() * upper)
    return min(max(j, 0), upper - 1)


def fisher_yates(n: int, rng: RandomSource) -> Permutation:
    out = list(range(n))
    for i in range(n - 1, 0, -1):
        j = draw_index(rng, i + 1)
        out[i], out[j] = out[j], out[i]
    return tuple(out)


def shuffle_indices(n: int, state_key: str, state: ShuffleState, rng: RandomSource) -> Permutation:
    """
    Random permutation of range(n) that differs from the last one stored under state_key.
    Redraws up to MAX_SHUFFLE_ATTEMPTS times, then accepts the last draw.
    n <= 1 returns the identity and leaves the state untouched.
    """
    if n <= 1:
        return tuple(range(max(n, 0)))

    previous = state.get(state_key)
    if not isinstance(previous, tuple) or len(previous) != n:
        previous = None

    attempts = 0
    while True:
        candidate = fisher_yates(n, rng)
        attempts += 1
        if previous is None or candidate != previous:
            break
        if attempts >= config.MAX_SHUFFLE_ATTEMPTS:
            log.debug("shuffle %s repeated after %d attempts; accepting", state_key, attempts)
            break

    state.set(state_key, candidate)
    if config.DEBUG_TRACE:
        log.info("shuffle key=%s attempts=%d order=%s", state_key, attempts, list(candidate))
    return candidate


def shuffle_binary_orientation(state_key: str, state: ShuffleState, rng: RandomSource) -> bool:
    """True/False orientation; strictly alternates once a prior orientation exists."""
    previous = state.get(state_key)
    if isinstance(previous, bool):
        true_first = not previous
    else:
        true_first = rng.random() < 0.5
    state.set(state_key, true_first)
    return true_first
