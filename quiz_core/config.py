from __future__ import annotations
import os, json, pathlib, random


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


MAX_SHUFFLE_ATTEMPTS: int = 50

DEFAULT_SHUFFLE_ANSWERS: bool = False
DEFAULT_CASE_SENSITIVE: bool = False
DEFAULT_ORDER_SENSITIVE: bool = True
DEFAULT_SHUFFLE_CHOICES: bool = False
DEFAULT_SHUFFLE_MATCHES: bool = False
DEFAULT_UNEQUAL_LIST: bool = False

DECOY_ITEMS: tuple[str, ...] = ("Distractor A", "Distractor B")
DECOY_MATCHES: tuple[str, ...] = ("Extra Option 1", "Extra Option 2")
DECOY_MIN: int = 1
DECOY_MAX: int = 2

RESULT_TIERS: tuple[tuple[int, str], ...] = (
    (90, "Excellent work! You mastered this quiz!"),
    (70, "Good job! Keep practicing to improve further."),
    (50, "Not bad! Review the material and try again."),
)
RESULT_FLOOR_MESSAGE: str = "Keep studying! You can do better with more practice."

DEBUG_TRACE: bool = False
# // env overrides for local runs; defaults match the browser engine.
MAX_SHUFFLE_ATTEMPTS = max(1, _env_int("QUIZ_MAX_SHUFFLE_ATTEMPTS", MAX_SHUFFLE_ATTEMPTS))
DECOY_MIN = max(0, _env_int("QUIZ_DECOY_MIN", DECOY_MIN))
DECOY_MAX = max(DECOY_MIN, _env_int("QUIZ_DECOY_MAX", DECOY_MAX))
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)


def load_config(path: str = "config.json") -> dict:
    cfg = {}
    p = pathlib.Path(path)
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    if not isinstance(cfg, dict):
        cfg = {}
    e = os.environ
    if e.get("QUIZ_FILE"): cfg["QUIZ_FILE"] = e.get("QUIZ_FILE")
    if e.get("SEED"):
        try: cfg["SEED"] = int(e.get("SEED"))
        except ValueError: pass
    return cfg


def make_rng(cfg: dict | None = None) -> random.Random:
    """Random source for a session; seeded when the config carries SEED."""

    s = (cfg or {}).get("SEED")
    if s is None:
        return random.Random()
    return random.Random(int(s))
