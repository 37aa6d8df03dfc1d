from __future__ import annotations
import argparse, logging
from typing import Any, Dict, List, Optional

from quiz_core.config import DEBUG_TRACE, load_config, make_rng
from quiz_core.loader import QuizDefinitionError, load_quiz, load_sample
from quiz_core.session import QuizSession
from quiz_core.answer_key import answer_key_lines, option_badges, type_label
from quiz_core.types import ChoicePlan, EmptyPlan, FreeTextPlan, MatchingPlan, TrueFalsePlan


def _int(token: str) -> Optional[int]:
    t = token.strip()
    return int(t) if t.isdigit() else None


def translate_input(plan, raw: str) -> Any:
    """Turn console text into the canonical answer for the planned question; None when unusable."""
    text = (raw or "").strip()
    if isinstance(plan, ChoicePlan):
        if plan.multi:
            picked = [plan.to_canonical(_int(t)) for t in text.split(",") if t.strip()]
            return None if not picked or None in picked else picked
        return plan.to_canonical(_int(text))
    if isinstance(plan, TrueFalsePlan):
        low = text.lower()
        if low in ("t", "true"): return True
        if low in ("f", "false"): return False
        return plan.to_canonical(_int(text))
    if isinstance(plan, FreeTextPlan):
        if plan.kind == "enumeration":
            return [part.strip() for part in text.split(";") if part.strip()]
        return text
    if isinstance(plan, MatchingPlan):
        pairs: Dict[str, str] = {}
        for chunk in text.split(","):
            if "=" not in chunk: continue
            m, i = (_int(x) for x in chunk.split("=", 1))
            if m is None or i is None: return None
            if not (0 <= m < len(plan.matches) and 0 <= i < len(plan.items)): return None
            pairs[plan.matches[m]] = plan.items[i]
        return pairs or None
    return None


def render(plan) -> List[str]:
    if isinstance(plan, (ChoicePlan, TrueFalsePlan)):
        hint = "Your choices (indices, comma separated): " if getattr(plan, "multi", False) else "Your choice (index): "
        return [f"  [{i}] {label}" for i, label in enumerate(plan.labels)] + [hint]
    if isinstance(plan, FreeTextPlan):
        if plan.kind == "enumeration":
            return [f"  {plan.inputs} answer(s), separated by ';'", "Your answers: "]
        return ["Your answer: "]
    if isinstance(plan, MatchingPlan):
        lines = ["  Items:"] + [f"    [{i}] {it}" for i, it in enumerate(plan.items)]
        lines += ["  Match with:"] + [f"    [{i}] {m}" for i, m in enumerate(plan.matches)]
        return lines + ["Pairs as match=item, comma separated: "]
    return ["(no input for this question) "]


def ask(lines: List[str]) -> str:
    for line in lines[:-1]: print(line)
    return input(lines[-1]).strip()


def run(session: QuizSession) -> None:
    quiz = session.quiz
    print(quiz.title)
    if quiz.description: print(quiz.description)
    while not session.complete:
        q = session.current
        opts = session.options_for()
        plan = session.plan()
        print(f"\nQuestion {session.index + 1}/{session.total} [{type_label(q)}]  score {session.score}")
        print("Active options: " + " | ".join(option_badges(opts)))
        print(q.question)
        raw = "" if isinstance(plan, EmptyPlan) else ask(render(plan))
        while raw == "?":
            print(f"Hint: {q.hint}" if q.hint else "No hint for this question.")
            raw = ask(render(plan))
        fb = session.submit(translate_input(plan, raw))
        print("Correct!" if fb.correct else "Incorrect.")
        if not fb.correct:
            for line in answer_key_lines(q, opts): print("  " + line)
        elif fb.explanation:
            print(f"  Explanation: {fb.explanation}")
        session.next()

    res = session.finish()
    print(f"\nQuiz Complete! {res.score}/{res.total} ({res.percentage}%)")
    print(res.message)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Run a quiz in the terminal.")
    ap.add_argument("quiz", nargs="?", help="quiz JSON file (default: bundled sample)")
    ap.add_argument("--seed", type=int, default=None)
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")
    if DEBUG_TRACE:
        logging.getLogger("quiz_core").setLevel(logging.DEBUG)

    cfg = load_config()
    if args.seed is not None: cfg["SEED"] = args.seed
    path = args.quiz or cfg.get("QUIZ_FILE")
    try:
        quiz = load_quiz(path) if path else load_sample()
    except QuizDefinitionError as e:
        print(f"Cannot load quiz: {e}")
        return 2
    run(QuizSession(quiz, rng=make_rng(cfg)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
