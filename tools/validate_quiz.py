from __future__ import annotations
import argparse, os
from pathlib import Path

from quiz_core.audit import audit_quiz, print_report, write_summary
from quiz_core.loader import QuizDefinitionError, load_quiz, load_sample

# Optional JSON dump of the audit summary
SUMMARY_PATH = os.getenv("QUIZ_AUDIT_OUT", "")

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check a quiz definition for answer-key problems.")
    ap.add_argument("quiz", nargs="?", help="quiz JSON file (default: bundled sample)")
    args = ap.parse_args(argv)

    try:
        quiz = load_quiz(args.quiz) if args.quiz else load_sample()
    except QuizDefinitionError as e:
        print(f"✗ Invalid quiz definition:\n{e}")
        return 1

    summary = audit_quiz(quiz)
    print_report(summary)
    if SUMMARY_PATH:
        write_summary(summary, Path(SUMMARY_PATH))
    return 2 if summary["warnings"] else 0

if __name__ == "__main__":
    raise SystemExit(main())
