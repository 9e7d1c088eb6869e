"""
Tracking-Type Enrichment Check
==============================
Runs the Ollama classifier against a fixed table of exercises whose
tracking type is known and reports pass / fail / not-found counts.

Usage:
    python verify_enrichment.py
    python verify_enrichment.py --dir ./exercises --model qwen2.5:7b

Exits non-zero when any case fails or its exercise cannot be found.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("verify_enrichment")

from catalog import config
from catalog.classifier import TrackingTypeClassifier
from catalog.loader import ExercisesDirNotFound, find_exercise_folder, load_exercise

# (exercise name, expected tracking type)
DEFAULT_CASES: List[Tuple[str, str]] = [
    ("Barbell Squat", "REPS_WEIGHT"),
    ("Plank", "TIME"),
    ("Push-Up", "REPS_BODYWEIGHT"),
    ("3/4 Sit-Up", "REPS_BODYWEIGHT"),
]


@dataclass
class VerificationResult:
    passed: int = 0
    failed: int = 0
    not_found: int = 0
    failures: List[Tuple[str, str, str | None]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.not_found == 0


def run_cases(
    root: Path,
    classifier,
    cases: Sequence[Tuple[str, str]] = DEFAULT_CASES,
    delay: float = config.REQUEST_DELAY_SECONDS,
) -> VerificationResult:
    """Classify each named exercise and compare with its expected label."""
    result = VerificationResult()
    log.info("Running %d test cases...", len(cases))

    for name, expected in cases:
        folder = find_exercise_folder(root, name)
        exercise = load_exercise(root, folder) if folder else None
        if exercise is None:
            log.info("NOT FOUND: %s", name)
            result.not_found += 1
            continue

        got = classifier.classify(exercise)
        got_label = got.value if got is not None else None

        if got_label == expected:
            log.info("PASS: %s", name)
            result.passed += 1
        else:
            log.info("FAIL: %s", name)
            log.info("  Expected: %s", expected)
            log.info("  Got: %s", got_label)
            result.failed += 1
            result.failures.append((name, expected, got_label))

        time.sleep(delay)

    log.info("%d passed, %d failed, %d not found", result.passed, result.failed, result.not_found)
    return result


def main():
    parser = argparse.ArgumentParser(description="Check Ollama tracking-type answers against known exercises")
    parser.add_argument("--dir", type=Path, default=config.EXERCISES_DIR,
                        help="Exercises root directory (default: EXERCISES_DIR)")
    parser.add_argument("--model", default=config.OLLAMA_MODEL,
                        help=f"Ollama model (default: {config.OLLAMA_MODEL})")
    parser.add_argument("--ollama-url", default=config.OLLAMA_URL,
                        help=f"Ollama base URL (default: {config.OLLAMA_URL})")
    args = parser.parse_args()

    classifier = TrackingTypeClassifier(base_url=args.ollama_url, model=args.model)
    try:
        result = run_cases(args.dir, classifier)
    except ExercisesDirNotFound as e:
        log.error("%s", e)
        sys.exit(1)
    finally:
        classifier.close()
    sys.exit(0 if result.ok else 1)


if __name__ == "__main__":
    main()
