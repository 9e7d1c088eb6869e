"""
Exercise Tracking-Type Enrichment
=================================
Asks the local Ollama server for each exercise's tracking type and writes
the answer back next to (or over) the exercise document.

Usage:
    python enrich_exercises.py            # All folders, write enriched.json
    python enrich_exercises.py -c 20      # First 20 folders only
    python enrich_exercises.py -o         # Update exercise.json in place
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("enrich_exercises")

from catalog import config
from catalog.classifier import TrackingTypeClassifier
from catalog.constants import ENRICHED_FILE, EXERCISE_FILE
from catalog.loader import (
    ExercisesDirNotFound,
    InvalidExerciseError,
    exercise_path,
    list_exercise_folders,
    load_exercise,
    write_exercise,
)


@dataclass
class ProcessResult:
    folder: str
    name: str
    success: bool


@dataclass
class EnrichmentSummary:
    results: List[ProcessResult] = field(default_factory=list)
    skipped: int = 0
    override: bool = False

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)


def output_path(root: Path, folder: str, override: bool) -> Path:
    """exercise.json when overriding, otherwise a sibling enriched.json."""
    return exercise_path(root, folder, EXERCISE_FILE if override else ENRICHED_FILE)


def run_enrichment(
    root: Path,
    classifier,
    count: int | None = None,
    override: bool = False,
    delay: float = config.REQUEST_DELAY_SECONDS,
) -> EnrichmentSummary:
    """Classify the first *count* exercise folders (all when None)."""
    folders = list_exercise_folders(root)
    to_process = folders[:count] if count is not None else folders
    summary = EnrichmentSummary(override=override)

    log.info("Processing %d exercises...", len(to_process))

    for i, folder in enumerate(to_process, start=1):
        try:
            exercise = load_exercise(root, folder)
        except (json.JSONDecodeError, InvalidExerciseError, OSError) as e:
            log.error("Could not read %s: %s", folder, e)
            summary.results.append(ProcessResult(folder, folder, False))
            continue

        if exercise is None:
            log.warning("No exercise.json found in %s", folder)
            summary.skipped += 1
            continue

        log.info("[%d/%d] Processing: %s", i, len(to_process), exercise.name)
        tracking_type = classifier.classify(exercise)

        if tracking_type:
            exercise.tracking_type = tracking_type
            try:
                write_exercise(output_path(root, folder, override), exercise)
                summary.results.append(ProcessResult(folder, exercise.name, True))
            except OSError as e:
                log.error("Could not write %s: %s", folder, e)
                summary.results.append(ProcessResult(folder, exercise.name, False))
        else:
            summary.results.append(ProcessResult(folder, exercise.name, False))

        time.sleep(delay)

    _log_summary(summary)
    return summary


def _log_summary(summary: EnrichmentSummary):
    log.info("Complete: %d successful, %d failed", summary.successful, summary.failed)

    if summary.override:
        log.info("Updated %d exercise.json files directly", summary.successful)
    else:
        log.info("Created %d enriched.json files", summary.successful)

    if summary.failed:
        log.info("Failed exercises:")
        for r in summary.results:
            if not r.success:
                log.info("  - %s (%s)", r.name, r.folder)


def main():
    parser = argparse.ArgumentParser(description="Classify exercise tracking types with Ollama")
    parser.add_argument("-c", "--count", type=int, default=None,
                        help="Only process the first N exercise folders")
    parser.add_argument("-o", "--override", action="store_true",
                        help="Write trackingType into exercise.json instead of enriched.json")
    parser.add_argument("--dir", type=Path, default=config.EXERCISES_DIR,
                        help="Exercises root directory (default: EXERCISES_DIR)")
    parser.add_argument("--model", default=config.OLLAMA_MODEL,
                        help=f"Ollama model (default: {config.OLLAMA_MODEL})")
    parser.add_argument("--ollama-url", default=config.OLLAMA_URL,
                        help=f"Ollama base URL (default: {config.OLLAMA_URL})")
    args = parser.parse_args()

    if args.count is not None and args.count < 0:
        parser.error("--count must be zero or positive")

    classifier = TrackingTypeClassifier(base_url=args.ollama_url, model=args.model)
    try:
        run_enrichment(args.dir, classifier, count=args.count, override=args.override)
    except ExercisesDirNotFound as e:
        log.error("%s", e)
        sys.exit(1)
    finally:
        classifier.close()
    sys.exit(0)


if __name__ == "__main__":
    main()
