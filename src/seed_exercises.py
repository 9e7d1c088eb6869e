"""
Exercise Seed Importer
======================
Loads every ``<exercises>/<folder>/exercise.json`` into the PostgreSQL
``exercises`` table, upserting by exercise name.

Usage:
    python seed_exercises.py                    # Import from EXERCISES_DIR
    python seed_exercises.py --dir ./exercises  # Import from a given root
    python seed_exercises.py --init-schema      # Create the table first

Folders without an exercise.json are skipped; a broken record is counted
as an error and the run moves on.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("seed_exercises")

from catalog import config
from catalog.db import get_connection
from catalog.loader import ExercisesDirNotFound, list_exercise_folders, load_exercise
from catalog.store import ensure_schema, upsert_exercise


@dataclass
class ImportSummary:
    imported: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0


def run_import(root: Path, conn, progress_every: int = config.PROGRESS_EVERY) -> ImportSummary:
    """Upsert every exercise under *root*; one commit per record."""
    folders = list_exercise_folders(root)
    summary = ImportSummary(total=len(folders))
    log.info("Found %d exercise folders", summary.total)

    cur = conn.cursor()
    try:
        for folder in folders:
            try:
                record = load_exercise(root, folder)
                if record is None:
                    log.warning("No exercise.json found in %s", folder)
                    summary.skipped += 1
                    continue

                upsert_exercise(cur, record)
                conn.commit()
                summary.imported += 1

                if summary.imported % progress_every == 0:
                    log.info("Imported %d/%d exercises...", summary.imported, summary.total)
            except Exception as e:
                conn.rollback()
                summary.errors += 1
                log.error("Error importing %s: %s", folder, e)
    finally:
        cur.close()

    _log_summary(summary)
    return summary


def _log_summary(summary: ImportSummary):
    log.info("=== Import Summary ===")
    log.info("  Successfully imported: %d", summary.imported)
    log.info("  Skipped:               %d", summary.skipped)
    log.info("  Errors:                %d", summary.errors)
    log.info("  Total:                 %d", summary.total)


def main():
    parser = argparse.ArgumentParser(description="Import exercise JSON files into PostgreSQL")
    parser.add_argument("--dir", type=Path, default=config.EXERCISES_DIR,
                        help="Exercises root directory (default: EXERCISES_DIR)")
    parser.add_argument("--init-schema", action="store_true",
                        help="Create the exercises table before importing")
    args = parser.parse_args()

    if not args.dir.is_dir():
        log.error("Fatal error during seed: Exercises directory not found: %s", args.dir)
        sys.exit(1)

    try:
        conn = get_connection()
    except (RuntimeError, psycopg2.Error) as e:
        log.error("Fatal error during seed: %s", e)
        sys.exit(1)

    try:
        if args.init_schema:
            ensure_schema(conn)
        run_import(args.dir, conn)
    except (ExercisesDirNotFound, psycopg2.Error) as e:
        log.error("Fatal error during seed: %s", e)
        sys.exit(1)
    finally:
        conn.close()
    sys.exit(0)


if __name__ == "__main__":
    main()
