"""
Exercise Store
==============
PostgreSQL table holding the exercise catalog, keyed by exercise name.

Tables:
  - exercises   (one row per exercise, UNIQUE name)

Writes go through a single upsert so re-running the importer on
unchanged input leaves every row as it was.
"""
import logging

from catalog.constants import TrackingType

logger = logging.getLogger("catalog.store")

EXERCISES_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS exercises (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,

    -- Muscles (ordered as authored)
    primary_muscles TEXT[] NOT NULL DEFAULT '{}',
    secondary_muscles TEXT[] NOT NULL DEFAULT '{}',

    -- Classification
    equipment TEXT,
    category TEXT,
    force TEXT,
    mechanic TEXT,
    level TEXT,
    tracking_type TEXT CHECK (
        tracking_type IN ('REPS_WEIGHT', 'REPS_BODYWEIGHT', 'TIME', 'DISTANCE_TIME')
    ),

    -- Paragraphs joined by blank lines
    instructions TEXT,

    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_exercises_category ON exercises(category)
"""

UPSERT_EXERCISE_SQL = """
    INSERT INTO exercises (
        name, primary_muscles, secondary_muscles, equipment, category,
        instructions, force, mechanic, level, tracking_type
    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
    ON CONFLICT (name) DO UPDATE SET
        primary_muscles=EXCLUDED.primary_muscles,
        secondary_muscles=EXCLUDED.secondary_muscles,
        equipment=EXCLUDED.equipment,
        category=EXCLUDED.category,
        instructions=EXCLUDED.instructions,
        force=EXCLUDED.force,
        mechanic=EXCLUDED.mechanic,
        level=EXCLUDED.level,
        tracking_type=COALESCE(EXCLUDED.tracking_type, exercises.tracking_type)
"""


def ensure_schema(conn):
    """Create the exercises table if it does not exist yet."""
    cur = conn.cursor()
    try:
        for statement in EXERCISES_SCHEMA_SQL.split(';'):
            stmt = statement.strip()
            if stmt:
                cur.execute(stmt)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
    logger.info("Schema ready: exercises")


def exercise_params(record) -> tuple:
    """Column values for UPSERT_EXERCISE_SQL, in placeholder order."""
    tracking = TrackingType(record.tracking_type).value if record.tracking_type else None
    return (
        record.name,
        list(record.primary_muscles),
        list(record.secondary_muscles),
        record.equipment,
        record.category,
        record.instructions_text,
        record.force,
        record.mechanic,
        record.level,
        tracking,
    )


def upsert_exercise(cur, record):
    """Insert or update one exercise row keyed by name."""
    cur.execute(UPSERT_EXERCISE_SQL, exercise_params(record))
