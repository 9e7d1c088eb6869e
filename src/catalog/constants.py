"""
Shared constants used across the catalog scripts.
Single source of truth for tracking-type labels and on-disk file names.
"""

from enum import Enum


class TrackingType(str, Enum):
    """How a user logs sets for an exercise."""

    REPS_WEIGHT = "REPS_WEIGHT"
    REPS_BODYWEIGHT = "REPS_BODYWEIGHT"
    TIME = "TIME"
    DISTANCE_TIME = "DISTANCE_TIME"


VALID_TRACKING_TYPES = frozenset(t.value for t in TrackingType)

# One folder per exercise, each holding these documents
EXERCISE_FILE = "exercise.json"
ENRICHED_FILE = "enriched.json"
