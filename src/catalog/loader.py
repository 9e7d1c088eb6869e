"""
Exercise folder loader.

Layout on disk::

    <root>/
        Barbell_Squat/
            exercise.json
            enriched.json      (optional, written by enrich_exercises)
        Plank/
            exercise.json

Every script walks the same tree independently. A folder without an
``exercise.json`` is skipped by the caller, never treated as fatal.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from catalog.constants import EXERCISE_FILE, VALID_TRACKING_TYPES, TrackingType

log = logging.getLogger("catalog.loader")


class ExercisesDirNotFound(RuntimeError):
    """The exercises root directory does not exist."""


class InvalidExerciseError(ValueError):
    """An exercise document is not usable (not an object, no name)."""


def flatten_instructions(instructions: List[str] | None) -> str | None:
    """Join instruction paragraphs with a blank line; empty -> None."""
    if not instructions:
        return None
    return "\n\n".join(instructions)


def _opt_str(value: Any) -> str | None:
    # "" and null both mean "not set"
    if value is None or value == "":
        return None
    return str(value)


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if not isinstance(value, list):
        raise InvalidExerciseError(f"Expected a list, got {type(value).__name__}")
    return [str(v) for v in value]


@dataclass
class ExerciseRecord:
    name: str
    force: Optional[str] = None
    level: Optional[str] = None
    mechanic: Optional[str] = None
    equipment: Optional[str] = None
    category: Optional[str] = None
    primary_muscles: List[str] = field(default_factory=list)
    secondary_muscles: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    tracking_type: Optional[TrackingType] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "ExerciseRecord":
        if not isinstance(data, dict):
            raise InvalidExerciseError("Exercise document must be a JSON object")
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidExerciseError("Exercise document has no name")

        tracking = data.get("trackingType")
        if not isinstance(tracking, str) or tracking not in VALID_TRACKING_TYPES:
            tracking = None
        return cls(
            name=name,
            force=_opt_str(data.get("force")),
            level=_opt_str(data.get("level")),
            mechanic=_opt_str(data.get("mechanic")),
            equipment=_opt_str(data.get("equipment")),
            category=_opt_str(data.get("category")),
            primary_muscles=_str_list(data.get("primaryMuscles")),
            secondary_muscles=_str_list(data.get("secondaryMuscles")),
            instructions=_str_list(data.get("instructions")),
            tracking_type=TrackingType(tracking) if tracking else None,
            raw=dict(data),
        )

    @property
    def instructions_text(self) -> str | None:
        return flatten_instructions(self.instructions)

    def to_json(self) -> Dict[str, Any]:
        """Original document, plus ``trackingType`` once classified."""
        out = dict(self.raw) if self.raw else {"name": self.name}
        if self.tracking_type is not None:
            out["trackingType"] = TrackingType(self.tracking_type).value
        return out


# ─── Directory traversal ─────────────────────────────────────


def list_exercise_folders(root: str | Path) -> List[str]:
    """Return immediate subdirectory names of *root*, sorted by name."""
    root = Path(root)
    if not root.is_dir():
        raise ExercisesDirNotFound(f"Exercises directory not found: {root}")
    return sorted(p.name for p in root.iterdir() if p.is_dir())


def exercise_path(root: str | Path, folder: str, filename: str = EXERCISE_FILE) -> Path:
    return Path(root) / folder / filename


def load_json(path: str | Path) -> Any:
    """Load and return JSON from a file path."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_exercise(root: str | Path, folder: str) -> ExerciseRecord | None:
    """Load ``<root>/<folder>/exercise.json``.

    Returns None when the file is missing. Malformed JSON and invalid
    documents raise, so the caller can count them as errors.
    """
    path = exercise_path(root, folder)
    if not path.is_file():
        return None
    return ExerciseRecord.from_json(load_json(path))


def find_exercise_folder(root: str | Path, name: str) -> str | None:
    """Linear scan for the first folder whose exercise has exactly *name*."""
    for folder in list_exercise_folders(root):
        try:
            record = load_exercise(root, folder)
        except (json.JSONDecodeError, InvalidExerciseError, OSError) as e:
            log.debug("Skipping unreadable %s: %s", folder, e)
            continue
        if record is not None and record.name == name:
            return folder
    return None


def write_exercise(path: str | Path, record: ExerciseRecord) -> None:
    """Write *record* as pretty-printed JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record.to_json(), f, indent=2, ensure_ascii=False)
