"""
Shared test configuration.

Adds src/ to sys.path so that:
  - the catalog package imports as `catalog.*`
  - the CLI scripts import as plain modules (`import seed_exercises`)

Also provides a small on-disk exercises tree for loader / script tests.
"""

import json
import os
import sys

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


SAMPLE_EXERCISES = {
    "3_4_Sit-Up": {
        "name": "3/4 Sit-Up",
        "force": "pull",
        "level": "beginner",
        "mechanic": "compound",
        "equipment": "body only",
        "primaryMuscles": ["abdominals"],
        "secondaryMuscles": [],
        "instructions": [
            "Lie down on the floor and secure your feet.",
            "Flex your hips and spine to raise your torso.",
        ],
        "category": "strength",
        "images": ["3_4_Sit-Up/0.jpg"],
        "id": "3_4_Sit-Up",
    },
    "Barbell_Squat": {
        "name": "Barbell Squat",
        "force": "push",
        "level": "beginner",
        "mechanic": "compound",
        "equipment": "barbell",
        "primaryMuscles": ["quadriceps"],
        "secondaryMuscles": ["calves", "glutes", "hamstrings", "lower back"],
        "instructions": ["Set the bar on a rack.", "Squat down and stand back up."],
        "category": "strength",
    },
    "Plank": {
        "name": "Plank",
        "force": "static",
        "level": "beginner",
        "mechanic": "isolation",
        "equipment": "body only",
        "primaryMuscles": ["abdominals"],
        "secondaryMuscles": [],
        "instructions": ["Hold a push-up position on your forearms."],
        "category": "strength",
    },
    "Pushups": {
        "name": "Push-Up",
        "force": "push",
        "level": "beginner",
        "mechanic": "compound",
        "equipment": "body only",
        "primaryMuscles": ["chest"],
        "secondaryMuscles": ["shoulders", "triceps"],
        "instructions": ["Lie on the floor face down.", "Push your body up."],
        "category": "strength",
    },
}


def write_exercise_folder(root, folder, data=None, raw=None):
    """Create <root>/<folder>/ and, unless both are None, an exercise.json."""
    path = root / folder
    path.mkdir(parents=True, exist_ok=True)
    if raw is not None:
        (path / "exercise.json").write_text(raw, encoding="utf-8")
    elif data is not None:
        (path / "exercise.json").write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def exercises_dir(tmp_path):
    """Four valid exercise folders in a fresh directory."""
    root = tmp_path / "exercises"
    root.mkdir()
    for folder, data in SAMPLE_EXERCISES.items():
        write_exercise_folder(root, folder, data)
    return root
