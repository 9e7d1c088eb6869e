"""Tracking-type classification through a local Ollama server."""

from __future__ import annotations

import json
import logging

import requests

from catalog import config
from catalog.constants import VALID_TRACKING_TYPES, TrackingType

log = logging.getLogger("catalog.classifier")

PROMPT_TEMPLATE = """Given this exercise data, return ONLY the tracking type enum.

Exercise: {name}
Primary Muscles: {primary_muscles}
Equipment: {equipment}
Category: {category}
Force: {force}

Valid tracking types:
- REPS_WEIGHT (exercises with external weight: barbells, dumbbells, machines, cables)
- REPS_BODYWEIGHT (bodyweight exercises counted by reps: pushups, pullups, dips)
- TIME (isometric holds or timed exercises: plank, wall sit, stretching)
- DISTANCE_TIME (cardio with distance/duration: running, rowing, cycling)

Rules:
- If equipment involves weights (barbell, dumbbell, machine, cable) → REPS_WEIGHT
- If category is 'cardio' → DISTANCE_TIME
- If category is 'stretching' → TIME
- If exercise name contains 'plank', 'hold', 'bridge' → TIME
- If equipment is 'body only' and not timed → REPS_BODYWEIGHT

Return only the enum value, no explanation."""


def build_prompt(record) -> str:
    """Render the classification prompt for one exercise."""
    return PROMPT_TEMPLATE.format(
        name=record.name,
        primary_muscles=json.dumps(list(record.primary_muscles)),
        equipment=record.equipment or "none",
        category=record.category,
        force=record.force or "none",
    )


def parse_tracking_type(text) -> TrackingType | None:
    """Trimmed exact match against the four allowed labels."""
    if not isinstance(text, str):
        return None
    label = text.strip()
    if label not in VALID_TRACKING_TYPES:
        return None
    return TrackingType(label)


class TrackingTypeClassifier:
    """Ask the model for one tracking-type label per exercise.

    Every per-record failure (transport error, HTTP error, unexpected
    body, label outside the allow-list) comes back as None.
    """

    def __init__(
        self,
        base_url: str = config.OLLAMA_URL,
        model: str = config.OLLAMA_MODEL,
        timeout: float = config.OLLAMA_TIMEOUT,
        session=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def generate_url(self) -> str:
        return f"{self.base_url}/api/generate"

    def payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": 0},
        }

    def classify(self, record) -> TrackingType | None:
        try:
            resp = self.session.post(
                self.generate_url,
                json=self.payload(build_prompt(record)),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            text = resp.json()["response"]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            log.error("Error calling Ollama for %s: %s", record.name, e)
            return None

        result = parse_tracking_type(text)
        if result is None:
            log.warning("Invalid tracking type returned: %r for %s", text, record.name)
        return result

    def close(self):
        self.session.close()
