"""
Tests for the tracking-type enrichment script.

The classifier is a MagicMock (no Ollama server required).
"""
import json
import sys
from unittest.mock import patch, MagicMock

import pytest

import enrich_exercises
from catalog.constants import TrackingType
from conftest import SAMPLE_EXERCISES, write_exercise_folder

ANSWERS = {
    "3/4 Sit-Up": TrackingType.REPS_BODYWEIGHT,
    "Barbell Squat": TrackingType.REPS_WEIGHT,
    "Plank": TrackingType.TIME,
    "Push-Up": TrackingType.REPS_BODYWEIGHT,
}


def _classifier(answers=None):
    clf = MagicMock()
    table = ANSWERS if answers is None else answers
    clf.classify.side_effect = lambda rec: table.get(rec.name)
    return clf


def _read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class TestRunEnrichment:

    def test_writes_enriched_sibling_by_default(self, exercises_dir):
        summary = enrich_exercises.run_enrichment(exercises_dir, _classifier(), delay=0)
        assert summary.successful == 4
        assert summary.failed == 0

        enriched = _read(exercises_dir / "Barbell_Squat" / "enriched.json")
        assert enriched["trackingType"] == "REPS_WEIGHT"
        assert enriched["secondaryMuscles"] == SAMPLE_EXERCISES["Barbell_Squat"]["secondaryMuscles"]

        original = _read(exercises_dir / "Barbell_Squat" / "exercise.json")
        assert "trackingType" not in original

    def test_override_updates_exercise_json(self, exercises_dir):
        summary = enrich_exercises.run_enrichment(exercises_dir, _classifier(), override=True, delay=0)
        assert summary.successful == 4
        assert _read(exercises_dir / "Plank" / "exercise.json")["trackingType"] == "TIME"
        assert not (exercises_dir / "Plank" / "enriched.json").exists()

    def test_count_takes_first_n_in_order(self, exercises_dir):
        clf = _classifier()
        summary = enrich_exercises.run_enrichment(exercises_dir, clf, count=2, delay=0)
        assert [r.folder for r in summary.results] == ["3_4_Sit-Up", "Barbell_Squat"]
        assert clf.classify.call_count == 2
        assert not (exercises_dir / "Plank" / "enriched.json").exists()

    def test_count_zero_processes_nothing(self, exercises_dir):
        clf = _classifier()
        summary = enrich_exercises.run_enrichment(exercises_dir, clf, count=0, delay=0)
        assert summary.results == []
        clf.classify.assert_not_called()

    def test_missing_file_is_skipped(self, exercises_dir):
        write_exercise_folder(exercises_dir, "Empty")
        summary = enrich_exercises.run_enrichment(exercises_dir, _classifier(), delay=0)
        assert summary.skipped == 1
        assert summary.successful == 4
        assert not (exercises_dir / "Empty" / "enriched.json").exists()

    def test_failed_classification_writes_nothing(self, exercises_dir):
        answers = dict(ANSWERS, **{"Plank": None})
        summary = enrich_exercises.run_enrichment(exercises_dir, _classifier(answers), delay=0)
        assert summary.successful == 3
        assert summary.failed == 1
        failed = [r for r in summary.results if not r.success]
        assert failed[0].name == "Plank"
        assert failed[0].folder == "Plank"
        assert not (exercises_dir / "Plank" / "enriched.json").exists()

    def test_malformed_json_counted_as_failure(self, exercises_dir):
        write_exercise_folder(exercises_dir, "Broken", raw="[1, 2")
        summary = enrich_exercises.run_enrichment(exercises_dir, _classifier(), delay=0)
        assert summary.failed == 1
        assert summary.successful == 4

    @patch("enrich_exercises.time.sleep")
    def test_sleeps_between_calls(self, mock_sleep, exercises_dir):
        enrich_exercises.run_enrichment(exercises_dir, _classifier(), delay=0.1)
        assert mock_sleep.call_count == 4
        mock_sleep.assert_called_with(0.1)

    def test_summary_logs_failed_list(self, exercises_dir, caplog):
        answers = dict(ANSWERS, **{"Push-Up": None})
        with caplog.at_level("INFO", logger="enrich_exercises"):
            enrich_exercises.run_enrichment(exercises_dir, _classifier(answers), delay=0)
        messages = [r.getMessage() for r in caplog.records]
        assert "Complete: 3 successful, 1 failed" in messages
        assert "Created 3 enriched.json files" in messages
        assert "  - Push-Up (Pushups)" in messages

    def test_override_summary_wording(self, exercises_dir, caplog):
        with caplog.at_level("INFO", logger="enrich_exercises"):
            enrich_exercises.run_enrichment(exercises_dir, _classifier(), override=True, delay=0)
        assert "Updated 4 exercise.json files directly" in [r.getMessage() for r in caplog.records]


class TestMain:

    def test_flags_passed_through(self, exercises_dir):
        argv = ["enrich_exercises.py", "-c", "3", "-o", "--dir", str(exercises_dir),
                "--model", "llama3", "--ollama-url", "http://gpu:11434"]
        with patch.object(sys, "argv", argv), \
                patch("enrich_exercises.TrackingTypeClassifier") as mock_cls, \
                patch("enrich_exercises.run_enrichment") as mock_run, \
                pytest.raises(SystemExit) as exc:
            enrich_exercises.main()
        assert exc.value.code == 0
        mock_cls.assert_called_once_with(base_url="http://gpu:11434", model="llama3")
        _, kwargs = mock_run.call_args
        assert kwargs == {"count": 3, "override": True}
        mock_cls.return_value.close.assert_called_once()

    def test_missing_dir_exits_1(self, tmp_path):
        argv = ["enrich_exercises.py", "--dir", str(tmp_path / "missing")]
        with patch.object(sys, "argv", argv), \
                patch("enrich_exercises.TrackingTypeClassifier"), \
                pytest.raises(SystemExit) as exc:
            enrich_exercises.main()
        assert exc.value.code == 1

    def test_negative_count_rejected(self, exercises_dir):
        argv = ["enrich_exercises.py", "-c", "-1", "--dir", str(exercises_dir)]
        with patch.object(sys, "argv", argv), pytest.raises(SystemExit) as exc:
            enrich_exercises.main()
        assert exc.value.code == 2
