"""Tests for the high score and theme store."""

import json

import pytest

from scores import PreferenceStore


class TestHighScores:
    """Test cases for per-chain-length high scores."""

    def test_missing_file_reads_as_zero(self, tmp_path):
        store = PreferenceStore(tmp_path / "prefs.json")
        assert store.high_score(2) == 0
        assert store.high_scores() == {}

    def test_record_only_improvements(self, tmp_path):
        store = PreferenceStore(tmp_path / "prefs.json")

        assert store.record_score(3, 2)
        assert not store.record_score(2, 2)
        assert not store.record_score(3, 2)
        assert store.record_score(5, 2)
        assert store.high_score(2) == 5

    def test_scores_are_kept_per_chain_length(self, tmp_path):
        store = PreferenceStore(tmp_path / "prefs.json")
        store.record_score(4, 1)
        store.record_score(2, 3)

        assert store.high_scores() == {1: 4, 3: 2}
        assert store.high_score(2) == 0

    def test_scores_survive_a_new_store(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        PreferenceStore(path).record_score(7, 4)

        assert PreferenceStore(path).high_score(4) == 7
        assert json.loads(path.read_text(encoding="utf-8")) == {"highscores": {"4": 7}}

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        store = PreferenceStore(path)

        assert store.high_score(2) == 0
        assert store.record_score(1, 2)
        assert store.high_score(2) == 1

    def test_non_object_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert PreferenceStore(path).high_scores() == {}

    def test_bad_entries_are_skipped(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"highscores": {"2": 3, "x": 1, "3": "lots"}}), encoding="utf-8")
        assert PreferenceStore(path).high_scores() == {2: 3}


class TestTheme:
    """Test cases for the theme preference."""

    def test_default_theme(self, tmp_path):
        assert PreferenceStore(tmp_path / "prefs.json").theme == "light"

    def test_set_theme_keeps_scores(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = PreferenceStore(path)
        store.record_score(2, 2)
        store.set_theme("dark")

        reloaded = PreferenceStore(path)
        assert reloaded.theme == "dark"
        assert reloaded.high_score(2) == 2

    def test_unknown_theme(self, tmp_path):
        store = PreferenceStore(tmp_path / "prefs.json")
        with pytest.raises(ValueError):
            store.set_theme("sepia")
        assert store.theme == "light"
