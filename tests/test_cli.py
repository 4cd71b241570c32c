"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from daybook.cli import main
from daybook.config import Config


@pytest.fixture
def runner(tmp_path):
    config = Config(database_path=tmp_path / "cli.db")
    with patch("daybook.cli.load_config", return_value=config):
        yield CliRunner()


def _write(runner, day="2025-03-01", *extra):
    return runner.invoke(
        main,
        ["write", day, "--title", "Morning", "-m", "Three words here", "--mood", "happy", *extra],
    )


class TestEntries:
    def test_init(self, runner, tmp_path):
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Journal ready" in result.output
        assert (tmp_path / "cli.db").exists()

    def test_write_and_show(self, runner):
        result = _write(runner, "2025-03-01", "--also", "Calm", "--tag", "Deep Work", "-c", "work")
        assert result.exit_code == 0, result.output
        assert "Saved entry for Saturday, Mar 01: Morning" in result.output

        result = runner.invoke(main, ["show", "2025-03-01", "--json"])
        data = json.loads(result.output)

        assert data["title"] == "Morning"
        assert data["category"] == "Work"
        assert data["primary_mood"] == "Happy"
        assert data["secondary_moods"] == ["Calm"]
        assert data["tags"] == ["Deep Work"]

    def test_show_text(self, runner):
        _write(runner, "2025-03-01", "--tag", "Goal")

        result = runner.invoke(main, ["show", "2025-03-01"])

        assert "## Morning" in result.output
        assert "Reflection" in result.output
        assert "#Goal" in result.output

    def test_show_missing(self, runner):
        result = runner.invoke(main, ["show", "2025-03-01"])

        assert result.exit_code == 0
        assert "No entry" in result.output

    def test_duplicate_write_fails(self, runner):
        _write(runner)

        result = _write(runner)

        assert result.exit_code == 1
        assert "Error: An entry for 2025-03-01 already exists." in result.output

    def test_unknown_mood_fails(self, runner):
        result = runner.invoke(main, ["write", "2025-03-01", "--title", "T", "-m", "x", "--mood", "meh"])

        assert result.exit_code == 1
        assert "Unknown mood 'meh'" in result.output

    def test_edit_keeps_omitted_fields(self, runner):
        _write(runner, "2025-03-01", "--tag", "Goal")

        result = runner.invoke(main, ["edit", "2025-03-01", "--title", "Evening"])
        assert result.exit_code == 0, result.output

        data = json.loads(runner.invoke(main, ["show", "2025-03-01", "--json"]).output)
        assert data["title"] == "Evening"
        assert data["content"] == "Three words here"
        assert data["primary_mood"] == "Happy"
        assert data["tags"] == ["Goal"]

    def test_edit_moods_and_clear_tags(self, runner):
        _write(runner, "2025-03-01", "--tag", "Goal")

        runner.invoke(main, ["edit", "2025-03-01", "--also", "Tired", "--clear-tags"])

        data = json.loads(runner.invoke(main, ["show", "2025-03-01", "--json"]).output)
        assert data["primary_mood"] == "Happy"
        assert data["secondary_moods"] == ["Tired"]
        assert data["tags"] == []

    def test_edit_mood_keeps_secondary_moods(self, runner):
        _write(runner, "2025-03-01", "--also", "Tired")

        result = runner.invoke(main, ["edit", "2025-03-01", "--mood", "Calm"])
        assert result.exit_code == 0, result.output

        data = json.loads(runner.invoke(main, ["show", "2025-03-01", "--json"]).output)
        assert data["primary_mood"] == "Calm"
        assert data["secondary_moods"] == ["Tired"]

    def test_edit_mood_drops_new_primary_from_secondaries(self, runner):
        _write(runner, "2025-03-01", "--also", "Tired", "--also", "Calm")

        runner.invoke(main, ["edit", "2025-03-01", "--mood", "tired"])

        data = json.loads(runner.invoke(main, ["show", "2025-03-01", "--json"]).output)
        assert data["primary_mood"] == "Tired"
        assert data["secondary_moods"] == ["Calm"]

    def test_edit_missing(self, runner):
        result = runner.invoke(main, ["edit", "2025-03-01", "--title", "X"])

        assert result.exit_code == 1
        assert "No entry for 2025-03-01." in result.output

    def test_delete(self, runner):
        _write(runner)

        result = runner.invoke(main, ["delete", "2025-03-01", "--yes"])
        assert "Deleted entry" in result.output

        result = runner.invoke(main, ["delete", "2025-03-01", "--yes"])
        assert "No entry" in result.output


class TestList:
    def test_list_json(self, runner):
        _write(runner, "2025-03-01")
        _write(runner, "2025-03-02", "--tag", "Goal")

        items = json.loads(runner.invoke(main, ["list", "--json"]).output)

        assert [i["date"] for i in items] == ["2025-03-02", "2025-03-01"]
        assert items[0]["tags"] == ["Goal"]
        assert items[0]["primary_mood"] == "Happy"

    def test_list_filters(self, runner):
        _write(runner, "2025-03-01")
        _write(runner, "2025-03-02", "--tag", "Goal", "--also", "Calm")

        by_tag = json.loads(runner.invoke(main, ["list", "--tag", "goal", "--json"]).output)
        by_moods = json.loads(runner.invoke(main, ["list", "--mood", "Happy", "--mood", "Calm", "--json"]).output)
        by_range = json.loads(runner.invoke(main, ["list", "--to", "2025-03-01", "--json"]).output)

        assert [i["date"] for i in by_tag] == ["2025-03-02"]
        assert [i["date"] for i in by_moods] == ["2025-03-02"]
        assert [i["date"] for i in by_range] == ["2025-03-01"]

    def test_list_unknown_tag_fails(self, runner):
        result = runner.invoke(main, ["list", "--tag", "nothing"])

        assert result.exit_code == 1
        assert "Unknown tag 'nothing'" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert "No entries found." in result.output


class TestDashboard:
    def test_stats_json(self, runner):
        _write(runner, "2025-03-01", "--tag", "Goal")

        result = runner.invoke(main, ["stats", "--from", "2025-03-01", "--to", "2025-03-03", "--json"])
        data = json.loads(result.output)

        assert data["total_entries"] == 1
        assert data["total_words"] == 3
        assert [p["word_count"] for p in data["word_count_trend"]] == [3, 0, 0]
        assert data["most_frequent_mood"]["name"] == "Happy"
        assert data["top_tags"] == [{"name": "Goal", "count": 1}]

    def test_stats_text(self, runner):
        _write(runner, "2025-03-01")

        result = runner.invoke(main, ["stats", "--from", "2025-03-01", "--to", "2025-03-01"])

        assert result.exit_code == 0, result.output
        assert "Most frequent: Happy (1)" in result.output

    def test_streak_json(self, runner):
        _write(runner, "2025-03-01")
        _write(runner, "2025-03-03")

        result = runner.invoke(main, ["streak", "--from", "2025-03-01", "--to", "2025-03-03", "--json"])
        data = json.loads(result.output)

        assert data["current_streak"] == 1
        assert data["longest_streak"] == 1
        assert data["missed_days"] == ["2025-03-02"]


class TestVocabulary:
    def test_moods(self, runner):
        result = runner.invoke(main, ["moods"])
        assert "Positive Happy" in result.output

    def test_categories_json(self, runner):
        names = [c["name"] for c in json.loads(runner.invoke(main, ["categories", "--json"]).output)]
        assert "Reflection" in names

    def test_categories_show_entry_counts(self, runner):
        _write(runner, "2025-03-01")
        _write(runner, "2025-03-02", "-c", "Work")
        _write(runner, "2025-03-03", "-c", "Work")

        items = json.loads(runner.invoke(main, ["categories", "--json"]).output)
        counts = {c["name"]: c["entries"] for c in items}

        assert counts["Reflection"] == 1
        assert counts["Work"] == 2
        assert counts["Health"] == 0
        assert "Work (2)" in runner.invoke(main, ["categories"]).output

    def test_tag_add_is_idempotent(self, runner):
        first = runner.invoke(main, ["tag-add", "Hiking"]).output
        second = runner.invoke(main, ["tag-add", "  HIKING "]).output

        assert first == second
        assert "#Hiking" in runner.invoke(main, ["tags"]).output

    def test_blank_tag_fails(self, runner):
        result = runner.invoke(main, ["tag-add", " "])

        assert result.exit_code == 1
        assert "Error: Tag name is required." in result.output
