"""Tests for the vocabfilter typer CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from vocabfilter.cli import app
from vocabfilter.constants import CONFIG_ENV_VAR

runner = CliRunner()


class TestActionsCommand:
    def test_lists_every_action(self):
        result = runner.invoke(app, ["actions"])
        assert result.exit_code == 0
        for name in (
            "commit_reading",
            "commit_meaning",
            "commit_category",
            "clear_category",
            "toggle_common_first",
            "toggle_short_reading_first",
            "commit_levels",
        ):
            assert name in result.output


class TestApplyCommand:
    def test_toggle_twice_reports_notifications(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        result = runner.invoke(app, ["apply", "toggle-common-first", "toggle-common-first"])
        assert result.exit_code == 0
        assert "field notifications: 2" in result.output
        assert "filter notifications: 2" in result.output
        assert "filters: (none)" in result.output

    def test_clear_category_from_config(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "categories": [{"id": 3, "label": "Adjective"}],
                    "default_category_id": 3,
                    "jlpt_level": 4,
                }
            ),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["apply", "clear_category", "--config", str(path)])
        assert result.exit_code == 0
        assert "changed=category" in result.output
        assert "field notifications: 1" in result.output
        assert "filters: jlpt:4" in result.output

    def test_unknown_action_exits_with_error(self):
        result = runner.invoke(app, ["apply", "commit_everything"])
        assert result.exit_code == 1
        assert "Unknown filter action" in result.output

    def test_invalid_config_exits_with_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["apply", "commit_levels", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_missing_config_exits_with_error(self, tmp_path):
        result = runner.invoke(
            app, ["apply", "commit_levels", "--config", str(tmp_path / "missing.json")]
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"wk_level": 12, "common_first": True}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        result = runner.invoke(app, ["apply", "commit_levels"])
        assert result.exit_code == 0
        assert "filters: wk:12 order:common_first" in result.output

    def test_missing_environment_config_exits_with_error(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "gone.json"))
        result = runner.invoke(app, ["apply", "commit_levels"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
