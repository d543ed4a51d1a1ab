"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from makeyourtext import cli
from makeyourtext.config import AppConfig, UsageConfig

runner = CliRunner()


@pytest.fixture(autouse=True)
def _config(monkeypatch, tmp_path):
    config = AppConfig(usage=UsageConfig(enabled=True, db_path=str(tmp_path / "usage.db")))
    monkeypatch.setattr(cli, "load_config", lambda: config)
    return config


class TestRewriteCommand:
    def test_json_output(self):
        result = runner.invoke(cli.app, ["rewrite", "내일까지 보고서 부탁드립니다", "--tone", "firm", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["variants"][1] == {"lengthClass": "standard", "text": "내일까지 보고서 요청드립니다"}

    def test_blocked_exit_code(self):
        result = runner.invoke(cli.app, ["rewrite", "죽여버리겠다"])
        assert result.exit_code == 2

    def test_records_usage(self, _config):
        runner.invoke(cli.app, ["rewrite", "회의 정리 부탁드립니다", "--json"])
        result = runner.invoke(cli.app, ["stats"])
        assert result.exit_code == 0
        assert "실행 1회" in result.stdout


class TestListingCommands:
    def test_presets(self):
        result = runner.invoke(cli.app, ["presets", "tones"])
        assert result.exit_code == 0
        assert "cultured" in result.stdout

    def test_unknown_preset_kind(self):
        result = runner.invoke(cli.app, ["presets", "colors"])
        assert result.exit_code == 1

    def test_templates(self):
        result = runner.invoke(cli.app, ["templates"])
        assert result.exit_code == 0
        assert "template-1" in result.stdout


class TestSsmlCommand:
    def test_ssml(self):
        result = runner.invoke(cli.app, ["ssml", "API 문서를 확인해 주세요.", "--audience", "senior"])
        assert result.exit_code == 0
        assert "<speak" in result.stdout
        assert "에이피아이" in result.stdout
