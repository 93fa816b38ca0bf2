"""Tests for configuration loading and the quality-check CLI."""

import json

from typer.testing import CliRunner

from qtrack.cli import app
from qtrack.config import QTrackConfig

runner = CliRunner()


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("QTRACK_STORAGE_BACKEND", raising=False)
        config = QTrackConfig(_env_file=None)
        assert config.storage_backend == "sqlite"
        assert config.metrics_retention_days == 7
        assert config.allowed_origins == ["http://localhost:3000", "http://localhost:5173"]

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("QTRACK_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("QTRACK_ADMIN_TOKEN", "secret")
        monkeypatch.setenv("QTRACK_CORS_ORIGINS", "https://a.example, https://b.example,")
        config = QTrackConfig(_env_file=None)
        assert config.storage_backend == "memory"
        assert config.admin_token == "secret"
        assert config.allowed_origins == ["https://a.example", "https://b.example"]


class TestQualityCheckCli:
    def test_default_gates_pass(self, monkeypatch):
        monkeypatch.delenv("QTRACK_GATES_FILE", raising=False)
        result = runner.invoke(app, [])
        assert result.exit_code == 0, result.output
        assert "HEALTHY" in result.output

    def test_json_output(self, monkeypatch):
        monkeypatch.delenv("QTRACK_GATES_FILE", raising=False)
        result = runner.invoke(app, ["--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["total"] == 6
        assert data["summary"]["overallHealth"] == 100.0
        assert len(data["results"]) == 6
        assert data["results"][0]["actualValue"] == 85
        assert isinstance(data["results"][0]["actualValue"], int)

    def test_failing_gate_exits_one(self, tmp_path):
        gates = tmp_path / "gates.yaml"
        gates.write_text(
            "- id: strict-coverage\n"
            "  name: Strict Coverage\n"
            "  description: Coverage must be near total\n"
            "  threshold: 99\n"
            "  operator: gte\n"
            "  metric: coverage.percentage\n"
        )
        result = runner.invoke(app, ["--gates-file", str(gates)])
        assert result.exit_code == 1
        assert "NEEDS ATTENTION" in result.output
        assert "Strict Coverage" in result.output

    def test_table_shows_integral_values_without_fraction(self, tmp_path):
        gates = tmp_path / "gates.yaml"
        gates.write_text(
            "- id: strict-coverage\n"
            "  name: Strict Coverage\n"
            "  threshold: 99\n"
            "  operator: gte\n"
            "  metric: coverage.percentage\n"
        )
        result = runner.invoke(app, ["--gates-file", str(gates)])
        assert "85.0" not in result.output
        assert "99.0" not in result.output
        assert "Gates passed: 0/1" in result.output

    def test_bad_gates_file_exits_one(self, tmp_path):
        gates = tmp_path / "gates.yaml"
        gates.write_text("- {id: a}\n")
        result = runner.invoke(app, ["--gates-file", str(gates)])
        assert result.exit_code == 1
        assert "Error" in result.output
