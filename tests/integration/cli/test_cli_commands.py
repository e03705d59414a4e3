"""Integration tests for the hoa-scout CLI against a temporary SQLite file."""

import json

import pytest
from typer.testing import CliRunner

from hoa_scout.presentation.cli.app import app

pytestmark = pytest.mark.integration

runner = CliRunner()

SEED = {
    "hoa_profiles": [
        {
            "id": "hoa-cli",
            "hoa_name": "Seagrape Village HOA",
            "city": "Naples",
            "state": "FL",
            "zip_code": "34102",
            "monthly_fee": "525",
        }
    ]
}


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at an empty SQLite file with no external API keys."""
    monkeypatch.setenv("DATABASE_DSN", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("PERPLEXITY_API_KEY", "")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    return tmp_path


@pytest.fixture
def seed_file(cli_env):
    path = cli_env / "seed.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")
    return path


class TestCli:
    """Tests for the operational CLI commands."""

    def test_init_db(self, cli_env):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database schema is up to date" in result.output
        assert (cli_env / "cli.db").exists()

    def test_seed_then_analyze(self, seed_file):
        seeded = runner.invoke(app, ["seed", str(seed_file)])
        analyzed = runner.invoke(app, ["analyze", "hoa-cli"])

        assert seeded.exit_code == 0
        assert "Seeded 1 HOA profiles" in seeded.output
        assert analyzed.exit_code == 0
        assert "Overall score 5.0" in analyzed.output
        assert "rule_based" in analyzed.output

    def test_analyze_unknown_hoa_fails(self, cli_env):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["analyze", "missing"])

        assert result.exit_code == 1
        assert "Analysis failed" in result.output

    def test_enrich_without_search_key_records_failure(self, seed_file):
        runner.invoke(app, ["seed", str(seed_file)])

        result = runner.invoke(app, ["enrich", "hoa-cli"])

        assert result.exit_code == 0
        assert "API key not configured" in result.output

    def test_enrich_unknown_hoa_fails(self, cli_env):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["enrich", "missing"])

        assert result.exit_code == 1
        assert "HOA not found" in result.output

    def test_seed_rejects_non_list(self, cli_env):
        path = cli_env / "bad.json"
        path.write_text(json.dumps({"hoa_profiles": "nope"}), encoding="utf-8")

        result = runner.invoke(app, ["seed", str(path)])

        assert result.exit_code != 0

    def test_init_db_reset_drops_profiles(self, seed_file):
        runner.invoke(app, ["seed", str(seed_file)])

        reset = runner.invoke(app, ["init-db", "--reset"], input="y\n")
        analyzed = runner.invoke(app, ["analyze", "hoa-cli"])

        assert reset.exit_code == 0
        assert analyzed.exit_code == 1

    def test_init_db_reset_can_be_aborted(self, seed_file):
        runner.invoke(app, ["seed", str(seed_file)])

        reset = runner.invoke(app, ["init-db", "--reset"], input="n\n")
        analyzed = runner.invoke(app, ["analyze", "hoa-cli"])

        assert reset.exit_code == 1
        assert analyzed.exit_code == 0
