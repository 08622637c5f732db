"""Tests for the relgen command line interface."""

import json

import pandas as pd
import pytest
from typer.testing import CliRunner

from relgen.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ["RELGEN_SCALE_FACTOR", "RELGEN_BATCH_SIZE", "RELGEN_OUTPUT_DIR", "RELGEN_LOCALE"]:
        monkeypatch.delenv(name, raising=False)


class TestGenerateCommand:
    """Tests for 'relgen generate'."""

    def test_generates_all_tables(self, tmp_path):
        result = runner.invoke(
            app, ["generate", "business", "--scale", "0.0001", "--output-dir", str(tmp_path)]
        )
        assert result.exit_code == 0, result.output
        for name, rows in [("companies", 5), ("people", 20), ("products", 100), ("orders", 1000)]:
            frame = pd.read_csv(tmp_path / f"{name}.csv", dtype=str, keep_default_na=False)
            assert len(frame) == rows
        assert "Generated 4 tables" in result.output

    def test_global_options_apply(self, tmp_path):
        result = runner.invoke(
            app, ["--scale", "1/10000", "-o", str(tmp_path), "generate", "-t", "companies"]
        )
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == ["companies.csv"]

    def test_selected_table_references_unwritten_table(self, tmp_path):
        result = runner.invoke(
            app,
            ["generate", "-t", "people", "--scale", "0.0001", "-o", str(tmp_path)],
        )
        assert result.exit_code == 0, result.output
        assert not (tmp_path / "companies.csv").exists()
        people = pd.read_csv(tmp_path / "people.csv", dtype=str)
        assert people["CompanyID"].str.startswith("cmp-").all()

    def test_parameters_and_summary_file(self, tmp_path):
        summary_path = tmp_path / "summary.json"
        result = runner.invoke(
            app,
            [
                "generate",
                "-t",
                "companies",
                "-o",
                str(tmp_path),
                "--parameters",
                '{"scale_factor": 0.0001, "batch_size": 2}',
                "--summary-file",
                str(summary_path),
            ],
        )
        assert result.exit_code == 0, result.output
        summary = json.loads(summary_path.read_text(encoding="utf-8"))
        assert summary["total_rows"] == 5
        assert summary["tables"][0]["batches_written"] == 3

    def test_dry_run_writes_nothing(self, tmp_path):
        result = runner.invoke(
            app, ["generate", "--dry-run", "--scale", "0.5", "-o", str(tmp_path / "out")]
        )
        assert result.exit_code == 0, result.output
        assert "dry run" in result.output
        assert not (tmp_path / "out").exists()

    def test_invalid_parameters_json(self, tmp_path):
        result = runner.invoke(app, ["generate", "-o", str(tmp_path), "-p", "{not json"])
        assert result.exit_code == 1
        assert "Error parsing parameters JSON" in result.output

    def test_unknown_dataset(self, tmp_path):
        result = runner.invoke(app, ["generate", "retail", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Unknown dataset" in result.output

    def test_unknown_table(self, tmp_path):
        result = runner.invoke(app, ["generate", "-t", "invoices", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "invoices" in result.output

    def test_invalid_scale(self, tmp_path):
        result = runner.invoke(app, ["generate", "--scale=-1", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "scale_factor" in result.output

    def test_non_string_locale(self, tmp_path):
        result = runner.invoke(
            app, ["generate", "-o", str(tmp_path), "-p", '{"locale": 5}']
        )
        assert result.exit_code == 1
        assert "locale must be a non-empty string" in result.output

    def test_unknown_locale(self, tmp_path):
        result = runner.invoke(
            app, ["generate", "-o", str(tmp_path), "-p", '{"locale": "xx_YY"}']
        )
        assert result.exit_code == 1
        assert "Unknown Faker locale" in result.output

    def test_scale_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RELGEN_SCALE_FACTOR", "0.0001")
        result = runner.invoke(app, ["generate", "-t", "companies", "-o", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert len(pd.read_csv(tmp_path / "companies.csv")) == 5


class TestListCommand:
    """Tests for 'relgen list'."""

    def test_table_format(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "business" in result.output
        assert "orders" in result.output

    def test_json_format(self):
        result = runner.invoke(app, ["--scale", "0.1", "list", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert '"business"' in result.output
        assert '"scaled_rows": 1000000' in result.output

    def test_unknown_locale_from_environment(self, monkeypatch):
        monkeypatch.setenv("RELGEN_LOCALE", "xx_YY")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "Unknown Faker locale" in result.output

    def test_invalid_format(self):
        result = runner.invoke(app, ["list", "--format", "xml"])
        assert result.exit_code == 1
        assert "Invalid format" in result.output
