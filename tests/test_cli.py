"""
Tests for the receipts CLI.
"""

import json

import pytest
from click.testing import CliRunner

from parishdesk.cli import cli


def _payload(number: str) -> dict:
    return {
        "transaction": {
            "transaction_number": number,
            "category": "TITHE",
            "amount": 50000,
            "payment_method": "MPESA",
            "transaction_date": "2026-03-05",
        },
        "organization": {"parish_name": "St. Paul Parish", "contact_phone": "+255 712 000 111"},
        "payer": {"first_name": "Maria", "last_name": "Mushi", "member_code": "STP-0042"},
    }


class TestReceiptCommand:
    """Test the ``receipt`` command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "ParishDesk receipts CLI" in result.output

    def test_renders_several_files(self, runner, tmp_path):
        files = []
        for number in ("OR/2026/1", "OR/2026/2"):
            path = tmp_path / f"{number.replace('/', '_')}.json"
            path.write_text(json.dumps(_payload(number)))
            files.append(str(path))
        out_dir = tmp_path / "pdf"

        result = runner.invoke(
            cli, ["receipt", *files, "--format", "thermal-narrow", "--output-dir", str(out_dir)]
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "receipt_OR-2026-1.pdf").read_bytes().startswith(b"%PDF-")
        assert (out_dir / "receipt_OR-2026-2.pdf").exists()
        assert result.output.count("Saved") == 2

    def test_invalid_payload(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"organization": {"parish_name": "St. Paul Parish"}}))

        result = runner.invoke(cli, ["receipt", str(path), "--output-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "transaction" in result.output

    def test_not_json(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json")

        result = runner.invoke(cli, ["receipt", str(path)])

        assert result.exit_code == 1
        assert "cannot read receipt data" in result.output

    def test_unknown_format(self, runner, tmp_path):
        path = tmp_path / "receipt.json"
        path.write_text(json.dumps(_payload("OR/1")))

        result = runner.invoke(cli, ["receipt", str(path), "--format", "a5"])

        assert result.exit_code == 2

    @pytest.mark.parametrize(
        "fmt", ["a4", "thermal-80", "thermal-58", "THERMAL_NARROW", "full-page"]
    )
    def test_format_aliases(self, runner, tmp_path, fmt):
        path = tmp_path / "receipt.json"
        path.write_text(json.dumps(_payload("OR/1")))

        result = runner.invoke(
            cli, ["receipt", str(path), "--format", fmt, "--output-dir", str(tmp_path)]
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "receipt_OR-1.pdf").exists()
