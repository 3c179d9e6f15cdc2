from __future__ import annotations

import json
import urllib.error
import urllib.parse
from pathlib import Path

import pytest
from typer.testing import CliRunner

from budget_tracker import cli, ocr
from budget_tracker.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_log_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    # A handler bound to one CliRunner stream would outlive the invocation.
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


class _FakeResponse:
    def __init__(self, text: str) -> None:
        self._payload = json.dumps({"ParsedResults": [{"ParsedText": text}]}).encode("utf-8")

    def read(self) -> bytes:
        return self._payload

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


@pytest.fixture
def screenshot(tmp_path: Path) -> Path:
    path = tmp_path / "screenshot.jpg"
    path.write_bytes(b"\xff\xd8 fake jpeg")
    return path


def test_parse_prints_candidates(statement_text, tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text(statement_text, encoding="utf-8")

    result = runner.invoke(app, ["parse", str(text_file)])

    assert result.exit_code == 0, result.output
    assert "Parsed from screenshot" in result.output
    assert "Rema 1000" in result.output
    assert "Arbeidsgiver AS" in result.output


def test_parse_reports_unparseable_text(tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text("Saldo 1 234,00\n", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(text_file)])

    assert result.exit_code == 0
    assert "No transactions could be extracted from the screenshot." in result.output


def test_parse_missing_file_fails(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_classify_prints_tab_separated_categories():
    result = runner.invoke(app, ["classify", "Rema 1000", "Unknown Merchant XYZ"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Rema 1000\tEssentials",
        "Unknown Merchant XYZ\tOther",
    ]


def test_add_prepends_manual_transaction():
    result = runner.invoke(
        app,
        ["add", "--date", "2025-08-10", "--description", "Bokhandel", "--amount=-249,00"],
    )
    assert result.exit_code == 0, result.output
    assert "Bokhandel" in result.output
    assert "Essentials" in result.output
    assert "-249.00" in result.output


def test_add_rejects_invalid_input():
    result = runner.invoke(
        app, ["add", "--date", "2025-08-10", "--description", " ", "--amount", "10"]
    )
    assert result.exit_code == 1
    assert "Invalid transaction" in result.output
    assert "description" in result.output


def test_budget_applies_assignments():
    result = runner.invoke(
        app, ["budget", "--set", "income:0=35000", "--set", "essentials:0=12 000"]
    )
    assert result.exit_code == 0, result.output
    assert "This Month" in result.output
    assert "Balance 23000" in result.output


@pytest.mark.parametrize("assignment", ["income=10", "travel:0=10", "income:x=10", "income:7=10"])
def test_budget_rejects_bad_assignments(assignment):
    result = runner.invoke(app, ["budget", "--set", assignment])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_import_screenshot_accept_all(screenshot, statement_text, monkeypatch):
    monkeypatch.setattr(
        ocr.urllib.request, "urlopen", lambda req, timeout: _FakeResponse(statement_text)
    )

    result = runner.invoke(app, ["import-screenshot", str(screenshot), "--accept-all"])

    assert result.exit_code == 0, result.output
    assert "Added 3 transaction(s)." in result.output
    assert "Netflix" in result.output
    # Demo rows are still listed after the imported batch.
    assert "Salary" in result.output


def test_import_screenshot_reports_empty_ocr_text(screenshot, monkeypatch):
    monkeypatch.setattr(ocr.urllib.request, "urlopen", lambda req, timeout: _FakeResponse(""))

    result = runner.invoke(app, ["import-screenshot", str(screenshot), "--accept-all"])

    assert result.exit_code == 0
    assert "No text found in image." in result.output


def test_import_screenshot_ocr_failure(screenshot, monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(ocr.urllib.request, "urlopen", fake_urlopen)

    result = runner.invoke(app, ["import-screenshot", str(screenshot), "--accept-all"])

    assert result.exit_code == 1
    assert "Failed to read transactions from image." in result.output


def test_import_screenshot_missing_file(tmp_path):
    result = runner.invoke(app, ["import-screenshot", str(tmp_path / "missing.png")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_dotenv_in_working_directory_configures_ocr(screenshot, statement_text, monkeypatch):
    Path(".env").write_text("OCR_SPACE_API_KEY=from-dotenv\n", encoding="utf-8")
    seen: dict[str, str] = {}

    def fake_urlopen(req, timeout):
        seen.update(urllib.parse.parse_qsl(req.data.decode("ascii")))
        return _FakeResponse(statement_text)

    monkeypatch.setattr(ocr.urllib.request, "urlopen", fake_urlopen)

    result = runner.invoke(app, ["import-screenshot", str(screenshot), "--accept-all"])

    assert result.exit_code == 0, result.output
    assert seen["apikey"] == "from-dotenv"


def test_budget_prints_category_totals():
    result = runner.invoke(app, ["budget"])
    assert result.exit_code == 0, result.output
    assert "By category" in result.output
    assert "+3500.00" in result.output


def test_parse_survives_very_long_amount(tmp_path):
    text_file = tmp_path / "ocr.txt"
    text_file.write_text("Mandag 04.08.25\nRema 1000\n-" + "9" * 30 + ",00\n", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(text_file)])

    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "Parsed from screenshot" in result.output
