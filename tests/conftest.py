"""Pytest configuration for test isolation.

The OCR client and logging setup read configuration from environment
variables (and the CLI loads a ``.env`` from the working directory). A
developer's shell or ``.env`` must not leak into tests, so every test runs
with those variables cleared and from an empty temporary working directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_VARS = (
    "OCR_SPACE_API_KEY",
    "OCR_SPACE_URL",
    "BUDGET_TRACKER_OCR_TIMEOUT",
    "BUDGET_TRACKER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        # setenv first so teardown also removes values a test's .env loads.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    workdir = tmp_path / "cwd"
    workdir.mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(workdir)


STATEMENT_TEXT = """\
Kontoutskrift
Torsdag 07.08.25
Rema 1000
-111,00
Matvarer
Fredag 08.08.25
Netflix
-129,00
Kafe og restaurant
Lørdag 09.08.25
Arbeidsgiver AS
32 500,00
Lønn
"""


@pytest.fixture
def statement_text() -> str:
    """Three well-formed 4-line blocks after one line of header noise."""

    return STATEMENT_TEXT
