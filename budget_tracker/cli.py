# ruff: noqa: I001
"""CLI for the ``budget_tracker`` package.

Command handlers (``cmd_*``) return process exit codes and are usable without
Typer; the Typer commands below wrap them. Environment variables (OCR key and
endpoint, log level) are loaded from a local ``.env`` via ``python-dotenv``
without overriding values already set.

State lives only for the duration of one command: every command starts from a
store seeded with the demo transactions.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from .logging_setup import configure_logging

console = Console()


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def cmd_parse(text_path: str) -> int:
    """Segment OCR text from ``text_path`` and print the candidates."""

    from .render import candidates_table
    from .store import TransactionStore
    from .upload import UploadSession, UploadStatus

    try:
        text = Path(text_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return _error(f"File not found: {text_path}")
    except (OSError, UnicodeDecodeError) as e:
        return _error(f"Failed to read '{text_path}': {e}")

    outcome = UploadSession(TransactionStore()).ingest_text(text)
    if outcome.status is not UploadStatus.PARSED:
        console.print(outcome.message)
        return 0
    console.print(candidates_table(outcome.candidates))
    return 0


def cmd_classify(descriptions: list[str]) -> int:
    """Print ``"<description>\\t<category>"`` per description (no memory)."""

    from .classifier import classify

    for description in descriptions:
        print(f"{description}\t{classify(description)}")
    return 0


def cmd_import_screenshot(image_path: str, *, accept_all: bool = False) -> int:
    """OCR a screenshot, review the parsed batch, and print the resulting store."""

    import asyncio

    from .render import candidates_table, transactions_table
    from .store import TransactionStore
    from .term_ui import review_candidates
    from .upload import UploadSession, UploadStatus

    if not Path(image_path).is_file():
        return _error(f"File not found: {image_path}")

    store = TransactionStore.with_sample_data()
    session = UploadSession(store)
    console.print("Reading transactions from image…")
    outcome = asyncio.run(session.upload(image_path))

    if outcome.status is UploadStatus.FAILED:
        return _error(outcome.message or "OCR failed")
    if outcome.status is not UploadStatus.PARSED:
        console.print(outcome.message)
        console.print(transactions_table(store.transactions))
        return 0

    if accept_all:
        console.print(candidates_table(store.candidates))
        confirmed = store.confirm_batch()
        console.print(f"Added {len(confirmed)} transaction(s).")
    else:
        review_candidates(store, console=console)

    console.print(transactions_table(store.transactions))
    return 0


def cmd_add(*, date: str, description: str, amount: str, category: str | None) -> int:
    """Add one manual transaction to the demo store and print the store."""

    from pydantic import ValidationError

    from .models import ManualEntry
    from .render import transactions_table
    from .store import TransactionStore

    fields = {"date": date, "description": description, "amount": amount}
    if category is not None:
        fields["category"] = category
    try:
        entry = ManualEntry(**fields)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return _error(f"Invalid transaction: {errors}")

    store = TransactionStore.with_sample_data()
    store.add_manual(entry)
    console.print(transactions_table(store.transactions))
    return 0


def cmd_budget(assignments: list[str]) -> int:
    """Print the budget planner after applying ``section:index=amount`` entries.

    The per-category totals of the demo transactions are printed below the plan.
    """

    from .budget import BudgetPlan, summarize_transactions
    from .render import budget_table, category_totals_table
    from .store import TransactionStore

    plan = BudgetPlan()
    for raw in assignments:
        target, sep, value = raw.partition("=")
        section, colon, index_s = target.partition(":")
        if not sep or not colon:
            return _error(f"Expected section:index=amount, got {raw!r}")
        try:
            plan.set_amount(section.strip(), int(index_s), value.strip())
        except ValueError:
            return _error(f"Invalid item index in {raw!r}")
        except (KeyError, IndexError) as e:
            return _error(str(e.args[0]) if e.args else raw)
    console.print(budget_table(plan))
    store = TransactionStore.with_sample_data()
    console.print(category_totals_table(summarize_transactions(store.transactions)))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    name="budget-tracker",
    help="Parse bank-statement screenshots into categorized transactions.",
    add_completion=False,
)


@app.command("parse")
def parse_cmd(
    text_path: Annotated[Path, typer.Argument(help="File holding OCR text to parse.")],
) -> None:
    raise typer.Exit(cmd_parse(str(text_path)))


@app.command("classify")
def classify_cmd(
    descriptions: Annotated[list[str], typer.Argument(help="Descriptions to classify.")],
) -> None:
    raise typer.Exit(cmd_classify(descriptions))


@app.command("import-screenshot")
def import_screenshot_cmd(
    image_path: Annotated[Path, typer.Argument(help="Bank-statement screenshot to OCR.")],
    accept_all: Annotated[
        bool, typer.Option("--accept-all", help="Add every parsed transaction without review.")
    ] = False,
) -> None:
    raise typer.Exit(cmd_import_screenshot(str(image_path), accept_all=accept_all))


@app.command("add")
def add_cmd(
    date: Annotated[str, typer.Option(help="Transaction date (YYYY-MM-DD).")],
    description: Annotated[str, typer.Option(help="Transaction description.")],
    amount: Annotated[str, typer.Option(help="Signed amount; negative for spending.")],
    category: Annotated[
        str | None, typer.Option(help="Category (free text; default Essentials).")
    ] = None,
) -> None:
    raise typer.Exit(
        cmd_add(date=date, description=description, amount=amount, category=category)
    )


@app.command("budget")
def budget_cmd(
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", help="Budget entry as section:index=amount (repeatable)."),
    ] = None,
) -> None:
    raise typer.Exit(cmd_budget(assignments or []))


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
