"""Rich tables for confirmed transactions, pending candidates and budgets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, localcontext

from rich.table import Table
from rich.text import Text

from .budget import SECTIONS, BudgetPlan
from .categories import category_style
from .models import ParsedTransaction, Transaction


def format_amount(amount: Decimal) -> str:
    """Signed amount with two decimals; inflows carry a leading ``+``."""

    with localcontext() as ctx:
        # Room for every integer digit plus the two decimals.
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        q = amount.quantize(Decimal("0.01"))
    return f"+{q}" if q > 0 else f"{q}"


def _amount_cell(amount: Decimal) -> Text:
    return Text(format_amount(amount), style="green" if amount > 0 else "red")


def _category_cell(category: str) -> Text:
    style = category_style(category)
    return Text(f"[{style.icon}] {category}", style=style.color)


def candidates_table(candidates: Sequence[ParsedTransaction]) -> Table:
    table = Table(title="Parsed from screenshot")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for idx, c in enumerate(candidates):
        table.add_row(
            str(idx), c.date, c.description, _category_cell(c.category), _amount_cell(c.amount)
        )
    return table


def transactions_table(transactions: Iterable[Transaction]) -> Table:
    table = Table(title="Transactions")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    rows = list(transactions)
    for tx in rows:
        table.add_row(tx.date, tx.description, _category_cell(tx.category), _amount_cell(tx.amount))
    if not rows:
        table.caption = "No transactions yet."
    return table


def budget_table(plan: BudgetPlan) -> Table:
    table = Table(title="This Month", min_width=60)
    table.add_column("Section")
    table.add_column("Item")
    table.add_column("Amount", justify="right")
    for section in SECTIONS:
        for item in plan.sections[section]:
            table.add_row(section, item.name, f"{item.value}")
        table.add_row(section, Text("total", style="bold"), Text(f"{plan.total(section)}", style="bold"))
    balance_style = "red" if plan.balance < 0 else "cyan"
    table.caption = (
        f"Income {plan.total_income} | Expenses {plan.total_expenses} | "
        f"Balance [{balance_style}]{plan.balance}[/{balance_style}]"
    )
    return table


def category_totals_table(totals: Mapping[str, Decimal]) -> Table:
    table = Table(title="By category")
    table.add_column("Category")
    table.add_column("Total", justify="right")
    for category, total in totals.items():
        table.add_row(_category_cell(category), _amount_cell(total))
    return table


__all__ = [
    "budget_table",
    "candidates_table",
    "category_totals_table",
    "format_amount",
    "transactions_table",
]
