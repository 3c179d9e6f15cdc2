"""Monthly budget planner and category totals.

The planner holds four sections of named line items. Amounts are entered as
free text; blank or non-numeric entries count as zero in every total.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from .categories import CATEGORIES, OTHER, is_known_category
from .models import Transaction

SECTIONS: tuple[str, ...] = ("income", "essentials", "variable", "savings")

_DEFAULT_ITEMS: dict[str, tuple[str, ...]] = {
    "income": ("Salary", "Other Income"),
    "essentials": ("Rent", "Utilities", "Groceries"),
    "variable": ("Eating Out", "Entertainment"),
    "savings": ("Savings Account", "Investments"),
}


def _to_amount(raw: str) -> Decimal:
    s = "".join(raw.split()).replace(",", ".")
    if not s:
        return Decimal(0)
    try:
        value = Decimal(s)
    except InvalidOperation:
        return Decimal(0)
    return value if value.is_finite() else Decimal(0)


@dataclass(slots=True)
class BudgetItem:
    name: str
    amount: str = ""

    @property
    def value(self) -> Decimal:
        return _to_amount(self.amount)


@dataclass(slots=True)
class BudgetPlan:
    sections: dict[str, list[BudgetItem]] = field(
        default_factory=lambda: {
            name: [BudgetItem(item) for item in items] for name, items in _DEFAULT_ITEMS.items()
        }
    )

    def _section(self, section: str) -> list[BudgetItem]:
        try:
            return self.sections[section]
        except KeyError:
            raise KeyError(f"unknown budget section: {section!r}") from None

    def set_amount(self, section: str, index: int, amount: str) -> None:
        items = self._section(section)
        if not 0 <= index < len(items):
            raise IndexError(f"no item {index} in section {section!r}")
        items[index].amount = amount

    def total(self, section: str) -> Decimal:
        return sum((item.value for item in self._section(section)), Decimal(0))

    @property
    def total_income(self) -> Decimal:
        return self.total("income")

    @property
    def total_expenses(self) -> Decimal:
        return self.total("essentials") + self.total("variable") + self.total("savings")

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses


def summarize_transactions(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Sum confirmed amounts per category in the fixed category order.

    Transactions with a category outside the closed set are counted under
    ``Other``.
    """

    totals: dict[str, Decimal] = {c: Decimal(0) for c in CATEGORIES}
    for tx in transactions:
        key = tx.category if is_known_category(tx.category) else OTHER
        totals[key] += tx.amount
    return totals


__all__ = ["SECTIONS", "BudgetItem", "BudgetPlan", "summarize_transactions"]
