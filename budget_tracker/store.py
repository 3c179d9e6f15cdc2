"""In-memory transaction store with category memory.

The store is the single owner of three pieces of state:

- ``transactions``: confirmed records, most recent first.
- ``memory``: normalized description -> category, learned from every
  confirmation (manual or bulk). Last write wins.
- ``candidates``: the pending batch produced by the latest parse. A new parse
  replaces it wholesale.

Callers read through the tuple-returning properties and write only through the
methods below. Every mutation swaps in a fully built list, so observers never
see a half-applied change.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal
from types import MappingProxyType

from .categories import ESSENTIALS, INCOME, SAVINGS, VARIABLE, next_category, normalize_description
from .classifier import classify
from .logging_setup import get_logger
from .models import CategoryMemory, ManualEntry, ParsedTransaction, Transaction

_logger = get_logger("budget_tracker.store")


def _new_id() -> str:
    return uuid.uuid4().hex


# Demo rows shown on first launch.
SAMPLE_TRANSACTIONS: tuple[tuple[str, str, str, str], ...] = (
    ("2024-08-07", "Salary", INCOME, "3500"),
    ("2024-08-07", "Groceries", ESSENTIALS, "-100"),
    ("2024-08-06", "Cinema", VARIABLE, "-45"),
    ("2024-08-05", "Savings Account", SAVINGS, "-400"),
)


class TransactionStore:
    """Confirmed transactions, pending candidates, and the category memory."""

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        *,
        memory: CategoryMemory | None = None,
    ) -> None:
        self._transactions: list[Transaction] = list(transactions)
        self._memory: CategoryMemory = dict(memory) if memory else {}
        self._candidates: list[ParsedTransaction] = []

    @classmethod
    def with_sample_data(cls) -> TransactionStore:
        rows = [
            Transaction(
                id=_new_id(),
                date=d,
                description=desc,
                category=cat,
                amount=Decimal(amount),
            )
            for d, desc, cat, amount in SAMPLE_TRANSACTIONS
        ]
        return cls(rows)

    # ---- Read access --------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def candidates(self) -> tuple[ParsedTransaction, ...]:
        return tuple(self._candidates)

    @property
    def memory(self) -> Mapping[str, str]:
        """Read-only view of the category memory."""

        return MappingProxyType(self._memory)

    def get(self, tx_id: str) -> Transaction:
        for tx in self._transactions:
            if tx.id == tx_id:
                return tx
        raise KeyError(tx_id)

    def classify(self, description: str) -> str:
        """Classify ``description`` against this store's memory."""

        return classify(description, self._memory)

    # ---- Confirmed transactions --------------------------------------------

    def _remember(self, description: str, category: str) -> None:
        self._memory[normalize_description(description)] = category

    def add_manual(self, entry: ManualEntry) -> Transaction:
        """Confirm a manually entered transaction and remember its category."""

        tx = Transaction(
            id=_new_id(),
            date=entry.date,
            description=entry.description,
            category=entry.category,
            amount=entry.amount,
        )
        self._transactions = [tx, *self._transactions]
        self._remember(tx.description, tx.category)
        _logger.info("store:add_manual id=%s category=%s", tx.id, tx.category)
        return tx

    def confirm_batch(
        self, candidates: Iterable[ParsedTransaction] | None = None
    ) -> list[Transaction]:
        """Confirm ``candidates`` (default: the pending batch) ahead of existing rows.

        Relative order within the batch is preserved. Memory is updated once
        per candidate in batch order, so a later candidate overrides an earlier
        one with the same normalized description. The pending batch is cleared.
        """

        batch = list(self._candidates if candidates is None else candidates)
        confirmed = [
            Transaction(
                id=_new_id(),
                date=c.date,
                description=c.description,
                category=c.category,
                amount=c.amount,
            )
            for c in batch
        ]
        memory = dict(self._memory)
        for tx in confirmed:
            memory[normalize_description(tx.description)] = tx.category

        self._transactions = [*confirmed, *self._transactions]
        self._memory = memory
        self._candidates = []
        _logger.info("store:confirm_batch count=%d", len(confirmed))
        return confirmed

    def recategorize(self, tx_id: str, category: str) -> Transaction:
        """Replace the category of a confirmed transaction.

        The memory is not touched; it only shapes future classifications.
        """

        updated: Transaction | None = None
        rows: list[Transaction] = []
        for tx in self._transactions:
            if tx.id == tx_id:
                updated = replace(tx, category=category)
                rows.append(updated)
            else:
                rows.append(tx)
        if updated is None:
            raise KeyError(tx_id)
        self._transactions = rows
        return updated

    # ---- Pending candidates ------------------------------------------------

    def replace_candidates(self, candidates: Iterable[ParsedTransaction]) -> None:
        self._candidates = list(candidates)
        _logger.debug("store:replace_candidates count=%d", len(self._candidates))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._candidates):
            raise IndexError(f"no pending candidate at index {index}")

    def update_candidate_category(self, index: int, category: str) -> ParsedTransaction:
        """Set the category of a pending candidate; no memory effect until confirmed."""

        self._check_index(index)
        candidate = self._candidates[index]
        candidate.category = category
        return candidate

    def cycle_candidate_category(self, index: int) -> ParsedTransaction:
        self._check_index(index)
        return self.update_candidate_category(
            index, next_category(self._candidates[index].category)
        )

    def discard_candidate(self, index: int) -> ParsedTransaction:
        self._check_index(index)
        removed = self._candidates[index]
        self._candidates = [c for i, c in enumerate(self._candidates) if i != index]
        return removed

    def discard_candidates(self) -> None:
        self._candidates = []


__all__ = ["SAMPLE_TRANSACTIONS", "TransactionStore"]
