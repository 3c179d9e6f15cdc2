"""Data models for ``budget_tracker``.

Two record shapes flow through the package:

- :class:`ParsedTransaction` is a candidate produced by the segmenter. Its
  ``category`` may be changed any number of times while it awaits review.
- :class:`Transaction` is a confirmed record owned by the
  :class:`~budget_tracker.store.TransactionStore`. It carries an opaque ``id``
  assigned at creation and is otherwise immutable; recategorizing produces a
  replaced instance.

Amounts are ``Decimal`` values: negative for outflows, positive for inflows.
Dates are ISO ``YYYY-MM-DD`` strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

from .categories import DEFAULT_MANUAL_CATEGORY

# ---------------------------------------------------------------------------
# Category memory
# ---------------------------------------------------------------------------

CategoryMemory: TypeAlias = dict[str, str]
"""Normalized description -> category. Last write wins for a given key."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ParsedTransaction:
    """A transaction extracted from OCR text and pending user review."""

    date: str
    description: str
    amount: Decimal
    category: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """A confirmed transaction held by the store."""

    id: str
    date: str
    description: str
    category: str
    amount: Decimal


# ---------------------------------------------------------------------------
# Manual entry input
# ---------------------------------------------------------------------------


class ManualEntry(BaseModel):
    """Validated input for a manually entered transaction.

    ``date``, ``description`` and ``amount`` are required and must be non-empty.
    ``category`` is free text: values outside the closed category set are
    accepted as-is and displayed with the ``Other`` style.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    date: str
    description: str
    amount: Decimal
    category: str = DEFAULT_MANUAL_CATEGORY

    @field_validator("date")
    @classmethod
    def _iso_date(cls, v: str) -> str:
        if not v:
            raise ValueError("date is required")
        try:
            parsed = datetime.strptime(v, "%Y-%m-%d").date()
        except ValueError as exc:
            raise ValueError(f"date must be YYYY-MM-DD, got {v!r}") from exc
        return parsed.isoformat()

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("description is required")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def _normalize_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            s = "".join(v.split()).replace(",", ".")
            if not s:
                raise ValueError("amount is required")
            return s
        return v

    @field_validator("category")
    @classmethod
    def _category_default_when_blank(cls, v: str) -> str:
        return v or DEFAULT_MANUAL_CATEGORY


__all__ = ["CategoryMemory", "ManualEntry", "ParsedTransaction", "Transaction"]
