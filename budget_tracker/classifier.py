"""Description -> category classification with a learned memory.

Priority order:

1. The category memory, keyed by the normalized description. A remembered
   choice always wins over keyword heuristics.
2. Keyword groups, tested in the fixed order of :data:`KEYWORD_RULES`; the
   first group that matches decides.
3. ``Other``.

The functions here are pure. Reading and writing the memory is the caller's
job (see :class:`~budget_tracker.store.TransactionStore`).
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from .categories import ESSENTIALS, INCOME, OTHER, SAVINGS, VARIABLE, normalize_description

KEYWORD_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"rema|coop|kiwi|meny|grocer|butikk|mat", re.IGNORECASE), ESSENTIALS),
    (
        re.compile(r"cinema|netflix|spotify|restaurant|kafe|entertain", re.IGNORECASE),
        VARIABLE,
    ),
    (re.compile(r"salary|lønn|bonus|income", re.IGNORECASE), INCOME),
    (re.compile(r"saving|fond|aksje|invest|sparekonto", re.IGNORECASE), SAVINGS),
)


def keyword_category(description: str) -> str | None:
    """Return the category of the first keyword group matching ``description``."""

    text = normalize_description(description)
    for pattern, category in KEYWORD_RULES:
        if pattern.search(text):
            return category
    return None


def classify(description: str, memory: Mapping[str, str] | None = None) -> str:
    """Return the category for ``description``, consulting ``memory`` first."""

    if memory:
        remembered = memory.get(normalize_description(description))
        if remembered:
            return remembered
    return keyword_category(description) or OTHER


__all__ = ["KEYWORD_RULES", "classify", "keyword_category"]
