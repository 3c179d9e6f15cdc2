"""Category domain helpers.

The category set is closed and ordered. The order drives cycling in the
review flow and the column order of summaries:

    Income, Essentials, Variable, Savings, Other

Manual entries may carry a category outside this set; such values are treated
as opaque identifiers and rendered with the ``Other`` style.
"""

from __future__ import annotations

from dataclasses import dataclass

INCOME = "Income"
ESSENTIALS = "Essentials"
VARIABLE = "Variable"
SAVINGS = "Savings"
OTHER = "Other"

CATEGORIES: tuple[str, ...] = (INCOME, ESSENTIALS, VARIABLE, SAVINGS, OTHER)

# Default category offered by the manual entry form.
DEFAULT_MANUAL_CATEGORY = ESSENTIALS


def normalize_description(description: str) -> str:
    """Return the category-memory key for ``description`` (trimmed, case-folded)."""

    return description.strip().casefold()


def is_known_category(category: str) -> bool:
    return category in CATEGORIES


def next_category(category: str) -> str:
    """Return the category after ``category`` in the fixed order, wrapping.

    A value outside the closed set restarts the cycle at the first category.
    """

    try:
        pos = CATEGORIES.index(category)
    except ValueError:
        return CATEGORIES[0]
    return CATEGORIES[(pos + 1) % len(CATEGORIES)]


# ---------------------------
# Presentation
# ---------------------------


@dataclass(frozen=True, slots=True)
class CategoryStyle:
    color: str
    icon: str


_STYLES: dict[str, CategoryStyle] = {
    INCOME: CategoryStyle(color="#22c55e", icon="cash"),
    ESSENTIALS: CategoryStyle(color="#fbbf24", icon="home"),
    VARIABLE: CategoryStyle(color="#3b82f6", icon="cart"),
    SAVINGS: CategoryStyle(color="#a21caf", icon="trending-up"),
    OTHER: CategoryStyle(color="#64748b", icon="ellipse"),
}


def category_style(category: str) -> CategoryStyle:
    """Return the display style for ``category``; unknown values get ``Other``'s."""

    return _STYLES.get(category, _STYLES[OTHER])


__all__ = [
    "CATEGORIES",
    "INCOME",
    "ESSENTIALS",
    "VARIABLE",
    "SAVINGS",
    "OTHER",
    "DEFAULT_MANUAL_CATEGORY",
    "CategoryStyle",
    "category_style",
    "is_known_category",
    "next_category",
    "normalize_description",
]
