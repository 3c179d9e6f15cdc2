"""Exception types raised by ``budget_tracker``.

Parsing and classification never raise for malformed OCR text; they degrade
to fewer records. Only the OCR collaborator surfaces a hard failure.
"""

from __future__ import annotations


class BudgetTrackerError(Exception):
    """Base class for package-specific errors."""


class OcrError(BudgetTrackerError):
    """The OCR service could not be reached or returned an unusable body."""


__all__ = ["BudgetTrackerError", "OcrError"]
