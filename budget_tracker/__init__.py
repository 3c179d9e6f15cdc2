"""Public interface for the ``budget_tracker`` package.

Re-exports the parsing, classification and store API. There is no runtime
logic here, only symbol re-exports.
"""

from .categories import CATEGORIES, category_style, next_category, normalize_description
from .classifier import classify, keyword_category
from .errors import BudgetTrackerError, OcrError
from .lexer import DateHeader, match_amount, match_date_header
from .models import CategoryMemory, ManualEntry, ParsedTransaction, Transaction
from .segmenter import segment
from .store import TransactionStore
from .upload import UploadOutcome, UploadSession, UploadStatus

__all__ = [
    # Parsing and classification
    "segment",
    "classify",
    "keyword_category",
    "match_amount",
    "match_date_header",
    "DateHeader",
    # Categories
    "CATEGORIES",
    "category_style",
    "next_category",
    "normalize_description",
    # Store and upload flow
    "TransactionStore",
    "UploadSession",
    "UploadOutcome",
    "UploadStatus",
    # Models / types
    "CategoryMemory",
    "ManualEntry",
    "ParsedTransaction",
    "Transaction",
    # Errors
    "BudgetTrackerError",
    "OcrError",
]
