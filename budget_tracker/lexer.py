"""Line-level recognizers for date headers and amounts in OCR text.

All locale rules for the supported statement layout live here:

- A date header is a day name followed by ``DD.MM.YY`` (``"Torsdag 07.08.25"``).
  The day name is matched but not interpreted. Two-digit years always map to
  ``20YY``; there is no century rollover.
- An amount is an optionally negative number with space-grouped digits and a
  ``.`` or ``,`` decimal separator followed by exactly two digits
  (``"-1 234,50"``).

Both recognizers search anywhere in the line and return ``None`` on no match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

# Day names: ASCII letters plus accented Latin letters (covers æ ø å).
_DATE_HEADER_RE = re.compile(r"([A-Za-zÀ-ÖØ-öø-ÿ]+)\s+(\d{2})\.(\d{2})\.(\d{2})")
_AMOUNT_RE = re.compile(r"-?\d[\d\s]*[.,]\d{2}")


@dataclass(frozen=True, slots=True)
class DateHeader:
    """Components of a matched ``<day name> DD.MM.YY`` header."""

    day_name: str
    day2: str
    month2: str
    year2: str

    @property
    def iso_date(self) -> str:
        return f"20{self.year2}-{self.month2}-{self.day2}"


def match_date_header(line: str) -> DateHeader | None:
    m = _DATE_HEADER_RE.search(line)
    if m is None:
        return None
    day_name, day2, month2, year2 = m.groups()
    return DateHeader(day_name=day_name, day2=day2, month2=month2, year2=year2)


def match_amount(line: str) -> Decimal | None:
    """Return the first amount token in ``line`` as a signed ``Decimal``.

    Internal whitespace is removed and a ``,`` separator becomes ``.`` before
    parsing, so ``"-1 234,50"`` yields ``Decimal("-1234.50")``.
    """

    m = _AMOUNT_RE.search(line)
    if m is None:
        return None
    token = "".join(m.group(0).split()).replace(",", ".")
    try:
        return Decimal(token)
    except InvalidOperation:  # pragma: no cover - the pattern admits only digits
        return None


def looks_like_amount(line: str) -> bool:
    return _AMOUNT_RE.search(line) is not None


__all__ = ["DateHeader", "looks_like_amount", "match_amount", "match_date_header"]
