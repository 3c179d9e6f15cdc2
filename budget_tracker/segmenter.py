"""Segment OCR text into candidate transactions.

The supported statement layout prints each transaction as a block of lines::

    Torsdag 07.08.25      <- date header (day name + DD.MM.YY)
    Rema 1000             <- description
    -111,00               <- amount
    Dagligvarer           <- optional category hint

Segmentation is a small state machine over the trimmed, non-empty lines:

    SEEK_HEADER -> READ_DESCRIPTION -> READ_AMOUNT_OR_CATEGORY_1
                -> READ_AMOUNT_OR_CATEGORY_2 -> EMIT (or reject)

After a header at position ``i`` the scan always resumes at ``i + 4``, however
many of those lines the block really used. Blocks of a different height
therefore shift every later block; that is the layout this parser targets.

Malformed input never raises. Blocks without a non-zero amount or a
description are dropped and logged at DEBUG level.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from .classifier import classify
from .lexer import DateHeader, looks_like_amount, match_amount, match_date_header
from .logging_setup import get_logger
from .models import ParsedTransaction

# Every block spans this many source lines, starting at its header.
BLOCK_STRIDE: int = 4

_logger = get_logger("budget_tracker.segmenter")


class _State(enum.Enum):
    SEEK_HEADER = "seek_header"
    READ_DESCRIPTION = "read_description"
    READ_AMOUNT_OR_CATEGORY_1 = "read_amount_or_category_1"
    READ_AMOUNT_OR_CATEGORY_2 = "read_amount_or_category_2"
    EMIT = "emit"


@dataclass(slots=True)
class _Block:
    """Fields collected for the block currently being read."""

    start: int
    header: DateHeader
    description: str = ""
    amount_line: str = ""
    category_line: str = ""


def split_lines(text: str) -> list[str]:
    """Return the trimmed, non-empty lines of ``text`` in order.

    Only ``\\n`` separates lines; other control characters stay inside a line.
    """

    return [s for s in (line.strip() for line in text.split("\n")) if s]


def _line_at(lines: list[str], pos: int) -> str:
    return lines[pos] if 0 <= pos < len(lines) else ""


def _resolve_amount_lines(block: _Block, first: str, second: str) -> None:
    # Prefer the first candidate line; fall through to the second only when
    # the first has no amount and the second does. The unused line becomes the
    # category hint.
    if not looks_like_amount(first) and looks_like_amount(second):
        block.amount_line = second
        block.category_line = first
    else:
        block.amount_line = first
        block.category_line = second


def _finish_block(
    block: _Block, memory: Mapping[str, str] | None
) -> ParsedTransaction | None:
    amount = match_amount(block.amount_line) or Decimal(0)

    category = classify(block.description, memory)
    if block.category_line and not looks_like_amount(block.category_line):
        category = classify(block.category_line, memory)

    if amount == 0 or not block.description:
        _logger.debug(
            "segment:block_dropped line=%d has_description=%s amount=%s",
            block.start,
            bool(block.description),
            amount,
        )
        return None

    return ParsedTransaction(
        date=block.header.iso_date,
        description=block.description,
        amount=amount,
        category=category,
    )


def segment(text: str, memory: Mapping[str, str] | None = None) -> list[ParsedTransaction]:
    """Extract candidate transactions from OCR ``text`` in input order.

    ``memory`` is the category memory consulted by the classifier; it is read
    only. Returns an empty list when nothing parseable is found.
    """

    lines = split_lines(text)
    results: list[ParsedTransaction] = []

    state = _State.SEEK_HEADER
    pos = 0
    block: _Block | None = None

    while pos < len(lines) or state is not _State.SEEK_HEADER:
        if state is _State.SEEK_HEADER:
            header = match_date_header(lines[pos])
            if header is None:
                pos += 1
                continue
            block = _Block(start=pos, header=header)
            state = _State.READ_DESCRIPTION

        elif state is _State.READ_DESCRIPTION:
            assert block is not None
            block.description = _line_at(lines, block.start + 1)
            state = _State.READ_AMOUNT_OR_CATEGORY_1

        elif state is _State.READ_AMOUNT_OR_CATEGORY_1:
            assert block is not None
            block.amount_line = _line_at(lines, block.start + 2)
            state = _State.READ_AMOUNT_OR_CATEGORY_2

        elif state is _State.READ_AMOUNT_OR_CATEGORY_2:
            assert block is not None
            _resolve_amount_lines(
                block, block.amount_line, _line_at(lines, block.start + 3)
            )
            state = _State.EMIT

        elif state is _State.EMIT:
            assert block is not None
            parsed = _finish_block(block, memory)
            if parsed is not None:
                results.append(parsed)
            pos = block.start + BLOCK_STRIDE
            block = None
            state = _State.SEEK_HEADER

    _logger.debug("segment:done lines=%d records=%d", len(lines), len(results))
    return results


__all__ = ["BLOCK_STRIDE", "segment", "split_lines"]
