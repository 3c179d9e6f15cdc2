"""Screenshot upload flow: OCR -> segment -> pending candidate batch.

One upload is one logical task. The OCR call is the only suspension point and
runs in a worker thread; parsing and the store update run on the event loop.

Each upload takes a generation number. When an OCR response arrives after a
newer upload has started, its result is discarded and the store is left
untouched, so a slow first request can never overwrite a newer batch.
"""

from __future__ import annotations

import asyncio
import enum
from collections.abc import Callable
from dataclasses import dataclass
from os import PathLike
from typing import TypeAlias

from .logging_setup import get_logger
from .models import ParsedTransaction
from .ocr import extract_text
from .segmenter import segment
from .store import TransactionStore

TextExtractor: TypeAlias = Callable[[str | PathLike[str]], str]

MSG_NO_TEXT = "No text found in image."
MSG_UNPARSEABLE = "No transactions could be extracted from the screenshot."
MSG_FAILED = "Failed to read transactions from image."

_logger = get_logger("budget_tracker.upload")


class UploadStatus(enum.StrEnum):
    PARSED = "parsed"
    NO_TEXT = "no_text"
    UNPARSEABLE = "unparseable"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class UploadOutcome:
    """Result of a single upload.

    ``message`` is an informational notice for ``no_text``/``unparseable``, an
    alert for ``failed``, and ``None`` otherwise.
    """

    status: UploadStatus
    generation: int
    candidates: tuple[ParsedTransaction, ...] = ()
    message: str | None = None


class UploadSession:
    """Runs uploads against a store and guards it from stale OCR responses."""

    def __init__(
        self, store: TransactionStore, *, extractor: TextExtractor = extract_text
    ) -> None:
        self._store = store
        self._extractor = extractor
        self._generation = 0

    @property
    def generation(self) -> int:
        """Generation number of the most recently started upload."""

        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def ingest_text(self, text: str, *, generation: int | None = None) -> UploadOutcome:
        """Parse ``text`` and replace the store's pending batch.

        Empty text and text with no parseable blocks are reported with distinct
        notices; in both cases the pending batch is replaced by an empty one.
        """

        gen = self._generation if generation is None else generation
        parsed = segment(text, self._store.memory)
        self._store.replace_candidates(parsed)
        if not text.strip():
            return UploadOutcome(UploadStatus.NO_TEXT, gen, message=MSG_NO_TEXT)
        if not parsed:
            return UploadOutcome(UploadStatus.UNPARSEABLE, gen, message=MSG_UNPARSEABLE)
        return UploadOutcome(UploadStatus.PARSED, gen, candidates=tuple(parsed))

    async def upload(self, image: str | PathLike[str]) -> UploadOutcome:
        self._generation += 1
        gen = self._generation
        _logger.info("upload:start generation=%d", gen)

        try:
            text = await asyncio.to_thread(self._extractor, image)
        except Exception as e:  # noqa: BLE001 - any OCR failure is a single user alert
            if not self.is_current(gen):
                _logger.info("upload:stale generation=%d latest=%d", gen, self._generation)
                return UploadOutcome(UploadStatus.STALE, gen)
            _logger.warning(
                "upload:failed generation=%d error=%s", gen, e.__class__.__name__
            )
            return UploadOutcome(UploadStatus.FAILED, gen, message=MSG_FAILED)

        if not self.is_current(gen):
            _logger.info("upload:stale generation=%d latest=%d", gen, self._generation)
            return UploadOutcome(UploadStatus.STALE, gen)

        outcome = self.ingest_text(text or "", generation=gen)
        _logger.info(
            "upload:done generation=%d status=%s records=%d",
            gen,
            outcome.status,
            len(outcome.candidates),
        )
        return outcome


__all__ = [
    "MSG_FAILED",
    "MSG_NO_TEXT",
    "MSG_UNPARSEABLE",
    "TextExtractor",
    "UploadOutcome",
    "UploadSession",
    "UploadStatus",
]
