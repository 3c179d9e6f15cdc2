"""Terminal review of pending candidates (prompt_toolkit-based).

Kept apart from the store and segmenter so the prompts can be driven in tests
with a pipe input.

Review commands
---------------
- Enter or ``a``: add all pending candidates to the store.
- ``c <n>``: cycle the category of candidate ``n``.
- ``s <n>``: choose the category of candidate ``n`` from a completion menu.
- ``d <n>``: discard candidate ``n``.
- ``q``: abandon the batch without adding anything.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console

from .categories import CATEGORIES, is_known_category
from .models import Transaction
from .render import candidates_table
from .store import TransactionStore

REVIEW_HELP = "Enter/a add all • c N cycle • s N choose • d N discard • q abandon"


def _derive_session(session: PromptSession | None, kb: KeyBindings | None = None) -> PromptSession:
    if session is None:
        return PromptSession(key_bindings=kb)
    return PromptSession(
        input=getattr(session, "input", None),
        output=getattr(session, "output", None),
        key_bindings=kb,
    )


def select_category(
    categories: Sequence[str] | Iterable[str],
    *,
    default: str,
    message: str = "Choose category (Enter to accept): ",
    session: PromptSession | None = None,
) -> str:
    """Prompt for a category with the predicted ``default`` pre-filled.

    Enter accepts the buffer. A strict, case-insensitive prefix of a known
    category is completed before accepting, and known categories come back in
    their canonical casing. Other text is returned unchanged.
    """

    words = list(categories)
    canonical = {w.lower(): w for w in words}
    completer = WordCompleter(words, ignore_case=True, match_middle=True, sentence=False)

    def _best_prefix_match(text: str) -> str | None:
        if not text:
            return None
        lower = text.lower()
        for w in words:
            wl = w.lower()
            if wl == lower:
                return None
            if wl.startswith(lower):
                return w
        return None

    kb = KeyBindings()

    @kb.add("enter", eager=True)
    def _(event) -> None:  # pragma: no cover - integration path
        b = event.app.current_buffer
        cs = b.complete_state
        if cs is not None and cs.current_completion is not None:
            b.apply_completion(cs.current_completion)
        else:
            cand = _best_prefix_match(b.document.text)
            if cand:
                b.insert_text(cand[len(b.document.text) :])
        b.validate_and_handle()

    sess = _derive_session(session, kb)
    result = sess.prompt(message, default=default, completer=completer, key_bindings=kb)
    result = result.strip()
    if not result:
        return default
    return canonical.get(result.lower(), result)


class ReviewOutcome(enum.StrEnum):
    ADDED = "added"
    ABANDONED = "abandoned"


@dataclass(slots=True)
class ReviewResult:
    outcome: ReviewOutcome
    confirmed: list[Transaction] = field(default_factory=list)


def _parse_index(arg: str, size: int) -> int | None:
    try:
        idx = int(arg)
    except ValueError:
        return None
    return idx if 0 <= idx < size else None


def review_candidates(
    store: TransactionStore,
    *,
    session: PromptSession | None = None,
    console: Console | None = None,
) -> ReviewResult:
    """Interactively review the store's pending batch until added or abandoned."""

    console = console or Console()
    sess = _derive_session(session)

    while True:
        pending = store.candidates
        if not pending:
            console.print("No pending transactions.")
            return ReviewResult(ReviewOutcome.ABANDONED)

        console.print(candidates_table(pending))
        console.print(REVIEW_HELP)
        command = sess.prompt("Review> ").strip()
        verb, _, arg = command.partition(" ")
        verb = verb.lower()

        if verb in ("", "a"):
            confirmed = store.confirm_batch()
            console.print(f"Added {len(confirmed)} transaction(s).")
            return ReviewResult(ReviewOutcome.ADDED, confirmed)
        if verb == "q":
            store.discard_candidates()
            return ReviewResult(ReviewOutcome.ABANDONED)
        if verb not in ("c", "s", "d"):
            console.print(f"Unknown command: {command!r}")
            continue

        idx = _parse_index(arg.strip(), len(pending))
        if idx is None:
            console.print(f"Expected an index between 0 and {len(pending) - 1}.")
            continue

        if verb == "c":
            store.cycle_candidate_category(idx)
        elif verb == "d":
            store.discard_candidate(idx)
        else:
            chosen = select_category(CATEGORIES, default=pending[idx].category, session=sess)
            if is_known_category(chosen):
                store.update_candidate_category(idx, chosen)
            else:
                console.print(f"Unknown category: {chosen!r}")


__all__ = [
    "REVIEW_HELP",
    "ReviewOutcome",
    "ReviewResult",
    "review_candidates",
    "select_category",
]
