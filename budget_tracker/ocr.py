"""Thin client for an OCR.space-compatible text extraction endpoint.

Non-streaming form POST with the image embedded as a base64 data URI. Returns
the text of the first parsed result, or ``""`` when the service found none.
Configuration is read from the environment at call time:

- ``OCR_SPACE_API_KEY`` (default: the public ``helloworld`` demo key)
- ``OCR_SPACE_URL`` (default: ``https://api.ocr.space/parse/image``)
- ``BUDGET_TRACKER_OCR_TIMEOUT`` seconds (default: 30)

There are no retries; callers surface a failure once and let the user start
over.
"""

from __future__ import annotations

import base64
import json
import mimetypes
import os
import urllib.error
import urllib.parse
import urllib.request
from os import PathLike
from pathlib import Path
from typing import Any

from .errors import OcrError
from .logging_setup import get_logger

DEFAULT_OCR_URL = "https://api.ocr.space/parse/image"
DEFAULT_API_KEY = "helloworld"
DEFAULT_TIMEOUT_SEC: float = 30.0

_logger = get_logger("budget_tracker.ocr")


def _resolve_timeout(timeout: float | None) -> float:
    """Explicit value first, then ``BUDGET_TRACKER_OCR_TIMEOUT``, then the default."""

    if timeout is not None:
        return timeout
    env_val = os.getenv("BUDGET_TRACKER_OCR_TIMEOUT")
    try:
        parsed = float(env_val) if env_val else None
    except ValueError:
        parsed = None
    if parsed is not None and parsed > 0:
        return parsed
    return DEFAULT_TIMEOUT_SEC


def _data_uri(path: Path) -> str:
    mime = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def parse_ocr_response(body: Any) -> str:
    """Return ``ParsedResults[0].ParsedText`` from a decoded response, else ``""``."""

    if not isinstance(body, dict):
        raise OcrError("OCR response must be a JSON object")
    results = body.get("ParsedResults")
    if not results:
        if body.get("IsErroredOnProcessing"):
            detail = body.get("ErrorMessage") or "unknown error"
            raise OcrError(f"OCR service reported an error: {detail}")
        return ""
    if not isinstance(results, list):
        raise OcrError("OCR response field ParsedResults must be a list")
    text = results[0].get("ParsedText") if isinstance(results[0], dict) else None
    return text if isinstance(text, str) else ""


def extract_text(
    image_path: str | PathLike[str],
    *,
    api_key: str | None = None,
    url: str | None = None,
    timeout: float | None = None,
) -> str:
    """Send the image at ``image_path`` to the OCR service and return its text."""

    path = Path(image_path)
    try:
        image_uri = _data_uri(path)
    except OSError as e:
        raise OcrError(f"cannot read image {path}: {e}") from e

    form = {
        "apikey": api_key or os.getenv("OCR_SPACE_API_KEY") or DEFAULT_API_KEY,
        "language": "eng",
        "isTable": "true",
        "base64Image": image_uri,
    }
    data = urllib.parse.urlencode(form).encode("ascii")
    endpoint = url or os.getenv("OCR_SPACE_URL") or DEFAULT_OCR_URL
    req = urllib.request.Request(endpoint, data=data, method="POST")
    req.add_header("Content-Type", "application/x-www-form-urlencoded")

    _logger.info("ocr:request image=%s bytes=%d", path.name, len(data))
    try:
        with urllib.request.urlopen(req, timeout=_resolve_timeout(timeout)) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as e:
        raise OcrError(f"OCR service error: {e.code} {e.reason}") from e
    except (urllib.error.URLError, TimeoutError) as e:
        raise OcrError(f"OCR service unreachable: {e}") from e

    try:
        body = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise OcrError("failed to decode JSON from OCR service") from e

    text = parse_ocr_response(body)
    _logger.info("ocr:done image=%s chars=%d", path.name, len(text))
    return text


__all__ = ["DEFAULT_API_KEY", "DEFAULT_OCR_URL", "extract_text", "parse_ocr_response"]
