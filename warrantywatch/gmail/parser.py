"""
Gmail adapter: convert Gmail API message payloads into RawEmail records.

Deterministic and side-effect free apart from telemetry. Multipart messages
are walked recursively; text/plain parts are kept as-is and text/html parts are
converted to text, all joined in MIME order.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from typing import Any

from warrantywatch.observability.telemetry import counter
from warrantywatch.parsing.models import RawEmail
from warrantywatch.utils.html import html_to_text

_TEXT_PLAIN = "text/plain"
_TEXT_HTML = "text/html"


class GmailParsingError(ValueError):
    """Raised when a Gmail payload cannot be converted into a RawEmail."""


def _header_lookup(headers: Iterable[dict[str, str]], name: str) -> str | None:
    name_lower = name.lower()
    for header in headers:
        if header.get("name", "").lower() == name_lower:
            return header.get("value")
    return None


def _decode_base64(data: str) -> str:
    """Decode Gmail's URL-safe base64 payloads."""
    padding = "=" * (-len(data) % 4)
    try:
        decoded = base64.urlsafe_b64decode((data + padding).encode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        raise GmailParsingError("failed to decode message body") from exc
    return decoded.decode("utf-8", errors="replace")


def _iter_parts(part: dict[str, Any]) -> Iterator[tuple[str, str]]:
    """Yield (mime_type, decoded_text) for every text part, depth first."""
    mime_type = part.get("mimeType", "")
    data = (part.get("body") or {}).get("data")
    if data and mime_type in (_TEXT_PLAIN, _TEXT_HTML):
        yield mime_type, _decode_base64(data)
    for child in part.get("parts") or []:
        yield from _iter_parts(child)


def _internal_date_iso(internal_date: Any) -> str | None:
    """Gmail internalDate is milliseconds since epoch."""
    if internal_date in (None, ""):
        return None
    try:
        return datetime.fromtimestamp(int(internal_date) / 1000.0, tz=UTC).isoformat()
    except (ValueError, TypeError, OSError, OverflowError):
        counter("gmail.internal_date.invalid")
        return None


def extract_body_text(payload: dict[str, Any]) -> str:
    """Every text part in MIME order, HTML converted to text, joined by a space."""
    texts: list[str] = []
    for mime_type, text in _iter_parts(payload):
        if mime_type == _TEXT_HTML:
            text = html_to_text(text)
        texts.append(text.strip())
    return " ".join(text for text in texts if text).strip()


def raw_email_from_gmail(message: dict[str, Any]) -> RawEmail:
    """
    Convert a Gmail API message (format=full) into a RawEmail.

    The Date header is preferred; internalDate is used when the header is absent.

    Raises:
        GmailParsingError: If the message is not a dict or a body part cannot be decoded
    """
    if not isinstance(message, dict):
        raise GmailParsingError("message must be a dict")

    payload = message.get("payload") or {}
    headers = payload.get("headers") or []

    date = _header_lookup(headers, "Date") or _internal_date_iso(message.get("internalDate"))

    return RawEmail(
        id=message.get("id") or "",
        subject=_header_lookup(headers, "Subject") or "",
        from_address=_header_lookup(headers, "From") or "",
        date=date,
        body=extract_body_text(payload),
    )
