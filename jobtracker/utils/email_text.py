"""Helpers for extracting text from Gmail message resources."""

import base64
import binascii
import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from jobtracker.core.exceptions import MessageProcessingError
from jobtracker.models.application import utc_now

_TAG_RE = re.compile(r"<[^>]*>")


def get_header(headers: list[dict[str, str]], name: str) -> str:
    """Return the value of a header by case-insensitive name."""
    for header in headers:
        if header.get("name", "").lower() == name.lower():
            return header.get("value", "")
    return ""


def decode_body(data: str, message_id: str | None = None) -> str:
    """Decode a base64url body into text."""
    # Gmail omits base64 padding
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise MessageProcessingError(message_id, f"Invalid body encoding: {e}") from e
    return raw.decode("utf-8", errors="replace")


def strip_html(html: str) -> str:
    """Replace every HTML tag with a space."""
    return _TAG_RE.sub(" ", html)


def collect_text(payload: dict[str, Any] | None, message_id: str | None = None) -> str:
    """Concatenate the readable text of a message payload.

    Plain-text parts are decoded as-is, HTML parts have their tags removed,
    and nested multipart parts are walked recursively.
    """
    if not payload:
        return ""

    text = ""
    body_data = (payload.get("body") or {}).get("data")
    if body_data:
        text += decode_body(body_data, message_id)

    for part in payload.get("parts") or []:
        mime_type = part.get("mimeType")
        data = (part.get("body") or {}).get("data")
        if mime_type == "text/plain" and data:
            text += decode_body(data, message_id)
        elif mime_type == "text/html" and data:
            text += strip_html(decode_body(data, message_id))
        elif part.get("parts"):
            text += collect_text(part, message_id)
    return text


def parse_message_date(
    date_header: str, internal_date: str | int | None = None
) -> datetime:
    """Parse the sent date of a message as naive UTC."""
    if date_header:
        try:
            parsed = parsedate_to_datetime(date_header)
        except (TypeError, ValueError):
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(UTC).replace(tzinfo=None)
            return parsed

    if internal_date:
        try:
            return datetime.fromtimestamp(int(internal_date) / 1000, UTC).replace(
                tzinfo=None
            )
        except (TypeError, ValueError, OverflowError):
            pass

    return utc_now()
