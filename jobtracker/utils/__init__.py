"""Utility functions."""

from jobtracker.utils.email_text import (
    collect_text,
    decode_body,
    get_header,
    parse_message_date,
    strip_html,
)

__all__ = [
    "collect_text",
    "decode_body",
    "get_header",
    "parse_message_date",
    "strip_html",
]
