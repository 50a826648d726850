"""
Text normalization applied once per email before classification/extraction.

The retrieval collaborator is expected to strip HTML, but stray markup can
leak through; anything that still looks like HTML is converted here.
Newlines are kept because several label patterns ("Item: ...") stop at the
end of a line.
"""

from __future__ import annotations

import html
import re

from warrantywatch.utils.html import html_to_text

_HTML_TAG_RE = re.compile(
    r"</?\s*(?:html|head|body|div|p|br|span|table|tbody|thead|tr|td|th|a|img|b|i|u|"
    r"strong|em|li|ul|ol|h[1-6]|font|center|style|script|meta|hr)\b[^>]*>",
    re.IGNORECASE,
)
_INLINE_WS_RE = re.compile(r"[ \t\f\v\xa0]+")


def looks_like_html(text: str | None) -> bool:
    """True if the text contains recognisable HTML tags."""
    if not text:
        return False
    return _HTML_TAG_RE.search(text) is not None


def normalize_subject(subject: str | None) -> str:
    """Collapse all whitespace in a subject line to single spaces."""
    if not subject:
        return ""
    return " ".join(subject.split())


def normalize_body(body: str | None) -> str:
    """
    Normalize an email body to plain text.

    - HTML (or leaked markup) is converted to text
    - entities are unescaped
    - CRLF/CR become LF, inline whitespace runs collapse, lines are stripped
    """
    if not body:
        return ""

    text = body.replace("\r\n", "\n").replace("\r", "\n")
    if looks_like_html(text):
        text = html_to_text(text)
    else:
        text = html.unescape(text)

    lines = [_INLINE_WS_RE.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def combined_text(subject: str, body: str) -> str:
    """The text every extractor reads: subject and body joined by a space."""
    return f"{subject} {body}"
