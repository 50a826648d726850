"""HTML-to-text conversion for email bodies.

Many merchant receipts are HTML-only with no text/plain MIME part, and some
upstream strippers leak stray markup. This module converts HTML to readable
plain text for the extraction pipeline.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from warrantywatch.observability.logging import get_logger

logger = get_logger(__name__)

# Tags whose text never belongs in a product description
_NON_CONTENT_TAGS = ["script", "style", "head", "noscript"]


def html_to_text(html: str | None) -> str:
    """Convert HTML email body to plain text.

    Block elements become line breaks so label/value pairs such as
    "Total: $49.99" stay on their own line.

    Args:
        html: Raw HTML string from email body.

    Returns:
        Plain text extracted from the HTML.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()

    text = soup.get_text(separator="\n")

    # Collapse whitespace: multiple blank lines -> single, strip each line
    lines = [re.sub(r"[ \t\xa0]+", " ", line).strip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    logger.debug("Converted %d chars of HTML to %d chars of text", len(html), len(text))
    return text.strip()
