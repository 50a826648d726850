"""
Utility functions for sender address handling.
"""

from __future__ import annotations

import re


def extract_email_address(email_address: str | None) -> str:
    """
    Extract and normalize email address from various formats.

    Args:
        email_address: Email address string (e.g., "user@example.com" or "Name <user@example.com>")

    Returns:
        Lowercase full email address (e.g., "user@example.com")
        If no valid email found, returns original string lowercased

    Examples:
        >>> extract_email_address("orders@amazon.com")
        'orders@amazon.com'

        >>> extract_email_address("Best Buy <BestBuyInfo@emailinfo.bestbuy.com>")
        'bestbuyinfo@emailinfo.bestbuy.com'

        >>> extract_email_address("invalid")
        'invalid'
    """
    if not email_address:
        return ""

    email_lower = email_address.lower().strip()

    # "Name <email@domain.com>"
    angle_match = re.search(r"<([^>]+)>", email_lower)
    if angle_match:
        email_lower = angle_match.group(1).strip()

    return email_lower


def extract_domain(email_address: str | None) -> str | None:
    """
    Extract the domain portion (after @) from an email address.

    Returns None when the address has no "@" or nothing after it, so callers
    can tell "no parseable domain" apart from a real domain.

    Examples:
        >>> extract_domain("orders@amazon.com")
        'amazon.com'

        >>> extract_domain("Amazon.com <ship-confirm@amazon.com>")
        'amazon.com'

        >>> extract_domain("friend") is None
        True
    """
    full_email = extract_email_address(email_address)

    if "@" not in full_email:
        return None

    domain = full_email.rsplit("@", 1)[1].strip().strip(".>")
    return domain or None


def domain_matches(domain: str | None, candidate: str) -> bool:
    """True if domain equals candidate or is a subdomain of it."""
    if not domain:
        return False
    domain = domain.lower()
    candidate = candidate.lower()
    return domain == candidate or domain.endswith("." + candidate)
