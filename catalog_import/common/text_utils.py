"""
Text Utilities

Helper functions for text processing and cleanup.
"""

import re
from datetime import datetime, timezone

from bs4 import BeautifulSoup


def to_slug(text: str) -> str:
    """
    Generate a URL slug.

    Lowercases the text, collapses every run of non-alphanumeric characters
    into a single hyphen and trims hyphens from both ends.

    Example:
        >>> to_slug("LED Panel -- 60x60 (Warm)")
        'led-panel-60x60-warm'
    """
    if not text:
        return ""
    return re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')


def strip_html(html: str) -> str:
    """
    Strip markup from Shopify body_html.

    Args:
        html: HTML fragment (may be empty or None)

    Returns:
        Plain text with whitespace collapsed
    """
    if not html:
        return ""
    text = BeautifulSoup(html, "lxml").get_text(" ")
    return re.sub(r'\s+', ' ', text).strip()


def parse_price(raw) -> float:
    """
    Best-effort parse of a price value.

    Anything that is not a digit or dot is dropped ("$1,299.00" -> 1299.0).
    Missing or unparseable values give 0.0.
    """
    if raw is None or raw == "":
        return 0.0
    cleaned = re.sub(r'[^0-9.]', '', str(raw))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def humanize_key(key: str) -> str:
    """
    Turn a metafield key into a display label.

    Example:
        >>> humanize_key("weight_kg")
        'Weight Kg'
    """
    words = re.sub(r'[_\-]+', ' ', key).split()
    return ' '.join(w[:1].upper() + w[1:] for w in words)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()
