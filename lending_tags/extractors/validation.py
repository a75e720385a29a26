"""Data-quality rules for token metadata."""

from __future__ import annotations

import re

from beartype import beartype

from lending_tags.extractors.models import Market, Rejection

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

# Subgraph field name and Market attribute, in the order they are checked
_TOKEN_FIELDS = (
    ("outputToken", "output_token"),
    ("sToken", "s_token"),
    ("vToken", "v_token"),
)


@beartype
def is_valid_text(text: str) -> bool:
    """
    Check whether a free-text value is usable in a registry tag.

    Args:
        text: Token name or symbol

    Returns:
        False for blank text or text containing HTML-like markup, True otherwise
    """
    if not text.strip():
        return False
    return HTML_TAG_PATTERN.search(text) is None


@beartype
def find_invalid_fields(market: Market) -> list[Rejection]:
    """
    Collect every failing name/symbol field across the market's three tokens.

    Returns:
        One Rejection per failing field; empty when the market is usable
    """
    rejections: list[Rejection] = []
    for label, attribute in _TOKEN_FIELDS:
        token = getattr(market, attribute)
        for field_name in ("name", "symbol"):
            value = getattr(token, field_name)
            if not is_valid_text(value):
                rejections.append(Rejection(market.id, f"{label}.{field_name}", value))
    return rejections
