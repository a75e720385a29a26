"""Lending market models, endpoint resolution and validation rules."""

from __future__ import annotations

from lending_tags.extractors.endpoint_resolver import resolve_endpoint, supported_networks
from lending_tags.extractors.models import Market, Rejection, TagBatch, TaggingRecord, TagVariant, Token
from lending_tags.extractors.validation import find_invalid_fields, is_valid_text

__all__ = [
    "Market",
    "Rejection",
    "TagBatch",
    "TagVariant",
    "TaggingRecord",
    "Token",
    "find_invalid_fields",
    "is_valid_text",
    "resolve_endpoint",
    "supported_networks",
]
