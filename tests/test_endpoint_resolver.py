"""Tests for endpoint resolver module."""

from __future__ import annotations

import pytest

from lending_tags.extractors.endpoint_resolver import resolve_endpoint, supported_networks
from lending_tags.utils.config import API_KEY_PLACEHOLDER, SUBGRAPH_ENDPOINTS
from lending_tags.utils.errors import UnsupportedNetworkError

TEST_ENDPOINTS = {
    "137": "https://example.com/api/[api-key]/polygon",
    "1": "https://example.com/api/[api-key]/mainnet",
    "42161": "https://example.com/api/[api-key]/arbitrum",
}


@pytest.mark.parametrize("network_id", sorted(SUBGRAPH_ENDPOINTS))
def test_resolve_endpoint_all_configured_networks(network_id: str) -> None:
    """Test every configured network resolves with the key substituted."""
    url = resolve_endpoint(network_id, "secret-key")
    assert API_KEY_PLACEHOLDER not in url
    assert "/secret-key/" in url


def test_resolve_endpoint_substitutes_key() -> None:
    """Test the key replaces the placeholder in the template."""
    url = resolve_endpoint("1", "abc123", TEST_ENDPOINTS)
    assert url == "https://example.com/api/abc123/mainnet"


def test_resolve_endpoint_percent_encodes_key() -> None:
    """Test reserved characters in the key are percent-encoded."""
    url = resolve_endpoint("137", "a/b c?d", TEST_ENDPOINTS)
    assert url == "https://example.com/api/a%2Fb%20c%3Fd/polygon"


def test_resolve_endpoint_unknown_network() -> None:
    """Test an unconfigured chain id raises and lists supported ids."""
    with pytest.raises(UnsupportedNetworkError, match="Supported network ids: 1, 137, 42161") as exc_info:
        resolve_endpoint("56", "key", TEST_ENDPOINTS)

    assert exc_info.value.network_id == "56"
    assert exc_info.value.supported == ["1", "137", "42161"]


def test_resolve_endpoint_non_integer_network() -> None:
    """Test a non-numeric network id raises UnsupportedNetworkError."""
    with pytest.raises(UnsupportedNetworkError, match="'mainnet'"):
        resolve_endpoint("mainnet", "key", TEST_ENDPOINTS)


def test_resolve_endpoint_empty_network() -> None:
    """Test an empty network id raises UnsupportedNetworkError."""
    with pytest.raises(UnsupportedNetworkError):
        resolve_endpoint("", "key", TEST_ENDPOINTS)


def test_unsupported_network_is_value_error() -> None:
    """Test callers catching ValueError also catch bad network ids."""
    with pytest.raises(ValueError):
        resolve_endpoint("999999", "key", TEST_ENDPOINTS)


def test_unsupported_network_lists_default_table() -> None:
    """Test the default table's ids all appear in the error message."""
    with pytest.raises(UnsupportedNetworkError) as exc_info:
        resolve_endpoint("999999", "key")

    for network_id in SUBGRAPH_ENDPOINTS:
        assert network_id in str(exc_info.value)


def test_supported_networks_numeric_order() -> None:
    """Test supported ids are sorted by chain id, not lexically."""
    assert supported_networks(TEST_ENDPOINTS) == ["1", "137", "42161"]


def test_unsupported_network_with_non_decimal_table_key() -> None:
    """Test a digit-like but non-decimal table key still yields UnsupportedNetworkError."""
    endpoints = {"1": "https://example.com/[api-key]/one", "²": "https://example.com/[api-key]/sq"}

    with pytest.raises(UnsupportedNetworkError) as exc_info:
        resolve_endpoint("5", "k", endpoints)

    assert exc_info.value.supported == ["1", "²"]
