"""Resolution of subgraph endpoints for supported networks."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

from beartype import beartype

from lending_tags.utils.config import API_KEY_PLACEHOLDER, SUBGRAPH_ENDPOINTS
from lending_tags.utils.errors import UnsupportedNetworkError


def _chain_sort_key(network_id: str) -> tuple[int, int, str]:
    # Numeric ids first in numeric order, anything else after
    try:
        return (0, int(network_id), network_id)
    except ValueError:
        return (1, 0, network_id)


@beartype
def supported_networks(endpoints: Mapping[str, str] = SUBGRAPH_ENDPOINTS) -> list[str]:
    """Return the configured network ids in ascending chain id order."""
    return sorted(endpoints, key=_chain_sort_key)


@beartype
def resolve_endpoint(
    network_id: str,
    api_key: str,
    endpoints: Mapping[str, str] = SUBGRAPH_ENDPOINTS,
) -> str:
    """
    Build the concrete subgraph URL for a network.

    Args:
        network_id: Chain id as a decimal string (e.g. "1", "137")
        api_key: Gateway API key substituted into the URL template
        endpoints: Mapping of chain id to URL template

    Returns:
        Endpoint URL with the percent-encoded API key in place

    Raises:
        UnsupportedNetworkError: If the id is not an integer string or not configured
    """
    try:
        int(network_id)
    except ValueError:
        raise UnsupportedNetworkError(network_id, supported_networks(endpoints)) from None

    template = endpoints.get(network_id)
    if template is None:
        raise UnsupportedNetworkError(network_id, supported_networks(endpoints))

    return template.replace(API_KEY_PLACEHOLDER, quote(api_key, safe=""))
