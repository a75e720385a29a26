"""Print registry tags for every lending market on a network as JSON."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from beartype import beartype

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lending_tags.extractors.endpoint_resolver import supported_networks
from lending_tags.extractors.models import TagVariant
from lending_tags.parser.market_fetcher import produce_tags
from lending_tags.utils.config import API_KEY_ENV_VAR
from lending_tags.utils.errors import TaggingError


@beartype
def main(network_id: str, variant: TagVariant, api_key: str) -> None:
    """
    Fetch tags and write them to stdout.

    Args:
        network_id: Chain id to fetch markets for
        variant: Entity to tag for each market
        api_key: Subgraph gateway API key
    """
    try:
        records = produce_tags(network_id, api_key, variant)
    except TaggingError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps([record.to_dict() for record in records], indent=2))


def _usage() -> None:
    variants = ", ".join(variant.value for variant in TagVariant)
    print("Usage: python scripts/produce_tags.py <chain_id> [variant] [api_key]", file=sys.stderr)
    print(f"Variants: {variants} (default: {TagVariant.MARKET.value})", file=sys.stderr)
    print(f"Chain ids: {', '.join(supported_networks())}", file=sys.stderr)
    print(f"The API key defaults to ${API_KEY_ENV_VAR}.", file=sys.stderr)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        _usage()
        sys.exit(1)

    try:
        variant = TagVariant(sys.argv[2]) if len(sys.argv) > 2 else TagVariant.MARKET
    except ValueError:
        _usage()
        sys.exit(1)

    api_key = sys.argv[3] if len(sys.argv) > 3 else os.environ.get(API_KEY_ENV_VAR, "")
    if not api_key:
        print(f"Error: no API key given and ${API_KEY_ENV_VAR} is not set", file=sys.stderr)
        sys.exit(1)

    main(sys.argv[1], variant, api_key)
