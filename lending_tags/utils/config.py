"""Configuration constants for the lending market tagger."""

from __future__ import annotations

from pathlib import Path

# Logging configuration
LOGS_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE = LOGS_DIR / "lending_tags.log"

# Subgraph configuration
# Every template carries exactly one API key placeholder
API_KEY_PLACEHOLDER = "[api-key]"
THE_GRAPH_GATEWAY_URL = "https://gateway.thegraph.com/api"

SUBGRAPH_ENDPOINTS: dict[str, str] = {
    "1": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-ethereum",
    "10": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-optimism",
    "137": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-polygon",
    "250": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-fantom",
    "8453": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-base",
    "42161": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-arbitrum",
    "43114": f"{THE_GRAPH_GATEWAY_URL}/{API_KEY_PLACEHOLDER}/subgraphs/name/messari/aave-v3-avalanche",
}

# Environment variable read by the command-line script
API_KEY_ENV_VAR = "THEGRAPH_API_KEY"

# HTTP client settings (seconds)
REQUEST_TIMEOUT = 30.0

# Pagination: a page shorter than this ends the result set
PAGE_SIZE = 1000

# Registry display contract
MAX_LABEL_LENGTH = 45
LABEL_ELLIPSIS = "..."

# Protocol being indexed
PROJECT_NAME = "Aave v3"
PROJECT_WEBSITE = "https://aave.com"
