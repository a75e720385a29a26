"""Paginated fetching of subgraph markets into tagging records."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from beartype import beartype

from lending_tags.extractors.endpoint_resolver import resolve_endpoint
from lending_tags.extractors.models import Market, TagBatch, TaggingRecord, TagVariant
from lending_tags.parser.api_client import (
    MalformedResponse,
    SubgraphAPIClient,
    SubgraphData,
    SubgraphErrors,
)
from lending_tags.parser.market_parser import markets_to_tags, parse_market
from lending_tags.utils.config import PAGE_SIZE, SUBGRAPH_ENDPOINTS
from lending_tags.utils.errors import (
    EmptyResultError,
    FetchError,
    ProtocolError,
    TransportError,
    UnknownFetchError,
)
from lending_tags.utils.logger import get_logger

logger = get_logger(__name__)

# Markets strictly newer than the cursor, oldest first
MARKETS_QUERY = """
query GetMarkets($lastTimestamp: BigInt!) {
    markets(
        first: %d
        where: { createdTimestamp_gt: $lastTimestamp }
        orderBy: createdTimestamp
        orderDirection: asc
    ) {
        id
        createdTimestamp
        outputToken {
            id
            name
            symbol
        }
        sToken: _sToken {
            id
            name
            symbol
        }
        vToken: _vToken {
            id
            name
            symbol
        }
    }
}
""" % PAGE_SIZE


@beartype
def next_cursor(page: Sequence[Market]) -> int:
    """Return the highest createdTimestamp in a page, whatever its order."""
    return max(market.created_timestamp for market in page)


@beartype
def fetch_market_page(client: SubgraphAPIClient, endpoint: str, cursor: int) -> list[Market]:
    """
    Fetch and parse one page of markets created after the cursor.

    Args:
        client: Subgraph API client
        endpoint: Resolved subgraph URL
        cursor: createdTimestamp watermark of the previous page

    Returns:
        Parsed markets of the page (possibly empty on the final page)

    Raises:
        TransportError: If the HTTP call fails
        ProtocolError: If the subgraph reports errors or a record is malformed
        EmptyResultError: If the response has no markets payload
    """
    try:
        response = client.post_query(endpoint, MARKETS_QUERY, {"lastTimestamp": cursor})
    except TransportError as e:
        raise TransportError(e.message, cursor=cursor) from e

    if isinstance(response, SubgraphErrors):
        for message in response.messages:
            logger.error(f"Subgraph error: {message}")
        raise ProtocolError(
            f"subgraph reported {len(response.messages)} error(s): {'; '.join(response.messages)}",
            cursor=cursor,
            messages=list(response.messages),
        )

    if isinstance(response, MalformedResponse):
        raise EmptyResultError(response.reason, cursor=cursor)

    if not isinstance(response, SubgraphData):
        raise UnknownFetchError(f"unexpected response type {type(response).__name__}", cursor=cursor)

    raw_markets = response.payload.get("markets")
    if not isinstance(raw_markets, list):
        raise EmptyResultError("response data has no markets list", cursor=cursor)

    try:
        return [parse_market(raw) for raw in raw_markets]
    except ProtocolError as e:
        raise type(e)(e.message, cursor=cursor) from e


@beartype
def iter_market_pages(client: SubgraphAPIClient, endpoint: str) -> Iterator[list[Market]]:
    """
    Lazily walk the whole market set in createdTimestamp order.

    Yields:
        One list of markets per page; the last page is shorter than PAGE_SIZE
    """
    cursor = 0
    has_more = True
    while has_more:
        try:
            page = fetch_market_page(client, endpoint, cursor)
        except FetchError:
            raise
        except Exception as e:
            raise UnknownFetchError(f"{type(e).__name__}: {e}", cursor=cursor) from e

        logger.debug(f"Fetched {len(page)} markets after cursor {cursor}")
        yield page

        has_more = len(page) == PAGE_SIZE
        if has_more:
            advanced = next_cursor(page)
            if advanced <= cursor:
                raise ProtocolError(
                    f"page did not advance past createdTimestamp {cursor}", cursor=cursor
                )
            cursor = advanced


@beartype
def fetch_all_tags(
    endpoint: str,
    network_id: str,
    variant: TagVariant = TagVariant.MARKET,
    api_client: SubgraphAPIClient | None = None,
) -> TagBatch:
    """
    Fetch every market from a subgraph and turn the valid ones into tags.

    Args:
        endpoint: Resolved subgraph URL
        network_id: Chain id used in contract addresses
        variant: Entity tagged for each valid market
        api_client: Optional API client (creates new if None)

    Returns:
        TagBatch with all records and rejections of the run

    Raises:
        FetchError: On the first unrecoverable failure; nothing is retried
    """
    should_close = api_client is None
    if api_client is None:
        api_client = SubgraphAPIClient()

    try:
        batch = TagBatch()
        pages = 0
        markets = 0
        for page in iter_market_pages(api_client, endpoint):
            page_batch = markets_to_tags(network_id, page, variant)
            for rejection in page_batch.rejections:
                logger.warning(rejection.describe())
            batch = batch + page_batch
            pages += 1
            markets += len(page)

        logger.record_metric("pages", pages)
        logger.record_metric("markets", markets)
        logger.record_metric("tags", len(batch.records))
        logger.record_metric("rejections", len(batch.rejections))
        logger.log_summary()
        return batch
    finally:
        if should_close:
            api_client.close()


@beartype
def produce_tags(
    network_id: str,
    api_key: str,
    variant: TagVariant = TagVariant.MARKET,
    api_client: SubgraphAPIClient | None = None,
    endpoints: Mapping[str, str] = SUBGRAPH_ENDPOINTS,
) -> list[TaggingRecord]:
    """
    Produce registry tags for every lending market on a network.

    Args:
        network_id: Chain id as a decimal string
        api_key: Subgraph gateway API key
        variant: Entity tagged for each valid market
        api_client: Optional API client (creates new if None)
        endpoints: Mapping of chain id to subgraph URL template

    Returns:
        Tagging records in createdTimestamp order

    Raises:
        UnsupportedNetworkError: If the network has no configured endpoint
        FetchError: If fetching fails at any stage
    """
    endpoint = resolve_endpoint(network_id, api_key, endpoints)
    logger.info(f"Fetching {variant.value} tags for network {network_id}")
    return list(fetch_all_tags(endpoint, network_id, variant, api_client).records)
