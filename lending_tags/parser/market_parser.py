"""Market record parsing and tag transformation logic."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from beartype import beartype

from lending_tags.extractors.models import Market, Rejection, TagBatch, TaggingRecord, TagVariant, Token
from lending_tags.extractors.validation import find_invalid_fields
from lending_tags.utils.config import LABEL_ELLIPSIS, MAX_LABEL_LENGTH, PROJECT_NAME, PROJECT_WEBSITE
from lending_tags.utils.errors import MalformedRecordError

TIMESTAMP_PATTERN = re.compile(r"[0-9]+")


@beartype
def parse_token(raw: object, market_id: str, label: str) -> Token:
    """
    Parse one token object from a subgraph market record.

    Raises:
        MalformedRecordError: If the token is missing or has non-string fields
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(f"market {market_id} has no {label} object")

    values: dict[str, str] = {}
    for key in ("id", "name", "symbol"):
        value = raw.get(key)
        if not isinstance(value, str):
            raise MalformedRecordError(f"market {market_id} has no string {label}.{key}")
        values[key] = value

    return Token(id=values["id"], name=values["name"], symbol=values["symbol"])


@beartype
def parse_timestamp(raw: object, market_id: str) -> int:
    """
    Parse a createdTimestamp value.

    BigInt fields arrive as decimal strings; plain JSON integers are also
    accepted. Floats, signs, separators and booleans are malformed.

    Raises:
        MalformedRecordError: If the value is not a non-negative whole number
    """
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    if isinstance(raw, str) and TIMESTAMP_PATTERN.fullmatch(raw):
        return int(raw)
    raise MalformedRecordError(f"market {market_id} has invalid createdTimestamp {raw!r}")


@beartype
def parse_market(raw: object) -> Market:
    """
    Parse one market record from a subgraph response.

    Args:
        raw: Market dictionary from the `markets` list

    Returns:
        Market with its three tokens

    Raises:
        MalformedRecordError: If a required field is missing or has the wrong type
    """
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(f"expected a market object, got {type(raw).__name__}")

    market_id = raw.get("id")
    if not isinstance(market_id, str) or not market_id:
        raise MalformedRecordError("market record has no id")

    created_timestamp = parse_timestamp(raw.get("createdTimestamp"), market_id)

    return Market(
        id=market_id,
        created_timestamp=created_timestamp,
        output_token=parse_token(raw.get("outputToken"), market_id, "outputToken"),
        s_token=parse_token(raw.get("sToken"), market_id, "sToken"),
        v_token=parse_token(raw.get("vToken"), market_id, "vToken"),
    )


@beartype
def truncate_label(text: str) -> str:
    """Cap a display string at the registry's label length."""
    if len(text) <= MAX_LABEL_LENGTH:
        return text
    return text[: MAX_LABEL_LENGTH - len(LABEL_ELLIPSIS)] + LABEL_ELLIPSIS


def _describe(token: Token) -> str:
    return f"{token.name} ({token.symbol})"


def _market_tag(network_id: str, market: Market) -> TaggingRecord:
    tokens = (market.output_token, market.s_token, market.v_token)
    label = truncate_label("/".join(token.symbol for token in tokens))
    return TaggingRecord(
        contract_address=f"eip155:{network_id}:{market.id}",
        public_name_tag=f"{label} Market",
        project_name=PROJECT_NAME,
        website_link=PROJECT_WEBSITE,
        public_note=(
            f"The {PROJECT_NAME} lending market issuing {_describe(market.output_token)} to suppliers, "
            f"with {_describe(market.s_token)} and {_describe(market.v_token)} tracking stable "
            f"and variable rate debt."
        ),
    )


_TOKEN_ROLES = {
    TagVariant.OUTPUT_TOKEN: ("output_token", "interest-bearing token received for supplying to"),
    TagVariant.STABLE_DEBT_TOKEN: ("s_token", "stable rate debt token for borrowing from"),
    TagVariant.VARIABLE_DEBT_TOKEN: ("v_token", "variable rate debt token for borrowing from"),
}


def _token_tag(network_id: str, market: Market, variant: TagVariant) -> TaggingRecord:
    attribute, role = _TOKEN_ROLES[variant]
    token: Token = getattr(market, attribute)
    return TaggingRecord(
        contract_address=f"eip155:{network_id}:{token.id}",
        public_name_tag=f"{truncate_label(token.symbol)} Token",
        project_name=PROJECT_NAME,
        website_link=PROJECT_WEBSITE,
        public_note=f"{_describe(token)} is the {PROJECT_NAME} {role} the market {market.id}.",
    )


@beartype
def markets_to_tags(
    network_id: str,
    markets: Sequence[Market],
    variant: TagVariant = TagVariant.MARKET,
) -> TagBatch:
    """
    Validate markets and build one tagging record per usable unit.

    A market is rejected as a whole when any name or symbol of its three
    tokens fails validation, whichever variant is being tagged.

    Args:
        network_id: Chain id used in the CAIP-10 contract address
        markets: Parsed markets of one or more pages
        variant: Entity tagged for each valid market

    Returns:
        TagBatch with the records in input order and every rejection
    """
    records: list[TaggingRecord] = []
    rejections: list[Rejection] = []
    for market in markets:
        failures = find_invalid_fields(market)
        if failures:
            rejections.extend(failures)
            continue
        if variant is TagVariant.MARKET:
            records.append(_market_tag(network_id, market))
        else:
            records.append(_token_tag(network_id, market, variant))

    return TagBatch(records=tuple(records), rejections=tuple(rejections))
