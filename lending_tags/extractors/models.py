"""Data models for lending markets and registry tags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Token:
    """An ERC-20 token as reported by the subgraph."""

    id: str
    name: str
    symbol: str


@dataclass(frozen=True)
class Market:
    """One lending pool together with its interest-bearing and debt tokens."""

    id: str
    created_timestamp: int
    output_token: Token
    s_token: Token
    v_token: Token


class TagVariant(str, Enum):
    """Which on-chain entity a tagging record describes."""

    MARKET = "market"
    OUTPUT_TOKEN = "output-token"
    STABLE_DEBT_TOKEN = "stable-debt-token"
    VARIABLE_DEBT_TOKEN = "variable-debt-token"


@dataclass(frozen=True)
class TaggingRecord:
    """Flat record consumed by the address-tag registry."""

    contract_address: str
    public_name_tag: str
    project_name: str
    website_link: str
    public_note: str

    def to_dict(self) -> dict[str, str]:
        """Serialize using the registry's field names."""
        return {
            "contractAddress": self.contract_address,
            "publicNameTag": self.public_name_tag,
            "projectName": self.project_name,
            "websiteLink": self.website_link,
            "publicNote": self.public_note,
        }


@dataclass(frozen=True)
class Rejection:
    """A market excluded because one of its token fields failed validation."""

    market_id: str
    field: str
    value: str

    def describe(self) -> str:
        return f"Rejected market {self.market_id}: invalid {self.field} {self.value!r}"


@dataclass(frozen=True)
class TagBatch:
    """Tagging records produced from a set of markets, plus the rejections."""

    records: tuple[TaggingRecord, ...] = ()
    rejections: tuple[Rejection, ...] = ()

    def __add__(self, other: TagBatch) -> TagBatch:
        return TagBatch(self.records + other.records, self.rejections + other.rejections)
