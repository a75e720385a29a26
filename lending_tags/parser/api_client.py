"""Subgraph API client for GraphQL requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

from beartype import beartype
from httpx import BaseTransport, Client, HTTPError, HTTPStatusError

from lending_tags.utils.config import REQUEST_TIMEOUT
from lending_tags.utils.errors import TransportError

GRAPHQL_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class SubgraphData:
    """Response carrying a `data` object."""

    payload: dict[str, object]


@dataclass(frozen=True)
class SubgraphErrors:
    """Response carrying GraphQL application errors."""

    messages: tuple[str, ...]


@dataclass(frozen=True)
class MalformedResponse:
    """Response that is neither data nor errors."""

    reason: str


SubgraphResponse = Union[SubgraphData, SubgraphErrors, MalformedResponse]


@beartype
def classify_response(body: object) -> SubgraphResponse:
    """
    Turn a decoded GraphQL response body into a tagged result.

    Errors win over data: a body reporting any error is never treated as a
    partial success.
    """
    if not isinstance(body, dict):
        return MalformedResponse(f"expected a JSON object, got {type(body).__name__}")

    errors = body.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [errors]
        messages = []
        for error in errors:
            if isinstance(error, dict) and "message" in error:
                messages.append(str(error["message"]))
            else:
                messages.append(str(error))
        return SubgraphErrors(tuple(messages))

    data = body.get("data")
    if not isinstance(data, dict):
        return MalformedResponse("response has no data object")

    return SubgraphData(data)


class SubgraphAPIClient:
    """Client for posting GraphQL queries to a subgraph endpoint."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, transport: BaseTransport | None = None) -> None:
        """
        Initialize the API client.

        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport (network transport if None)
        """
        self.client = Client(timeout=timeout, transport=transport)

    @beartype
    def post_query(
        self,
        url: str,
        query: str,
        variables: Mapping[str, object] | None = None,
    ) -> SubgraphResponse:
        """
        Post one GraphQL query.

        Args:
            url: Subgraph endpoint URL
            query: GraphQL document text
            variables: Query variables

        Returns:
            The classified response body

        Raises:
            TransportError: If the request fails or the status is not 2xx
        """
        payload = {
            "query": query,
            "variables": dict(variables or {}),
        }

        try:
            response = self.client.post(url, json=payload, headers=GRAPHQL_HEADERS)
            response.raise_for_status()
        except HTTPStatusError as e:
            raise TransportError(
                f"subgraph returned HTTP {e.response.status_code}: {e.response.reason_phrase}"
            ) from e
        except HTTPError as e:
            raise TransportError(f"request to subgraph failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            return MalformedResponse("response body is not valid JSON")

        return classify_response(body)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> SubgraphAPIClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
