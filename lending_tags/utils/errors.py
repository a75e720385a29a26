"""Exception hierarchy for the tagging pipeline."""

from __future__ import annotations


class TaggingError(Exception):
    """Base class for every fatal pipeline error."""


class UnsupportedNetworkError(TaggingError, ValueError):
    """Raised when a network id has no configured subgraph endpoint."""

    def __init__(self, network_id: str, supported: list[str]) -> None:
        self.network_id = network_id
        self.supported = supported
        super().__init__(
            f"Unsupported network id {network_id!r}. Supported network ids: {', '.join(supported)}"
        )


class FetchError(TaggingError):
    """
    A failure while fetching and processing subgraph pages.

    Attributes:
        stage: Pipeline stage that failed (e.g. "transport", "protocol")
        cursor: Pagination cursor of the page being fetched
    """

    stage = "fetch"

    def __init__(self, message: str, cursor: int | None = None) -> None:
        self.message = message
        self.cursor = cursor
        context = f"[{self.stage}]" if cursor is None else f"[{self.stage} @ cursor {cursor}]"
        super().__init__(f"{context} {message}")


class TransportError(FetchError):
    """The HTTP call failed or returned a non-success status."""

    stage = "transport"


class ProtocolError(FetchError):
    """The response carried GraphQL application errors."""

    stage = "protocol"

    def __init__(self, message: str, cursor: int | None = None, messages: list[str] | None = None) -> None:
        self.messages = list(messages or [])
        super().__init__(message, cursor)


class MalformedRecordError(ProtocolError):
    """A market record in an otherwise valid page could not be parsed."""

    stage = "parse"


class EmptyResultError(FetchError):
    """The response was well-formed but carried no data payload."""

    stage = "empty-result"


class UnknownFetchError(FetchError):
    """Any failure that does not fit the other categories."""

    stage = "unknown"
