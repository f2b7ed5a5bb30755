from __future__ import annotations

from typing import List, Optional


class SwapboardError(Exception):
    pass


class InvalidTokenAddress(SwapboardError, ValueError):
    def __init__(self, token_address: str) -> None:
        super().__init__(
            f"Invalid token address {token_address!r}. "
            "Expected 42-character hex string starting with '0x'"
        )
        self.token_address = token_address


class UnsupportedNetwork(SwapboardError, ValueError):
    pass


class InvalidNumericFormat(SwapboardError, ValueError):
    def __init__(self, text: object) -> None:
        super().__init__(f"Failed to parse decimal {text!r}")
        self.text = text


class TokenNotInPool(SwapboardError):
    def __init__(self, token_address: str, pool_id: str) -> None:
        super().__init__(f"Target token {token_address} not found in swap pool {pool_id}")
        self.token_address = token_address
        self.pool_id = pool_id


# --- data source failures ---

class DataSourceError(SwapboardError):
    pass


class SourceUnavailable(DataSourceError):
    pass


class SourceError(DataSourceError):
    def __init__(self, status: int, body: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"HTTP error {status}: {body[:500]}")
        self.status = status
        self.body = body


class SubgraphQueryError(SourceError):
    def __init__(self, messages: List[str], hint: Optional[str] = None) -> None:
        combined = ", ".join(messages)
        text = f"GraphQL errors: {combined}"
        if hint:
            text = f"{hint}\n\nOriginal error: {combined}"
        super().__init__(200, combined, message=text)
        self.messages = list(messages)
        self.hint = hint


class MalformedResponse(DataSourceError):
    pass


class UnexpectedHtmlPayload(MalformedResponse):
    HINT = "token likely has no pools on this venue"

    def __init__(self, token_address: str) -> None:
        super().__init__(
            f"Received HTML page instead of JSON for token {token_address}: {self.HINT}"
        )
        self.token_address = token_address
