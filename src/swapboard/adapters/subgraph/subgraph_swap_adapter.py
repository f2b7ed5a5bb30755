from typing import Any, Dict, List, Optional
import json

import requests
import structlog

from swapboard.config.settings import (
    DEFAULT_NETWORK,
    SUBGRAPH_TIMEOUT_SEC,
    subgraph_url_for,
)

from swapboard.core.dto import PoolRef, PoolToken, QueryErrors, SwapRecord, SwapsPage, SwapsResponse
from swapboard.core.errors import (
    MalformedResponse,
    SourceError,
    SourceUnavailable,
    SubgraphQueryError,
    UnexpectedHtmlPayload,
)
from swapboard.ports.swap_source_port import SwapSourcePort


log = structlog.get_logger(__name__)

SWAPS_QUERY = """
query GetSwaps($token: String!, $skip: Int!, $first: Int!) {
    swaps(
        skip: $skip,
        first: $first,
        orderBy: timestamp,
        orderDirection: desc,
        where: {
            or: [
                { pool_: { token0: $token } },
                { pool_: { token1: $token } }
            ]
        }
    ) {
        id
        timestamp
        sender
        recipient
        amount0
        amount1
        amountUSD
        pool {
            id
            token0 { id symbol name decimals }
            token1 { id symbol name decimals }
            tick
            sqrtPrice
        }
        transaction {
            blockNumber
        }
    }
}
"""

BODY_PREVIEW_CHARS = 500


def looks_like_html(body: str) -> bool:
    head = body.lstrip()[:20].lower()
    return head.startswith("<!doctype html") or head.startswith("<html")


class SubgraphSwapAdapter(SwapSourcePort):

    def __init__(
        self,
        network: str = DEFAULT_NETWORK,
        url: Optional[str] = None,
        timeout_sec: int = SUBGRAPH_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.network = network
        self._url = url or subgraph_url_for(network)
        self._timeout = timeout_sec
        self._session = session or requests.Session()

    # ---------- internal ----------

    def _post(self, payload: Dict[str, Any]) -> str:
        try:
            resp = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise SourceUnavailable(f"Subgraph request failed: {e}") from e

        if not resp.ok:
            raise SourceError(resp.status_code, resp.text or "Unknown error")

        return resp.text

    def _decode(self, token_address: str, body: str) -> SwapsResponse:
        try:
            data = json.loads(body)
        except ValueError as e:
            log.warning("subgraph_unparsable_body", token=token_address, body=body[:BODY_PREVIEW_CHARS])
            if looks_like_html(body):
                raise UnexpectedHtmlPayload(token_address) from e
            raise MalformedResponse(f"Failed to parse API response for token {token_address}: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponse(f"Unexpected subgraph response: {body[:BODY_PREVIEW_CHARS]}")

        errors = data.get("errors")
        if errors:
            return QueryErrors(messages=[self._error_message(e) for e in errors])

        payload = data.get("data")
        if payload is None:
            return SwapsPage(swaps=[])

        rows = payload.get("swaps") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise MalformedResponse(f"Missing 'swaps' list in subgraph response for token {token_address}")

        return SwapsPage(swaps=[self._parse_swap(r) for r in rows])

    @staticmethod
    def _error_message(err: Any) -> str:
        if isinstance(err, dict):
            return str(err.get("message", err))
        return str(err)

    @staticmethod
    def _hint_for(messages: List[str]) -> Optional[str]:
        combined = ", ".join(messages).lower()
        if "auth" in combined:
            return (
                "Authentication error: The Graph gateway rejected the request. "
                "The API key may be missing, expired or rate limited; try --demo."
            )
        if "subgraph not found" in combined:
            return "Subgraph not found: the subgraph id for this network may be outdated; try --demo."
        return None

    @staticmethod
    def _parse_token(raw: Dict[str, Any]) -> PoolToken:
        return PoolToken(
            id=str(raw["id"]).lower(),
            symbol=str(raw.get("symbol") or ""),
            name=str(raw.get("name") or ""),
            decimals=str(raw.get("decimals") or ""),
        )

    @classmethod
    def _parse_swap(cls, r: Any) -> SwapRecord:
        try:
            pool = r["pool"]
            tick = pool.get("tick")
            block = (r.get("transaction") or {}).get("blockNumber")
            return SwapRecord(
                id=str(r["id"]),
                timestamp=int(r["timestamp"]),
                sender=str(r["sender"]).lower(),
                recipient=str(r["recipient"]).lower(),
                amount0=str(r["amount0"]),
                amount1=str(r["amount1"]),
                amount_usd=str(r["amountUSD"]),
                pool=PoolRef(
                    id=str(pool["id"]),
                    token0=cls._parse_token(pool["token0"]),
                    token1=cls._parse_token(pool["token1"]),
                    sqrt_price=str(pool.get("sqrtPrice") or ""),
                    tick=str(tick) if tick is not None else None,
                ),
                block_number=int(block) if block is not None and str(block).isdigit() else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponse(f"Unexpected swap shape: {e!r}") from e

    # ---------- port methods ----------

    def fetch_swaps(self, token_address: str, skip: int, first: int) -> List[SwapRecord]:
        token = token_address.lower()
        body = self._post({
            "query": SWAPS_QUERY,
            "variables": {"token": token, "skip": int(skip), "first": int(first)},
        })

        response = self._decode(token, body)
        if isinstance(response, QueryErrors):
            raise SubgraphQueryError(response.messages, hint=self._hint_for(response.messages))
        return response.swaps
