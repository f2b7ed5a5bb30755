from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class PoolToken:
    id: str
    symbol: str
    name: str
    decimals: str


@dataclass(frozen=True)
class PoolRef:
    id: str
    token0: PoolToken
    token1: PoolToken
    sqrt_price: str
    tick: Optional[str] = None


@dataclass(frozen=True)
class SwapRecord:
    """
    One swap event as served by the subgraph.

    Amounts stay as the raw decimal strings; they are parsed when the swap
    is classified so one bad field only drops that swap.
    """

    id: str
    timestamp: int
    sender: str
    recipient: str
    amount0: str            # signed token0 delta, pool perspective
    amount1: str            # signed token1 delta, pool perspective
    amount_usd: str
    pool: PoolRef
    block_number: Optional[int] = None


# GraphQL envelope: either a page of swaps or a list of query errors

@dataclass(frozen=True)
class SwapsPage:
    swaps: List[SwapRecord]


@dataclass(frozen=True)
class QueryErrors:
    messages: List[str]


SwapsResponse = Union[SwapsPage, QueryErrors]
