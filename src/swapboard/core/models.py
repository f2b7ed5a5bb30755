from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional


ZERO = Decimal("0")


# Configuration model

@dataclass(frozen=True)
class LeaderboardConfig:
    """
    User input / run configuration for one leaderboard build.
    """

    token_address: str
    limit: int = 20
    network: str = "ethereum"

    target_swaps: int = 2000
    page_size: int = 1000

    # caller-side filter on the fetched set (paging itself ignores blocks)
    start_block: Optional[int] = None
    end_block: Optional[int] = None


# Aggregation models

@dataclass
class TraderStats:

    address: str
    total_buys: int = 0
    total_sells: int = 0
    total_buy_volume_token: Decimal = ZERO
    total_sell_volume_token: Decimal = ZERO
    total_buy_volume_usd: Decimal = ZERO
    total_sell_volume_usd: Decimal = ZERO

    @property
    def total_volume_usd(self) -> Decimal:
        return self.total_buy_volume_usd + self.total_sell_volume_usd

    @property
    def net_volume_token(self) -> Decimal:
        return self.total_buy_volume_token - self.total_sell_volume_token

    def record_buy(self, token_amount: Decimal, usd_amount: Decimal) -> None:
        self.total_buys += 1
        self.total_buy_volume_token += token_amount
        self.total_buy_volume_usd += usd_amount

    def record_sell(self, token_amount: Decimal, usd_amount: Decimal) -> None:
        self.total_sells += 1
        self.total_sell_volume_token += token_amount
        self.total_sell_volume_usd += usd_amount


@dataclass(frozen=True)
class AggregationResult:

    stats: Dict[str, TraderStats] = field(default_factory=dict)
    processed: int = 0
    skipped: int = 0


# Leaderboard models

@dataclass(frozen=True)
class LeaderboardEntry:

    rank: int
    address: str

    total_buys: int
    total_sells: int
    total_buy_volume_token: Decimal
    total_sell_volume_token: Decimal
    total_buy_volume_usd: Decimal
    total_sell_volume_usd: Decimal

    total_volume_usd: Decimal
    net_volume_token: Decimal
    buy_sell_ratio: Decimal     # Decimal("Infinity") when there are buys but no sells


@dataclass(frozen=True)
class RunSummary:

    total_traders: int = 0
    total_volume_usd: Decimal = ZERO
    total_buy_transactions: int = 0
    total_sell_transactions: int = 0
    average_volume_per_trader: Decimal = ZERO


@dataclass(frozen=True)
class LeaderboardReport:

    token_address: Optional[str]
    network: str
    entries: List[LeaderboardEntry]
    summary: RunSummary
    swaps_fetched: int = 0
    swaps_skipped: int = 0
    demo: bool = False
