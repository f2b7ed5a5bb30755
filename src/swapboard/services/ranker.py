from __future__ import annotations

from decimal import Decimal, localcontext
from typing import List, Mapping, Tuple

from swapboard.core.models import LeaderboardEntry, RunSummary, TraderStats, ZERO
from swapboard.core.numeric import exact_context


INFINITY = Decimal("Infinity")


def buy_sell_ratio(buys: int, sells: int) -> Decimal:
    if sells > 0:
        return Decimal(buys) / Decimal(sells)
    if buys > 0:
        return INFINITY
    return ZERO


def summarize(stats: List[TraderStats]) -> RunSummary:
    with localcontext(exact_context()):
        total_traders = len(stats)
        total_volume = sum((t.total_volume_usd for t in stats), ZERO)
        total_buys = sum(t.total_buys for t in stats)
        total_sells = sum(t.total_sells for t in stats)
        average = total_volume / Decimal(total_traders) if total_traders else ZERO

    return RunSummary(
        total_traders=total_traders,
        total_volume_usd=total_volume,
        total_buy_transactions=total_buys,
        total_sell_transactions=total_sells,
        average_volume_per_trader=average,
    )


def rank(stats: Mapping[str, TraderStats], limit: int) -> Tuple[List[LeaderboardEntry], RunSummary]:
    """
    Order traders by total USD volume (highest first, ties by address) and
    keep the top `limit`. The summary covers every trader, not just the ones
    kept.
    """
    if limit < 0:
        raise ValueError("limit must be >= 0")

    with localcontext(exact_context()):
        ordered = sorted(stats.values(), key=lambda t: (-t.total_volume_usd, t.address))

        entries: List[LeaderboardEntry] = []
        for i, t in enumerate(ordered[:limit], start=1):
            entries.append(
                LeaderboardEntry(
                    rank=i,
                    address=t.address,
                    total_buys=t.total_buys,
                    total_sells=t.total_sells,
                    total_buy_volume_token=t.total_buy_volume_token,
                    total_sell_volume_token=t.total_sell_volume_token,
                    total_buy_volume_usd=t.total_buy_volume_usd,
                    total_sell_volume_usd=t.total_sell_volume_usd,
                    total_volume_usd=t.total_volume_usd,
                    net_volume_token=t.net_volume_token,
                    buy_sell_ratio=buy_sell_ratio(t.total_buys, t.total_sells),
                )
            )

    return entries, summarize(ordered)
