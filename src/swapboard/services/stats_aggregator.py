from __future__ import annotations

from decimal import localcontext
from typing import Dict, Iterable

import structlog

from swapboard.core.classifier import classify_trade
from swapboard.core.dto import SwapRecord
from swapboard.core.errors import InvalidNumericFormat, TokenNotInPool
from swapboard.core.models import AggregationResult, TraderStats
from swapboard.core.numeric import exact_context


log = structlog.get_logger(__name__)

PROGRESS_EVERY = 1000


def aggregate(records: Iterable[SwapRecord], target_token: str) -> AggregationResult:
    """
    Fold swaps into per-trader running totals keyed by the swap sender.

    A swap that cannot be classified (target not in its pool, or an amount
    that does not parse) is logged and skipped; the rest still count.
    """
    target = target_token.lower()
    stats: Dict[str, TraderStats] = {}
    processed = 0
    skipped = 0

    with localcontext(exact_context()):
        for i, swap in enumerate(records):
            if i and i % PROGRESS_EVERY == 0:
                log.debug("aggregate_progress", processed=i)

            try:
                trade = classify_trade(swap, target)
            except (TokenNotInPool, InvalidNumericFormat) as e:
                skipped += 1
                log.warning("swap_skipped", swap_id=swap.id, reason=str(e))
                continue

            trader = swap.sender.lower()
            ts = stats.get(trader)
            if ts is None:
                ts = TraderStats(address=trader)
                stats[trader] = ts

            if trade.is_buy:
                ts.record_buy(trade.token_amount, trade.usd_amount)
            else:
                ts.record_sell(trade.token_amount, trade.usd_amount)
            processed += 1

    log.info("aggregate_finished", processed=processed, skipped=skipped, traders=len(stats))
    return AggregationResult(stats=stats, processed=processed, skipped=skipped)
