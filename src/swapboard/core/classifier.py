from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from swapboard.core.dto import SwapRecord
from swapboard.core.errors import TokenNotInPool
from swapboard.core.numeric import parse_decimal


@dataclass(frozen=True)
class TradeClassification:
    is_buy: bool
    token_amount: Decimal
    usd_amount: Decimal


def classify_trade(swap: SwapRecord, target_token: str) -> TradeClassification:
    """
    Decide whether a swap bought or sold the target token.

    Deltas are signed from the pool's point of view: a negative delta on the
    target's side counts as a buy, zero or positive as a sell. The token
    amount is the delta's magnitude and the USD amount is always the absolute
    notional, whatever the direction.
    """
    target = target_token.lower()
    token0_id = swap.pool.token0.id.lower()
    token1_id = swap.pool.token1.id.lower()

    if token0_id == target:
        raw_delta = swap.amount0
    elif token1_id == target:
        raw_delta = swap.amount1
    else:
        raise TokenNotInPool(target, swap.pool.id)

    delta = parse_decimal(raw_delta)
    usd = parse_decimal(swap.amount_usd)

    return TradeClassification(
        is_buy=delta < 0,
        token_amount=delta.copy_abs(),
        usd_amount=usd.copy_abs(),
    )
