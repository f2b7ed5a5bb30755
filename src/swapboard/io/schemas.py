from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from swapboard.core.models import LeaderboardEntry, LeaderboardReport, RunSummary
from swapboard.core.numeric import format_decimal


def _dec_to_str(x: Decimal) -> str:
    # keep as string for JSON precision safety
    if x.is_infinite():
        return "Infinity"
    return format_decimal(x)


def _signed(x: Decimal) -> str:
    s = _dec_to_str(x)
    return s if x < 0 else f"+{s}"


def entry_to_dict(e: LeaderboardEntry) -> Dict[str, Any]:
    return {
        "rank": e.rank,
        "address": e.address,
        "total_buys": e.total_buys,
        "total_sells": e.total_sells,
        "total_buy_volume_token": _dec_to_str(e.total_buy_volume_token),
        "total_sell_volume_token": _dec_to_str(e.total_sell_volume_token),
        "total_buy_volume_usd": _dec_to_str(e.total_buy_volume_usd),
        "total_sell_volume_usd": _dec_to_str(e.total_sell_volume_usd),
        "total_volume_usd": _dec_to_str(e.total_volume_usd),
        "net_volume_token": _signed(e.net_volume_token),
        "buy_sell_ratio": _dec_to_str(e.buy_sell_ratio),
    }


def summary_to_dict(s: RunSummary) -> Dict[str, Any]:
    return {
        "total_traders": s.total_traders,
        "total_volume_usd": _dec_to_str(s.total_volume_usd),
        "total_buy_transactions": s.total_buy_transactions,
        "total_sell_transactions": s.total_sell_transactions,
        "average_volume_per_trader": _dec_to_str(s.average_volume_per_trader),
    }


def report_to_dict(r: LeaderboardReport) -> Dict[str, Any]:
    return {
        "token_address": r.token_address,
        "network": r.network,
        "demo": r.demo,
        "swaps_fetched": r.swaps_fetched,
        "swaps_skipped": r.swaps_skipped,
        "traders": [entry_to_dict(e) for e in r.entries],
        "summary": summary_to_dict(r.summary),
    }
