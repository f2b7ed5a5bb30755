from __future__ import annotations

from typing import Callable, Optional

import structlog

from swapboard.core.models import LeaderboardConfig, LeaderboardReport
from swapboard.ports.swap_source_port import SwapSourcePort
from swapboard.services.demo_data import demo_trader_stats
from swapboard.services.ranker import rank
from swapboard.services.stats_aggregator import aggregate
from swapboard.services.swap_fetcher import SwapFetcher, filter_by_block_range, validate_token_address


log = structlog.get_logger(__name__)

ProgressFn = Callable[[str, dict], None]


class LeaderboardService:
    """
    Builds a trader leaderboard for one token.

    - Retrieval: latest swaps, paged through the swap source
    - Classification: buy/sell relative to the target token, per swap
    - Ranking: total USD volume, summary over every trader seen

    Every build owns its fetcher and its stats map; nothing is shared
    between builds.
    """

    def __init__(self, source: SwapSourcePort) -> None:
        self.source = source

    def build(self, cfg: LeaderboardConfig, on_progress: Optional[ProgressFn] = None) -> LeaderboardReport:
        notify = on_progress or (lambda event, data: None)
        token = validate_token_address(cfg.token_address)

        notify("start", {"token": token, "network": cfg.network})

        fetcher = SwapFetcher(self.source, page_size=cfg.page_size, target_swaps=cfg.target_swaps)
        swaps = fetcher.fetch_all(token, on_progress=notify)
        fetched = len(swaps)

        if cfg.start_block is not None or cfg.end_block is not None:
            swaps = filter_by_block_range(swaps, cfg.start_block, cfg.end_block)
            log.info("block_filter_applied", kept=len(swaps), fetched=fetched,
                     start_block=cfg.start_block, end_block=cfg.end_block)

        result = aggregate(swaps, token)
        entries, summary = rank(result.stats, cfg.limit)

        notify("done", {"swaps": fetched, "traders": summary.total_traders, "skipped": result.skipped})

        return LeaderboardReport(
            token_address=token,
            network=cfg.network,
            entries=entries,
            summary=summary,
            swaps_fetched=fetched,
            swaps_skipped=result.skipped,
        )


def build_demo_report(limit: int, network: str = "ethereum") -> LeaderboardReport:
    entries, summary = rank(demo_trader_stats(), limit)
    return LeaderboardReport(
        token_address=None,
        network=network,
        entries=entries,
        summary=summary,
        demo=True,
    )
