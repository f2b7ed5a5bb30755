import unittest
from decimal import Decimal

from factories import OTHER, TARGET, WETH, make_swap

from swapboard.adapters.subgraph.static_swap_adapter import StaticSwapAdapter
from swapboard.core.errors import InvalidTokenAddress, SourceError
from swapboard.core.models import LeaderboardConfig
from swapboard.ports.swap_source_port import SwapSourcePort
from swapboard.services.leaderboard_service import LeaderboardService, build_demo_report


A = "0x" + "aa" * 20
B = "0x" + "bb" * 20


class _FailingSecondPage(SwapSourcePort):
    def __init__(self, first_page) -> None:
        self._first_page = first_page
        self.calls = 0

    def fetch_swaps(self, token_address, skip, first):
        self.calls += 1
        if skip == 0:
            return self._first_page
        raise SourceError(500, "indexer crashed")


class LeaderboardServiceTests(unittest.TestCase):
    def _make_cfg(self, **overrides) -> LeaderboardConfig:
        defaults = dict(token_address=TARGET, limit=10, page_size=100, target_swaps=1000)
        defaults.update(overrides)
        return LeaderboardConfig(**defaults)

    def test_builds_ranked_report(self) -> None:
        swaps = [
            make_swap(swap_id="1", sender=A, amount0="-10", amount_usd="50", timestamp=3),
            make_swap(swap_id="2", sender=A, amount0="4", amount_usd="20", timestamp=2),
            make_swap(swap_id="3", sender=B, amount0="-1", amount_usd="5", timestamp=1),
            make_swap(swap_id="4", sender=B, token0=OTHER, token1=WETH, timestamp=0),
        ]
        svc = LeaderboardService(StaticSwapAdapter(swaps))

        report = svc.build(self._make_cfg())

        self.assertEqual([e.address for e in report.entries], [A, B])
        self.assertEqual(report.summary.total_volume_usd, Decimal("75"))
        self.assertEqual(report.summary.average_volume_per_trader, Decimal("37.5"))
        # the foreign-pool swap is never served by the static source
        self.assertEqual(report.swaps_fetched, 3)
        self.assertEqual(report.swaps_skipped, 0)
        self.assertEqual(report.token_address, TARGET)

    def test_counts_skipped_swaps(self) -> None:
        swaps = [make_swap(swap_id="1", sender=A), make_swap(swap_id="2", sender=B, amount_usd="??")]
        report = LeaderboardService(StaticSwapAdapter(swaps)).build(self._make_cfg())
        self.assertEqual(report.swaps_fetched, 2)
        self.assertEqual(report.swaps_skipped, 1)
        self.assertEqual(report.summary.total_traders, 1)

    def test_empty_result_is_valid(self) -> None:
        report = LeaderboardService(StaticSwapAdapter([])).build(self._make_cfg())
        self.assertEqual(report.entries, [])
        self.assertEqual(report.summary.total_traders, 0)
        self.assertEqual(report.summary.total_volume_usd, Decimal("0"))

    def test_block_range_filters_after_fetch(self) -> None:
        swaps = [
            make_swap(swap_id="old", sender=A, block_number=100, timestamp=1),
            make_swap(swap_id="new", sender=B, block_number=200, timestamp=2),
        ]
        report = LeaderboardService(StaticSwapAdapter(swaps)).build(self._make_cfg(start_block=150))
        self.assertEqual(report.swaps_fetched, 2)
        self.assertEqual([e.address for e in report.entries], [B])

    def test_second_page_failure_aborts(self) -> None:
        first = [make_swap(swap_id=str(i), sender=A) for i in range(100)]
        source = _FailingSecondPage(first)
        with self.assertRaises(SourceError):
            LeaderboardService(source).build(self._make_cfg())
        self.assertEqual(source.calls, 2)

    def test_invalid_token_rejected_before_fetch(self) -> None:
        source = StaticSwapAdapter([])
        with self.assertRaises(InvalidTokenAddress):
            LeaderboardService(source).build(self._make_cfg(token_address="0x1234"))
        self.assertEqual(source.calls, [])

    def test_reports_progress(self) -> None:
        events = []
        LeaderboardService(StaticSwapAdapter([make_swap()])).build(
            self._make_cfg(), on_progress=lambda e, d: events.append(e)
        )
        self.assertEqual(events[0], "start")
        self.assertEqual(events[-1], "done")


class DemoReportTests(unittest.TestCase):
    def test_demo_report(self) -> None:
        report = build_demo_report(limit=3)
        self.assertTrue(report.demo)
        self.assertEqual(len(report.entries), 3)
        self.assertEqual(report.summary.total_traders, 8)
        self.assertEqual(report.entries[0].address, "0x5678901234567890123456789012345678901234")
        self.assertEqual(report.entries[0].total_volume_usd, Decimal("443001.00"))


if __name__ == "__main__":
    unittest.main()
