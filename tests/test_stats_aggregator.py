import random
import unittest
from dataclasses import replace
from decimal import Decimal

from factories import OTHER, TARGET, WETH, make_swap

from swapboard.services.stats_aggregator import aggregate


A = "0x" + "aa" * 20
B = "0x" + "bb" * 20


class AggregateTests(unittest.TestCase):
    def test_buys_and_sells_accumulate_per_sender(self) -> None:
        swaps = [
            make_swap(swap_id="1", sender=A, amount0="-10", amount_usd="50"),
            make_swap(swap_id="2", sender=A, amount0="4", amount_usd="20"),
            make_swap(swap_id="3", sender=B, amount0="-1", amount_usd="5"),
        ]
        result = aggregate(swaps, TARGET)

        self.assertEqual(set(result.stats), {A, B})
        a = result.stats[A]
        self.assertEqual((a.total_buys, a.total_sells), (1, 1))
        self.assertEqual(a.total_buy_volume_token, Decimal("10"))
        self.assertEqual(a.total_sell_volume_token, Decimal("4"))
        self.assertEqual(a.total_buy_volume_usd, Decimal("50"))
        self.assertEqual(a.total_sell_volume_usd, Decimal("20"))
        self.assertEqual(result.processed, 3)
        self.assertEqual(result.skipped, 0)

    def test_keys_by_sender_not_recipient(self) -> None:
        swap = replace(make_swap(sender=A), recipient=B)
        result = aggregate([swap], TARGET)
        self.assertEqual(list(result.stats), [A])

    def test_sender_case_is_normalized(self) -> None:
        swaps = [make_swap(sender=A.upper().replace("0X", "0x")), make_swap(sender=A)]
        result = aggregate(swaps, TARGET)
        self.assertEqual(result.stats[A].total_buys, 2)

    def test_bad_records_are_skipped(self) -> None:
        swaps = [
            make_swap(swap_id="ok", sender=A),
            make_swap(swap_id="foreign", sender=A, token0=OTHER, token1=WETH),
            make_swap(swap_id="garbage", sender=B, amount0="n/a"),
            make_swap(swap_id="ok2", sender=A, amount0="2"),
        ]
        result = aggregate(swaps, TARGET)
        self.assertEqual(result.skipped, 2)
        self.assertEqual(result.processed, 2)
        self.assertNotIn(B, result.stats)
        self.assertEqual((result.stats[A].total_buys, result.stats[A].total_sells), (1, 1))

    def test_empty_input(self) -> None:
        result = aggregate([], TARGET)
        self.assertEqual(result.stats, {})
        self.assertEqual(result.processed, 0)

    def test_order_does_not_change_totals(self) -> None:
        rng = random.Random(7)
        senders = [A, B, "0x" + "cc" * 20]
        swaps = [
            make_swap(
                swap_id=str(i),
                sender=rng.choice(senders),
                amount0=f"{rng.choice('-+')}{rng.randint(1, 10**9)}.{rng.randint(0, 10**18):018d}",
                amount_usd=f"{rng.randint(0, 10**6)}.{rng.randint(0, 99):02d}",
            )
            for i in range(300)
        ]
        baseline = aggregate(swaps, TARGET).stats

        for _ in range(5):
            shuffled = list(swaps)
            rng.shuffle(shuffled)
            self.assertEqual(aggregate(shuffled, TARGET).stats, baseline)

    def test_each_run_gets_a_fresh_map(self) -> None:
        first = aggregate([make_swap(sender=A)], TARGET)
        second = aggregate([make_swap(sender=A)], TARGET)
        self.assertIsNot(first.stats, second.stats)
        self.assertEqual(second.stats[A].total_buys, 1)


if __name__ == "__main__":
    unittest.main()
