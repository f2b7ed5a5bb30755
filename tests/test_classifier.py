import unittest
from decimal import Decimal

from factories import OTHER, TARGET, WETH, make_swap

from swapboard.core.classifier import classify_trade
from swapboard.core.errors import InvalidNumericFormat, TokenNotInPool


class ClassifyTradeTests(unittest.TestCase):
    def test_negative_token0_delta_is_a_buy(self) -> None:
        swap = make_swap(amount0="-5", amount_usd="100")
        trade = classify_trade(swap, TARGET)
        self.assertTrue(trade.is_buy)
        self.assertEqual(trade.token_amount, Decimal("5"))
        self.assertEqual(trade.usd_amount, Decimal("100"))

    def test_positive_token1_delta_is_a_sell(self) -> None:
        swap = make_swap(token0=WETH, token1=TARGET, amount0="-0.001", amount1="3")
        trade = classify_trade(swap, TARGET)
        self.assertFalse(trade.is_buy)
        self.assertEqual(trade.token_amount, Decimal("3"))

    def test_zero_delta_is_a_sell(self) -> None:
        trade = classify_trade(make_swap(amount0="0"), TARGET)
        self.assertFalse(trade.is_buy)
        self.assertEqual(trade.token_amount, Decimal("0"))

    def test_target_is_matched_case_insensitively(self) -> None:
        swap = make_swap(token0=TARGET.upper().replace("0X", "0x"))
        self.assertTrue(classify_trade(swap, TARGET).is_buy)
        self.assertTrue(classify_trade(make_swap(), TARGET.upper().replace("0X", "0x")).is_buy)

    def test_usd_amount_is_absolute(self) -> None:
        trade = classify_trade(make_swap(amount0="4", amount_usd="-20.5"), TARGET)
        self.assertEqual(trade.usd_amount, Decimal("20.5"))

    def test_token_not_in_pool(self) -> None:
        with self.assertRaises(TokenNotInPool):
            classify_trade(make_swap(), OTHER)

    def test_bad_amount_propagates(self) -> None:
        with self.assertRaises(InvalidNumericFormat):
            classify_trade(make_swap(amount0="not-a-number"), TARGET)
        with self.assertRaises(InvalidNumericFormat):
            classify_trade(make_swap(amount_usd=""), TARGET)

    def test_magnitude_is_exact_beyond_default_precision(self) -> None:
        big = "-123456789012345.123456789012345678"
        trade = classify_trade(make_swap(amount0=big), TARGET)
        self.assertEqual(trade.token_amount, Decimal(big[1:]))


if __name__ == "__main__":
    unittest.main()
