"""
test_basket.py - Unit tests for basket mint and redemption math
"""

import pytest

from basketpool import (
    AssetPool, InsufficientInput, SCALE,
    compute_mint, compute_redemption,
)


class TestComputeMint:

    def test_exact_multiple_is_pulled(self):
        quote = compute_mint([350, 700], [100, 200])
        assert quote.mint_units == 3
        assert quote.pulled == (300, 600)

    def test_smallest_ratio_multiple_wins(self):
        quote = compute_mint([1_000, 650], [100, 200])
        assert quote.mint_units == 3
        assert quote.pulled == (300, 600)

    def test_amount_below_ratio(self):
        with pytest.raises(InsufficientInput):
            compute_mint([99, 700], [100, 200])

    def test_zero_amount(self):
        with pytest.raises(InsufficientInput):
            compute_mint([0, 700], [100, 200])

    def test_length_mismatch(self):
        with pytest.raises(InsufficientInput):
            compute_mint([100, 200, 300], [100, 200])

    def test_ten_assets(self):
        ratios = list(range(1, 11))
        quote = compute_mint([r * 7 for r in ratios], ratios)
        assert quote.mint_units == 7
        assert sum(quote.pulled) == 7 * sum(ratios)


class TestComputeRedemption:

    def test_full_redemption_returns_everything(self):
        pools = [AssetPool("A", total_deposits=300, holder_fees=10), AssetPool("B", total_deposits=600)]
        quote = compute_redemption(pools, 3, 3)
        assert quote.share == SCALE
        assert [(p.deposit_portion, p.fee_portion) for p in quote.payouts] == [(300, 10), (600, 0)]

    def test_partial_redemption_truncates(self):
        pools = [AssetPool("A", total_deposits=300, holder_fees=10)]
        quote = compute_redemption(pools, 1, 3)
        payout = quote.payouts[0]
        assert payout.deposit_portion == 99
        assert payout.fee_portion == 3
        assert payout.total == 102

    def test_borrowed_funds_are_not_redeemable(self):
        quote = compute_redemption([AssetPool("A", total_deposits=1_000, total_borrowed=400)], 5, 5)
        assert quote.payouts[0].deposit_portion == 600

    def test_payouts_follow_pool_order(self):
        pools = [AssetPool("B", total_deposits=10), AssetPool("A", total_deposits=10)]
        assert [p.asset for p in compute_redemption(pools, 1, 1).payouts] == ["B", "A"]

    def test_rejects_non_positive_share_amount(self):
        with pytest.raises(InsufficientInput):
            compute_redemption([AssetPool("A", total_deposits=10)], 0, 10)

    def test_rejects_more_than_supply(self):
        with pytest.raises(InsufficientInput):
            compute_redemption([AssetPool("A", total_deposits=10)], 11, 10)
