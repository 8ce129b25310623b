"""
basket.py - Basket Mint/Redeem Math

=== MINT ===

A deposit supplies one amount per configured asset, in configured order.
Each asset has a fixed required ratio: the amount of it backing one
unit-share.

    mint_units = min_i(amounts[i] // ratios[i])      must be > 0
    pulled[i]  = ratios[i] * mint_units

Only pulled[i] leaves the depositor; the surplus above the exact multiple
stays with them. The depositor receives mint_units * 10**share_decimals.

    ratios [100, 200], amounts [350, 700]
    -> mint_units 3, pulled [300, 600], 50 of asset 0 stays with the caller

=== REDEEM ===

Redeeming share_amount out of supply (taken before the burn):

    share           = share_amount * SCALE // supply
    deposit_portion = available_liquidity * share // SCALE
    fee_portion     = holder_fees * share // SCALE

All divisions truncate; dust stays in the pool.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

from .core import SCALE, InsufficientInput
from .pool_ledger import AssetPool, available_liquidity


@dataclass(frozen=True, slots=True)
class MintQuote:
    """
    Attributes:
        mint_units: Whole unit-shares the deposit buys
        pulled: Exact per-asset amounts taken from the depositor
    """
    mint_units: int
    pulled: Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class AssetPayout:
    asset: str
    deposit_portion: int
    fee_portion: int

    @property
    def total(self) -> int:
        return self.deposit_portion + self.fee_portion


@dataclass(frozen=True, slots=True)
class RedemptionQuote:
    """
    Attributes:
        share: Redeemed fraction of supply, scaled by SCALE
        payouts: One AssetPayout per pool, in configured order
    """
    share: int
    payouts: Tuple[AssetPayout, ...]


def compute_mint(amounts: Sequence[int], ratios: Sequence[int]) -> MintQuote:
    """
    Quote a basket deposit.

    Raises:
        InsufficientInput: Wrong number of amounts, any amount below its
            ratio, or a quote that mints nothing
    """
    if len(amounts) != len(ratios):
        raise InsufficientInput(f"Expected {len(ratios)} amounts, got {len(amounts)}")
    for i, (amount, ratio) in enumerate(zip(amounts, ratios)):
        if amount < ratio:
            raise InsufficientInput(f"Amount {amount} for asset #{i} is below required ratio {ratio}")

    mint_units = min(amount // ratio for amount, ratio in zip(amounts, ratios))
    if mint_units == 0:
        raise InsufficientInput("Deposit mints zero shares")
    return MintQuote(mint_units=mint_units, pulled=tuple(ratio * mint_units for ratio in ratios))


def compute_redemption(
    pools: Sequence[AssetPool],
    share_amount: int,
    supply: int,
) -> RedemptionQuote:
    """
    Quote a redemption against the current pool records.

    Args:
        pools: Pool records in configured order
        share_amount: Shares being redeemed
        supply: Share supply before the burn

    Raises:
        InsufficientInput: share_amount is not positive or exceeds supply
    """
    if share_amount <= 0:
        raise InsufficientInput(f"Share amount must be positive, got {share_amount}")
    if supply < share_amount:
        raise InsufficientInput(f"Share amount {share_amount} exceeds supply {supply}")

    share = share_amount * SCALE // supply
    payouts = tuple(
        AssetPayout(
            asset=pool.asset,
            deposit_portion=available_liquidity(pool) * share // SCALE,
            fee_portion=pool.holder_fees * share // SCALE,
        )
        for pool in pools
    )
    return RedemptionQuote(share=share, payouts=payouts)
