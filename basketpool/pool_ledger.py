"""
pool_ledger.py - Per-Asset Pool Records

Each configured asset has one AssetPool record:

    total_deposits   held in trust for share holders
    total_borrowed   principal currently lent out
    total_fees       every fee ever collected (informational, monotonic)
    admin_fees       claimable by an administrator
    holder_fees      claimable pro-rata by share holders on redemption

Invariant: total_deposits >= total_borrowed. Available liquidity is the
difference; it is what borrows, flash loans and redemptions draw on.

Records are frozen. Every transition returns a new record and refuses any
transition that would break the invariant, so the registry in LiquidityPool
can only ever hold consistent records.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from .core import InsufficientInput, InsufficientLiquidity
from .fees import FeeSplit, split_fee


@dataclass(frozen=True, slots=True)
class AssetPool:
    asset: str
    total_deposits: int = 0
    total_borrowed: int = 0
    total_fees: int = 0
    admin_fees: int = 0
    holder_fees: int = 0

    def __post_init__(self):
        if self.total_borrowed > self.total_deposits:
            raise InsufficientLiquidity(
                f"{self.asset}: borrowed {self.total_borrowed} exceeds deposits {self.total_deposits}"
            )
        for name in ("total_deposits", "total_borrowed", "total_fees", "admin_fees", "holder_fees"):
            if getattr(self, name) < 0:
                raise InsufficientLiquidity(f"{self.asset}: {name} would be negative")


def available_liquidity(pool: AssetPool) -> int:
    return pool.total_deposits - pool.total_borrowed


# ============================================================================
# TRANSITIONS
# ============================================================================

def with_deposit(pool: AssetPool, amount: int) -> AssetPool:
    return replace(pool, total_deposits=pool.total_deposits + amount)


def with_withdrawal(pool: AssetPool, amount: int) -> AssetPool:
    """Remove a redeemed deposit portion; never more than is available."""
    if amount > available_liquidity(pool):
        raise InsufficientLiquidity(
            f"{pool.asset}: withdrawal {amount} exceeds available {available_liquidity(pool)}"
        )
    return replace(pool, total_deposits=pool.total_deposits - amount)


def with_borrow(pool: AssetPool, amount: int) -> AssetPool:
    if amount > available_liquidity(pool):
        raise InsufficientLiquidity(
            f"{pool.asset}: borrow {amount} exceeds available {available_liquidity(pool)}"
        )
    return replace(pool, total_borrowed=pool.total_borrowed + amount)


def with_repayment(pool: AssetPool, amount: int) -> AssetPool:
    if amount > pool.total_borrowed:
        raise InsufficientInput(
            f"{pool.asset}: repayment {amount} exceeds borrowed {pool.total_borrowed}"
        )
    return replace(pool, total_borrowed=pool.total_borrowed - amount)


def with_holder_fee_claim(pool: AssetPool, amount: int) -> AssetPool:
    if amount > pool.holder_fees:
        raise InsufficientLiquidity(
            f"{pool.asset}: fee claim {amount} exceeds holder fees {pool.holder_fees}"
        )
    return replace(pool, holder_fees=pool.holder_fees - amount)


def with_admin_fee_withdrawal(pool: AssetPool) -> Tuple[AssetPool, int]:
    """Zero the admin fee balance; returns the new record and the amount withdrawn."""
    if pool.admin_fees == 0:
        raise InsufficientInput(f"{pool.asset}: no admin fees to withdraw")
    return replace(pool, admin_fees=0), pool.admin_fees


def distribute_fee(pool: AssetPool, fee: int, admin_fee_bps: int) -> Tuple[AssetPool, FeeSplit]:
    """
    Book a collected fee into the pool.

    The value must already be in custody; this only updates the record.

    Returns:
        (updated pool, split applied)
    """
    split = split_fee(fee, admin_fee_bps)
    updated = replace(
        pool,
        total_fees=pool.total_fees + fee,
        admin_fees=pool.admin_fees + split.admin_share,
        holder_fees=pool.holder_fees + split.holder_share,
    )
    return updated, split


# ============================================================================
# AGGREGATION
# ============================================================================

def aggregate_available_liquidity(pools: Iterable[AssetPool]) -> int:
    return sum(available_liquidity(pool) for pool in pools)


def aggregate_total_deposits(pools: Iterable[AssetPool]) -> int:
    return sum(pool.total_deposits for pool in pools)


def token_list(pools: Iterable[AssetPool]) -> List[str]:
    """Asset symbols in iteration (configured) order."""
    return [pool.asset for pool in pools]
