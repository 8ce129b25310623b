"""
fees.py - Fee Policy

Pure functions, no state:

    calculate_fee(amount, terms, time_units_per_year, minimum_fee_bps) -> int
        fee = amount * rate_bps * duration // (10000 * time_units_per_year)
        fee = max(fee, amount * minimum_fee_bps // 10000)

    calculate_flash_fee(amount, flash_fee_bps) -> int
        fee = amount * flash_fee_bps // 10000

    split_fee(fee, admin_fee_bps) -> FeeSplit
        admin_share = fee * admin_fee_bps // 10000
        holder_share = fee - admin_share

Truncation only ever shortchanges the admin share; the holder share absorbs
the remainder so admin_share + holder_share == fee exactly.
"""

from __future__ import annotations
from dataclasses import dataclass

from .core import BPS_DENOMINATOR


@dataclass(frozen=True, slots=True)
class LoanTerms:
    """Duration (in blocks) and annual rate (in bps) of one loan tier."""
    duration: int
    rate_bps: int

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"duration cannot be negative, got {self.duration}")
        if self.rate_bps < 0:
            raise ValueError(f"rate_bps cannot be negative, got {self.rate_bps}")


@dataclass(frozen=True, slots=True)
class FeeSplit:
    """Result of split_fee()."""
    admin_share: int
    holder_share: int

    @property
    def total(self) -> int:
        return self.admin_share + self.holder_share


def _check_bps(name: str, bps: int) -> None:
    if bps < 0 or bps > BPS_DENOMINATOR:
        raise ValueError(f"{name} must be within [0, {BPS_DENOMINATOR}], got {bps}")


def calculate_fee(
    amount: int,
    terms: LoanTerms,
    time_units_per_year: int,
    minimum_fee_bps: int,
) -> int:
    """
    Fee for a loan over its full term, floored at the minimum fee.

    The term's configured duration is used, not the time actually elapsed.

    Args:
        amount: Principal
        terms: Duration and annual rate of the loan tier
        time_units_per_year: Blocks per year
        minimum_fee_bps: Floor as a fraction of principal

    Returns:
        Fee in the loan asset's smallest unit

    Example:
        # 1_000_000 at 1200 bps for a quarter of a year, floor 10 bps
        calculate_fee(1_000_000, LoanTerms(duration=90, rate_bps=1200), 360, 10) -> 30_000
    """
    if amount < 0:
        raise ValueError(f"amount cannot be negative, got {amount}")
    if time_units_per_year <= 0:
        raise ValueError(f"time_units_per_year must be positive, got {time_units_per_year}")
    _check_bps("minimum_fee_bps", minimum_fee_bps)

    fee = (amount * terms.rate_bps * terms.duration) // (BPS_DENOMINATOR * time_units_per_year)
    floor = amount * minimum_fee_bps // BPS_DENOMINATOR
    return max(fee, floor)


def calculate_flash_fee(amount: int, flash_fee_bps: int) -> int:
    if amount < 0:
        raise ValueError(f"amount cannot be negative, got {amount}")
    _check_bps("flash_fee_bps", flash_fee_bps)
    return amount * flash_fee_bps // BPS_DENOMINATOR


def split_fee(fee: int, admin_fee_bps: int) -> FeeSplit:
    """
    Split a fee between the administrator and share holders.

    Example:
        split_fee(999, 1000) -> FeeSplit(admin_share=99, holder_share=900)
    """
    if fee < 0:
        raise ValueError(f"fee cannot be negative, got {fee}")
    _check_bps("admin_fee_bps", admin_fee_bps)
    admin_share = fee * admin_fee_bps // BPS_DENOMINATOR
    return FeeSplit(admin_share=admin_share, holder_share=fee - admin_share)
