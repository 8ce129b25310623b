"""
config.py - Pool configuration

PoolConfig gathers every tunable number of a LiquidityPool. Loan terms are
the starting table only; administrators change them at runtime through
LiquidityPool.set_loan_terms().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping

from .core import BPS_DENOMINATOR, InvalidConfiguration
from .fees import LoanTerms
from .loans import LoanTerm


# =============================================================================
# CONSTANTS
# =============================================================================

# 15-second blocks
BLOCKS_PER_DAY = 5_760
BLOCKS_PER_YEAR = 365 * BLOCKS_PER_DAY

# 150% same-asset collateral
DEFAULT_COLLATERALIZATION_RATIO = 150

# Floor on any loan fee: 0.1% of principal
DEFAULT_MINIMUM_FEE_BPS = 10

# Administrator share of loan fees and of flash fees
DEFAULT_ADMIN_FEE_BPS = 1_000
DEFAULT_FLASH_ADMIN_FEE_BPS = 1_000

# 0.09% per flash loan
DEFAULT_FLASH_FEE_BPS = 9

DEFAULT_SHARE_NAME = "Basket Pool Share"
DEFAULT_SHARE_SYMBOL = "BPS"

DEFAULT_LOAN_TERMS: Mapping[LoanTerm, LoanTerms] = {
    LoanTerm.SHORT: LoanTerms(duration=7 * BLOCKS_PER_DAY, rate_bps=500),
    LoanTerm.MEDIUM: LoanTerms(duration=30 * BLOCKS_PER_DAY, rate_bps=800),
    LoanTerm.LONG: LoanTerms(duration=90 * BLOCKS_PER_DAY, rate_bps=1_200),
    LoanTerm.LONGEST: LoanTerms(duration=180 * BLOCKS_PER_DAY, rate_bps=1_500),
}


@dataclass(frozen=True, slots=True)
class PoolConfig:
    """
    Immutable configuration of a LiquidityPool.

    Attributes:
        collateralization_ratio: Collateral as a percentage of principal (150 = 1.5x)
        time_units_per_year: Blocks per year used to annualize loan rates
        minimum_fee_bps: Floor on any loan fee
        admin_fee_bps: Administrator share of loan fees
        flash_admin_fee_bps: Administrator share of flash fees
        flash_fee_bps: Initial flash fee (admin-mutable at runtime)
        share_name: Name given to the share token on binding
        share_symbol: Symbol given to the share token on binding
        loan_terms: Initial terms table; must cover every LoanTerm
    """
    collateralization_ratio: int = DEFAULT_COLLATERALIZATION_RATIO
    time_units_per_year: int = BLOCKS_PER_YEAR
    minimum_fee_bps: int = DEFAULT_MINIMUM_FEE_BPS
    admin_fee_bps: int = DEFAULT_ADMIN_FEE_BPS
    flash_admin_fee_bps: int = DEFAULT_FLASH_ADMIN_FEE_BPS
    flash_fee_bps: int = DEFAULT_FLASH_FEE_BPS
    share_name: str = DEFAULT_SHARE_NAME
    share_symbol: str = DEFAULT_SHARE_SYMBOL
    loan_terms: Mapping[LoanTerm, LoanTerms] = field(default_factory=lambda: dict(DEFAULT_LOAN_TERMS))

    def __post_init__(self):
        if self.collateralization_ratio < 100:
            raise InvalidConfiguration(
                f"collateralization_ratio must be at least 100, got {self.collateralization_ratio}"
            )
        if self.time_units_per_year <= 0:
            raise InvalidConfiguration(
                f"time_units_per_year must be positive, got {self.time_units_per_year}"
            )
        for name in ("minimum_fee_bps", "admin_fee_bps", "flash_admin_fee_bps", "flash_fee_bps"):
            value = getattr(self, name)
            if value < 0 or value > BPS_DENOMINATOR:
                raise InvalidConfiguration(f"{name} must be within [0, {BPS_DENOMINATOR}], got {value}")
        if not self.share_symbol or not self.share_symbol.strip():
            raise InvalidConfiguration("share_symbol cannot be empty")
        missing = [term.value for term in LoanTerm if term not in self.loan_terms]
        if missing:
            raise InvalidConfiguration(f"loan_terms missing entries for {missing}")
