"""
loans.py - Collateralized Single-Asset Loans

=== LOAN MODEL ===

A borrower locks same-asset collateral and draws principal from one pool:
    collateral = amount * collateralization_ratio // 100

At most one loan is live per borrower. "No loan" is the absence of a
record; a live loan always has amount > 0.

States:
    NONE --borrow--> OPEN --repay / force_repay--> NONE

=== PRICING ===

The fee is flat per term: it is priced on the term's full configured
duration, whether the loan is repaid early, on time or late.

    voluntary repay:  borrower gets back collateral - (amount + fee)
    forced repay:     borrower gets back collateral - fee

Forced repay is only allowed once now >= borrow_time + duration.

=== PURE FUNCTIONS ===

    compute_collateral(amount, ratio) -> int
    loan_maturity(loan, terms) -> int
    is_expired(loan, terms, now) -> bool
    compute_repayment(loan, terms, ...) -> RepaymentQuote
    compute_forced_repayment(loan, terms, ...) -> RepaymentQuote

LiquidityPool (pool.py) owns the state and calls these.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .core import FeeExceedsCollateral, InsufficientInput
from .fees import LoanTerms, calculate_fee


class LoanTerm(str, Enum):
    """Loan tiers; each selects a duration and an annual rate."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    LONGEST = "longest"


@dataclass(frozen=True, slots=True)
class Loan:
    """
    A live loan.

    Attributes:
        amount: Principal borrowed (> 0)
        collateral: Same-asset amount locked at origination
        borrow_time: Block height at origination
        loan_term: Tier selecting duration and rate
        asset: Symbol of the pool the loan draws from
    """
    amount: int
    collateral: int
    borrow_time: int
    loan_term: LoanTerm
    asset: str

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"Loan amount must be positive, got {self.amount}")
        if self.collateral < 0:
            raise ValueError(f"Loan collateral cannot be negative, got {self.collateral}")


@dataclass(frozen=True, slots=True)
class RepaymentQuote:
    """
    Settlement of a loan.

    Attributes:
        fee: Fee charged for the term
        total_due: What the collateral must cover
        net_return: Collateral handed back to the borrower
    """
    fee: int
    total_due: int
    net_return: int


def compute_collateral(amount: int, collateralization_ratio: int) -> int:
    """
    Collateral required for a borrow.

    Example:
        compute_collateral(1000, 150) -> 1500
    """
    if amount <= 0:
        raise InsufficientInput(f"Borrow amount must be positive, got {amount}")
    return amount * collateralization_ratio // 100


def loan_maturity(loan: Loan, terms: LoanTerms) -> int:
    """Block height at which the loan becomes force-repayable."""
    return loan.borrow_time + terms.duration


def is_expired(loan: Loan, terms: LoanTerms, now: int) -> bool:
    return now >= loan_maturity(loan, terms)


def compute_repayment(
    loan: Loan,
    terms: LoanTerms,
    time_units_per_year: int,
    minimum_fee_bps: int,
) -> RepaymentQuote:
    """
    Voluntary repayment: the collateral covers principal plus fee.

    Raises:
        FeeExceedsCollateral: If collateral < amount + fee
    """
    fee = calculate_fee(loan.amount, terms, time_units_per_year, minimum_fee_bps)
    total_due = loan.amount + fee
    if loan.collateral < total_due:
        raise FeeExceedsCollateral(
            f"Collateral {loan.collateral} cannot cover {total_due} "
            f"(principal {loan.amount} + fee {fee})"
        )
    return RepaymentQuote(fee=fee, total_due=total_due, net_return=loan.collateral - total_due)


def compute_forced_repayment(
    loan: Loan,
    terms: LoanTerms,
    time_units_per_year: int,
    minimum_fee_bps: int,
) -> RepaymentQuote:
    """
    Forced repayment: the collateral absorbs only the fee.

    Raises:
        FeeExceedsCollateral: If collateral < fee
    """
    fee = calculate_fee(loan.amount, terms, time_units_per_year, minimum_fee_bps)
    if fee > loan.collateral:
        raise FeeExceedsCollateral(f"Fee {fee} exceeds collateral {loan.collateral}")
    return RepaymentQuote(fee=fee, total_due=fee, net_return=loan.collateral - fee)
