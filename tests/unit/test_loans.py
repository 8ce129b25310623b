"""
test_loans.py - Unit tests for collateralized loan math

Tests:
- Collateral requirement
- Maturity and expiry gate
- Voluntary and forced settlement quotes
"""

import pytest

from basketpool import (
    Loan, LoanTerm, LoanTerms, RepaymentQuote,
    FeeExceedsCollateral, InsufficientInput,
    compute_collateral, compute_repayment, compute_forced_repayment,
    loan_maturity, is_expired,
)


LONG = LoanTerms(duration=90, rate_bps=1_200)


def make_loan(amount=1_000, collateral=1_500, borrow_time=5, term=LoanTerm.LONG):
    return Loan(amount=amount, collateral=collateral, borrow_time=borrow_time, loan_term=term, asset="USDC")


class TestCollateral:

    def test_one_and_a_half_times(self):
        assert compute_collateral(1_000, 150) == 1_500

    def test_truncates(self):
        assert compute_collateral(1, 150) == 1

    def test_non_positive_amount(self):
        with pytest.raises(InsufficientInput):
            compute_collateral(0, 150)
        with pytest.raises(InsufficientInput):
            compute_collateral(-5, 150)


class TestLoanRecord:

    def test_amount_must_be_positive(self):
        with pytest.raises(ValueError):
            make_loan(amount=0)

    def test_term_values(self):
        assert LoanTerm("long") is LoanTerm.LONG
        assert [t.value for t in LoanTerm] == ["short", "medium", "long", "longest"]


class TestExpiry:

    def test_maturity(self):
        assert loan_maturity(make_loan(), LONG) == 95

    def test_not_expired_one_block_early(self):
        assert not is_expired(make_loan(), LONG, 94)

    def test_expired_exactly_at_maturity(self):
        assert is_expired(make_loan(), LONG, 95)


class TestRepayment:

    def test_voluntary(self):
        quote = compute_repayment(make_loan(), LONG, 360, 10)
        assert quote == RepaymentQuote(fee=30, total_due=1_030, net_return=470)

    def test_voluntary_when_collateral_too_small(self):
        with pytest.raises(FeeExceedsCollateral):
            compute_repayment(make_loan(collateral=1_000), LONG, 360, 10)

    def test_fee_ignores_elapsed_time(self):
        early = compute_repayment(make_loan(borrow_time=0), LONG, 360, 10)
        late = compute_repayment(make_loan(borrow_time=10_000), LONG, 360, 10)
        assert early.fee == late.fee == 30

    def test_forced(self):
        quote = compute_forced_repayment(make_loan(), LONG, 360, 10)
        assert quote == RepaymentQuote(fee=30, total_due=30, net_return=1_470)

    def test_forced_with_equal_collateral(self):
        quote = compute_forced_repayment(make_loan(collateral=1_000), LONG, 360, 10)
        assert quote.net_return == 970

    def test_forced_fee_above_collateral(self):
        with pytest.raises(FeeExceedsCollateral):
            compute_forced_repayment(make_loan(collateral=10), LONG, 360, 10)
