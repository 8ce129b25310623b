"""
pool_builder.py - Test helpers for building funded pools

Used by the conftest fixtures and directly by property-based tests, which
cannot take function-scoped fixtures.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence, Tuple

from basketpool import (
    Ledger, AssetToken, ShareTokenFactory, LiquidityPool,
    PoolConfig, LoanTerm, LoanTerms,
)


ADMIN = "admin"
USERS = ("alice", "bob", "carol")
STARTING_BALANCE = 10_000_000

# A 360-block year keeps fee arithmetic readable:
# 10_000 borrowed on LONG -> 10_000 * 1200 * 90 // (10_000 * 360) = 300
TEST_LOAN_TERMS = {
    LoanTerm.SHORT: LoanTerms(duration=7, rate_bps=500),
    LoanTerm.MEDIUM: LoanTerms(duration=30, rate_bps=800),
    LoanTerm.LONG: LoanTerms(duration=90, rate_bps=1_200),
    LoanTerm.LONGEST: LoanTerms(duration=180, rate_bps=1_500),
}

TEST_CONFIG = PoolConfig(time_units_per_year=360, loan_terms=TEST_LOAN_TERMS)


def make_assets(ledger: Ledger, count: int, decimals: int = 18) -> List[AssetToken]:
    return [AssetToken(ledger, f"TKN{i}", f"Token {i}", decimals=decimals) for i in range(count)]


def fund(assets: Sequence[AssetToken], wallets: Sequence[str], amount: int = STARTING_BALANCE) -> None:
    """Register wallets and mint amount of every asset to each."""
    for wallet in wallets:
        assets[0].ledger.ensure_wallet(wallet)
        for asset in assets:
            asset.mint(wallet, amount)


def build_pool(
    assets: Sequence[AssetToken],
    ratios: Sequence[int],
    config: PoolConfig = TEST_CONFIG,
    initialize: bool = True,
    wallets: Sequence[str] = (ADMIN,) + USERS,
    balance: int = STARTING_BALANCE,
) -> LiquidityPool:
    ledger = assets[0].ledger
    fund(assets, wallets, balance)
    pool = LiquidityPool(
        ledger, assets, ratios,
        factory=ShareTokenFactory(ledger),
        admin=ADMIN,
        config=config,
        verbose=False,
    )
    if initialize:
        pool.initialize_share_token(ADMIN, token_admin=ADMIN)
    return pool


def pool_state(pool: LiquidityPool, borrowers: Sequence[str] = USERS) -> Tuple[Any, ...]:
    """Everything an operation could change, in comparable form."""
    ledger = pool.ledger
    balances: Dict[str, Dict[str, int]] = {
        wallet: {unit: qty for unit, qty in bals.items() if qty != 0}
        for wallet, bals in ledger.balances.items()
    }
    share = pool.share_token
    return (
        pool.pools(),
        {b: pool.get_loan(b) for b in borrowers},
        pool.loan_terms(),
        pool.flash_fee_bps,
        share.symbol if share is not None else None,
        len(pool.events),
        len(ledger.transaction_log),
        balances,
    )


def fresh_two_asset_pool(config: PoolConfig = TEST_CONFIG, initialize: bool = True) -> LiquidityPool:
    ledger = Ledger("test", verbose=False)
    usdc = AssetToken(ledger, "USDC", "USD Coin", decimals=6)
    weth = AssetToken(ledger, "WETH", "Wrapped Ether")
    return build_pool([usdc, weth], [100, 200], config=config, initialize=initialize)


def seed(pool: LiquidityPool, holder: str = "carol", units: int = 1_000) -> int:
    """Deposit an exact basket of `units` unit-shares."""
    return pool.deposit(holder, [r * units for r in pool.required_ratios])


def total_custody(pool: LiquidityPool) -> Dict[str, int]:
    return {symbol: pool.custody_balance(symbol) for symbol in pool.tokens()}
