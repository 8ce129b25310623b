"""
conftest.py - Shared pytest fixtures for basket pool tests

Provides common fixtures used across unit, functional and conformance tests:
- Empty ledger with two registered assets
- Pools (uninitialized, initialized, seeded with liquidity)
- Flash receivers
"""

import pytest

from basketpool import Ledger, AssetToken, ShareTokenFactory

from tests.pool_builder import (
    ADMIN,
    build_pool, seed,
)
from tests.fake_receivers import RepayingReceiver


# =============================================================================
# LEDGER AND ASSETS
# =============================================================================

@pytest.fixture
def ledger():
    return Ledger("test", verbose=False)


@pytest.fixture
def usdc(ledger):
    return AssetToken(ledger, "USDC", "USD Coin", decimals=6)


@pytest.fixture
def weth(ledger):
    return AssetToken(ledger, "WETH", "Wrapped Ether")


@pytest.fixture
def factory(ledger):
    return ShareTokenFactory(ledger)


# =============================================================================
# POOLS
# =============================================================================

@pytest.fixture
def raw_pool(usdc, weth):
    """Two-asset pool, ratios [100, 200], share token not yet bound."""
    return build_pool([usdc, weth], [100, 200], initialize=False)


@pytest.fixture
def pool(raw_pool):
    """Two-asset pool with the share token bound."""
    raw_pool.initialize_share_token(ADMIN, token_admin=ADMIN)
    return raw_pool


@pytest.fixture
def seeded_pool(pool):
    """carol holds 1000 unit-shares: 100_000 USDC and 200_000 WETH in the pool."""
    seed(pool, "carol", 1_000)
    return pool


@pytest.fixture
def receiver(seeded_pool):
    r = RepayingReceiver(seeded_pool)
    r.fund("USDC", 10_000)
    r.fund("WETH", 10_000)
    return r

