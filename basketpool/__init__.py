"""
basketpool - Multi-Asset Basket Liquidity Pool

A pooled-liquidity engine: depositors mint shares against a fixed basket of
assets, borrowers take same-asset collateralized loans, flash borrowers take
loans that must be repaid within one callback, and every fee is split between
an administrator and share holders.

Usage:
    from basketpool import Ledger, AssetToken, ShareTokenFactory, LiquidityPool

    ledger = Ledger("main", verbose=False)
    usdc = AssetToken(ledger, "USDC", "USD Coin", decimals=6)
    weth = AssetToken(ledger, "WETH", "Wrapped Ether")
    ledger.register_wallet("alice")
    usdc.mint("alice", 20_000)
    weth.mint("alice", 10)

    pool = LiquidityPool(
        ledger, [usdc, weth], [2_000, 1],
        factory=ShareTokenFactory(ledger), admin="treasury",
    )
    pool.initialize_share_token("treasury", token_admin="treasury")
    shares = pool.deposit("alice", [20_000, 10])
    pool.redeem("alice", shares)
"""

# Core types
from .core import (
    Move,
    Unit,
    PoolEvent,
    ExecuteResult,
    EventType,
    PoolError,
    InvalidConfiguration,
    NotInitialized,
    InvalidAsset,
    InsufficientInput,
    InsufficientLiquidity,
    DuplicateLoan,
    LoanNotExpired,
    NoActiveLoan,
    FeeExceedsCollateral,
    UnrepaidFlashLoan,
    Unauthorized,
    NativeValueRejected,
    ReentrantCall,
    TransferFailed,
    UnitNotRegistered,
    WalletNotRegistered,
    SYSTEM_WALLET,
    BPS_DENOMINATOR,
    SCALE,
    MIN_ASSETS,
    MAX_ASSETS,
)

# Custody ledger
from .ledger import Ledger, LedgerEntry, LedgerSnapshot

# Roles and capability policy
from .access import Role, AccessControl, OPERATION_CAPABILITIES, require_capabilities

# Token services
from .tokens import AssetToken, ShareToken, ShareTokenFactory

# Fee policy
from .fees import LoanTerms, FeeSplit, calculate_fee, calculate_flash_fee, split_fee

# Loans
from .loans import (
    LoanTerm,
    Loan,
    RepaymentQuote,
    compute_collateral,
    compute_repayment,
    compute_forced_repayment,
    loan_maturity,
    is_expired,
)

# Pool records
from .pool_ledger import (
    AssetPool,
    available_liquidity,
    distribute_fee,
    aggregate_available_liquidity,
    aggregate_total_deposits,
    token_list,
)

# Basket math
from .basket import MintQuote, AssetPayout, RedemptionQuote, compute_mint, compute_redemption

# Flash loans
from .flash import FlashReceiver, verify_flash_repayment

# Configuration
from .config import (
    PoolConfig,
    DEFAULT_LOAN_TERMS,
    BLOCKS_PER_DAY,
    BLOCKS_PER_YEAR,
)

# Pool
from .pool import LiquidityPool, DEFAULT_POOL_ADDRESS


__all__ = [
    # Core
    'Move', 'Unit', 'PoolEvent', 'ExecuteResult', 'EventType',
    'SYSTEM_WALLET', 'BPS_DENOMINATOR', 'SCALE', 'MIN_ASSETS', 'MAX_ASSETS',
    # Exceptions
    'PoolError', 'InvalidConfiguration', 'NotInitialized', 'InvalidAsset',
    'InsufficientInput', 'InsufficientLiquidity', 'DuplicateLoan',
    'LoanNotExpired', 'NoActiveLoan', 'FeeExceedsCollateral',
    'UnrepaidFlashLoan', 'Unauthorized', 'NativeValueRejected',
    'ReentrantCall', 'TransferFailed', 'UnitNotRegistered', 'WalletNotRegistered',
    # Ledger
    'Ledger', 'LedgerEntry', 'LedgerSnapshot',
    # Access
    'Role', 'AccessControl', 'OPERATION_CAPABILITIES', 'require_capabilities',
    # Tokens
    'AssetToken', 'ShareToken', 'ShareTokenFactory',
    # Fees
    'LoanTerms', 'FeeSplit', 'calculate_fee', 'calculate_flash_fee', 'split_fee',
    # Loans
    'LoanTerm', 'Loan', 'RepaymentQuote', 'compute_collateral',
    'compute_repayment', 'compute_forced_repayment', 'loan_maturity', 'is_expired',
    # Pool records
    'AssetPool', 'available_liquidity', 'distribute_fee',
    'aggregate_available_liquidity', 'aggregate_total_deposits', 'token_list',
    # Basket
    'MintQuote', 'AssetPayout', 'RedemptionQuote', 'compute_mint', 'compute_redemption',
    # Flash
    'FlashReceiver', 'verify_flash_repayment',
    # Config
    'PoolConfig', 'DEFAULT_LOAN_TERMS', 'BLOCKS_PER_DAY', 'BLOCKS_PER_YEAR',
    # Pool
    'LiquidityPool', 'DEFAULT_POOL_ADDRESS',
]

__version__ = '1.0.0'
