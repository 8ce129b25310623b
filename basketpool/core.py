"""
Core types for the basket liquidity pool.

This module provides the foundational data structures shared by every layer:
1. Constants: basis-point denominator, fixed-point scale, reserved wallets
2. Exceptions: PoolError and the domain-specific error kinds
3. Immutable data structures: Move, Unit, PoolEvent
4. Enums: ExecuteResult, EventType

All amounts are Python ints in the smallest unit of their asset. There is no
floating point and no Decimal anywhere in the accounting path: every division
truncates toward zero, and residual dust stays with the pool.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import hashlib
from typing import Any, Mapping


# ============================================================================
# CONSTANTS
# ============================================================================

# Reserved wallet for issuance and redemption of units (mint/burn).
# The system wallet is exempt from balance validation and can hold any balance.
SYSTEM_WALLET = "system"

# 10000 bps = 100%
BPS_DENOMINATOR = 10_000

# Fixed-point scale used for proportional redemption math.
SCALE = 10 ** 18

# Basket size bounds (inclusive).
MIN_ASSETS = 2
MAX_ASSETS = 10


# ============================================================================
# ENUMS
# ============================================================================

class ExecuteResult(Enum):
    """
    Outcome of a custody ledger execution attempt.

    APPLIED: Moves were validated and applied atomically.
    REJECTED: Validation failed; no move was applied.
    """
    APPLIED = "applied"
    REJECTED = "rejected"


class EventType(str, Enum):
    """Kinds of audit record emitted by the pool."""
    POOL_ADDED = "pool_added"
    REQUIRED_RATIOS_SET = "required_ratios_set"
    SHARE_TOKEN_SET = "share_token_set"
    DEPOSIT = "deposit"
    REDEEM = "redeem"
    FEE_CLAIMED = "fee_claimed"
    BORROW = "borrow"
    REPAY = "repay"
    FORCE_REPAY = "force_repay"
    ADMIN_FEES_WITHDRAWN = "admin_fees_withdrawn"
    FLASH_LOAN = "flash_loan"
    FEE_DISTRIBUTED = "fee_distributed"
    LOAN_TERMS_SET = "loan_terms_set"
    FLASH_FEE_SET = "flash_fee_set"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class PoolError(Exception):
    """Base exception for all pool-related errors."""
    pass


class InvalidConfiguration(PoolError):
    """Raised for bad constructor or admin inputs."""
    pass


class NotInitialized(PoolError):
    """Raised when the share token has not been bound yet."""
    pass


class InvalidAsset(PoolError):
    """Raised when an asset symbol is not one of the configured pools."""
    pass


class InsufficientInput(PoolError):
    """Raised for deposits below the required ratio, zero amounts and short share balances."""
    pass


class InsufficientLiquidity(PoolError):
    """Raised when a borrow, flash loan or redemption exceeds what the pool can pay."""
    pass


class DuplicateLoan(PoolError):
    """Raised when a borrower with an open loan tries to open another."""
    pass


class LoanNotExpired(PoolError):
    """Raised when a forced repayment is attempted before maturity."""
    pass


class NoActiveLoan(PoolError):
    """Raised when repaying a borrower that has no open loan."""
    pass


class FeeExceedsCollateral(PoolError):
    """Raised when the locked collateral cannot cover the amount due."""
    pass


class UnrepaidFlashLoan(PoolError):
    """Raised when a flash receiver returns less than amount + fee."""
    pass


class Unauthorized(PoolError):
    """Raised when the caller lacks a capability required by the operation."""
    pass


class NativeValueRejected(PoolError):
    """Raised for any attempt to send bare native value to the pool."""
    pass


class ReentrantCall(PoolError):
    """Raised when a mutating entry point is entered while another is running."""
    pass


class TransferFailed(PoolError):
    """Raised by token services when the custody ledger rejects a transfer."""
    pass


class UnitNotRegistered(PoolError):
    """Raised when operating on a unit the custody ledger does not know."""
    pass


class WalletNotRegistered(PoolError):
    """Raised when operating on a wallet the custody ledger does not know."""
    pass


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Move:
    """
    A single transfer of an integer quantity of a unit between two wallets.

    Attributes:
        quantity: Amount to transfer, in the unit's smallest denomination (> 0).
        unit_symbol: Symbol of the unit being transferred.
        source: Wallet debited.
        dest: Wallet credited.
        contract_id: Identifier of the operation generating this move.
    """
    quantity: int
    unit_symbol: str
    source: str
    dest: str
    contract_id: str

    def __post_init__(self):
        if not self.source or not self.source.strip():
            raise ValueError("Move source cannot be empty")
        if not self.dest or not self.dest.strip():
            raise ValueError("Move dest cannot be empty")
        if not self.unit_symbol or not self.unit_symbol.strip():
            raise ValueError("Move unit_symbol cannot be empty")
        if not self.contract_id or not self.contract_id.strip():
            raise ValueError("Move contract_id cannot be empty")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Move quantity must be int, got {type(self.quantity)}")
        if self.quantity <= 0:
            raise ValueError(f"Move quantity must be positive, got {self.quantity}")
        if self.source == self.dest:
            raise ValueError("Source and dest must be different")

    def __repr__(self) -> str:
        return f"Move({self.quantity} {self.unit_symbol}: {self.source}→{self.dest})"


@dataclass(frozen=True, slots=True)
class Unit:
    """
    Definition of a unit (token) held on the custody ledger.

    Attributes:
        symbol: Short identifier (e.g., "WETH", "BPS-SHARE").
        name: Human-readable name.
        decimals: Number of decimals the unit reports to callers.
        min_balance: Minimum allowed balance in any non-system wallet.
    """
    symbol: str
    name: str
    decimals: int = 18
    min_balance: int = 0

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Unit symbol cannot be empty")
        if self.decimals < 0:
            raise ValueError(f"Unit decimals cannot be negative, got {self.decimals}")


def _canonicalize(value: Any) -> str:
    """
    Produce a canonical string representation of a value for hashing.

    Dict keys are sorted, so the same content always hashes the same way
    regardless of insertion order.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return f"E:{value.value}"
    if isinstance(value, int):
        return f"N:{value}"
    if isinstance(value, str):
        return f"S:{value}"
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        serialized = ",".join(f"{_canonicalize(k)}:{_canonicalize(v)}" for k, v in items)
        return f"{{{serialized}}}"
    if isinstance(value, (list, tuple)):
        serialized = ",".join(_canonicalize(item) for item in value)
        return f"[{serialized}]"
    return f"R:{repr(value)}"


def _compute_event_id(event_type: EventType, sequence: int, block: int, data: Mapping[str, Any]) -> str:
    """Deterministic content hash of an audit record."""
    content = f"{event_type.value}|{sequence}|{block}|{_canonicalize(data)}"
    return hashlib.sha256(content.encode()).hexdigest()[:16]


@dataclass(frozen=True, slots=True)
class PoolEvent:
    """
    Immutable audit record of a pool state change.

    Attributes:
        event_type: What happened.
        sequence: Monotonic position in the pool's event log.
        block: Logical block height at which it happened.
        data: Event payload (amounts, wallets, asset symbols).
        event_id: Content hash of the record (auto-computed).
    """
    event_type: EventType
    sequence: int
    block: int
    data: Mapping[str, Any] = field(default_factory=dict)
    event_id: str = field(default="")

    def __post_init__(self):
        if not self.event_id:
            object.__setattr__(
                self, 'event_id',
                _compute_event_id(self.event_type, self.sequence, self.block, self.data),
            )

    def __repr__(self) -> str:
        payload = ", ".join(f"{k}={v!r}" for k, v in self.data.items())
        return f"PoolEvent(#{self.sequence} @{self.block} {self.event_type.value}: {payload})"

