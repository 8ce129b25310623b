"""
ledger.py - Custody Ledger for Token Balances

The Ledger is the state manager for every token balance the pool touches:
underlying assets, pool shares, the pool's own custody wallet, borrowers and
flash receivers. Token services (tokens.py) are thin handles over it.

Key responsibilities:
    - Holds integer balances per wallet per unit
    - Executes batches of moves atomically (all moves succeed or all fail)
    - Keeps the logical block clock used for loan maturity
    - Provides snapshot()/restore() so callers can roll back a whole operation
    - Always validates and always logs
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .core import (
    Move, Unit, ExecuteResult,
    SYSTEM_WALLET,
    PoolError, UnitNotRegistered, WalletNotRegistered,
)


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """
    Executed batch of moves - the custody audit trail.

    Attributes:
        moves: Moves applied together
        block: Block height at execution
        sequence_number: Monotonic sequence within the ledger
    """
    moves: Tuple[Move, ...]
    block: int
    sequence_number: int


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """Opaque copy of mutable ledger state, produced by Ledger.snapshot()."""
    balances: Tuple[Tuple[str, Tuple[Tuple[str, int], ...]], ...]
    log_length: int
    next_sequence: int


class Ledger:
    """
    Integer custody ledger with atomic execution and an audit trail.

    Design Principles:
        - Always validates: every batch is checked for registration and
          balance constraints before any balance changes.
        - Always logs: every applied batch is appended to transaction_log.

    Thread Safety:
        Not thread-safe. Each thread should maintain its own Ledger instance.

    Example:
        ledger = Ledger("main")
        ledger.register_unit(Unit("USDC", "USD Coin", decimals=6))
        ledger.register_wallet("alice")
        ledger.register_wallet("bob")
        ledger.execute([Move(100, "USDC", SYSTEM_WALLET, "alice", "faucet")])
        ledger.execute([Move(40, "USDC", "alice", "bob", "payment_001")])
    """

    def __init__(self, name: str, initial_block: int = 0, verbose: bool = True):
        """
        Create a ledger.

        Args:
            name: Ledger identifier
            initial_block: Starting block height (default: 0)
            verbose: Print registrations and executions (default: True)
        """
        if initial_block < 0:
            raise ValueError(f"initial_block cannot be negative, got {initial_block}")
        self.name = name
        self.balances: Dict[str, Dict[str, int]] = {}
        self.units: Dict[str, Unit] = {}
        self.registered_wallets: Set[str] = set()
        self.transaction_log: List[LedgerEntry] = []
        self._current_block: int = initial_block
        self.verbose = verbose
        self._next_sequence: int = 0

        # Auto-register the system wallet (used for issuance/redemption)
        self.registered_wallets.add(SYSTEM_WALLET)
        self.balances[SYSTEM_WALLET] = defaultdict(int)

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    @property
    def current_block(self) -> int:
        """Current logical block height."""
        return self._current_block

    def get_balance(self, wallet_id: str, unit_symbol: str) -> int:
        """
        Get the balance of a unit in a wallet.

        Raises:
            WalletNotRegistered: If wallet is not registered
            UnitNotRegistered: If unit is not registered
        """
        if wallet_id not in self.registered_wallets:
            raise WalletNotRegistered(f"Wallet {wallet_id} not registered")
        if unit_symbol not in self.units:
            raise UnitNotRegistered(f"Unit {unit_symbol} not registered")
        return self.balances[wallet_id].get(unit_symbol, 0)

    def get_unit(self, symbol: str) -> Unit:
        """Return the Unit object for a given symbol."""
        if symbol not in self.units:
            raise UnitNotRegistered(f"Unit {symbol} not registered")
        return self.units[symbol]

    def is_registered(self, wallet_id: str) -> bool:
        """Check if a wallet is registered."""
        return wallet_id in self.registered_wallets

    def total_supply(self, unit_symbol: str) -> int:
        """
        Outstanding supply of a unit: everything held outside the system wallet.

        Since the system wallet is the issuer, its (negative) balance mirrors
        the outstanding supply exactly.
        """
        if unit_symbol not in self.units:
            raise UnitNotRegistered(f"Unit {unit_symbol} not registered")
        return -self.balances[SYSTEM_WALLET].get(unit_symbol, 0)

    def verify_double_entry(self) -> Dict[str, Any]:
        """
        Verify that every unit sums to zero across all wallets, system included.

        Returns:
            Dict with keys:
            - 'valid': bool - True if conservation holds for every unit
            - 'supplies': Dict[str, int] - outstanding supply per unit
            - 'discrepancies': List[Dict] - unit and net imbalance for each violation
        """
        supplies = {}
        discrepancies = []
        for unit_symbol in sorted(self.units):
            net = sum(
                self.balances[w].get(unit_symbol, 0)
                for w in sorted(self.registered_wallets)
            )
            supplies[unit_symbol] = self.total_supply(unit_symbol)
            if net != 0:
                discrepancies.append({'unit': unit_symbol, 'net': net})
        return {
            'valid': len(discrepancies) == 0,
            'supplies': supplies,
            'discrepancies': discrepancies,
        }

    # ========================================================================
    # TIME MANAGEMENT
    # ========================================================================

    def advance_blocks(self, count: int) -> int:
        """
        Move the block clock forward by count blocks.

        Returns:
            The new block height

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Cannot move time backwards: {count} blocks")
        self._current_block += count
        return self._current_block

    def advance_to(self, block: int) -> None:
        """
        Set the block clock to an absolute height.

        Raises:
            ValueError: If block is before the current height
        """
        if block < self._current_block:
            raise ValueError(
                f"Cannot move time backwards: {block} < {self._current_block}"
            )
        self._current_block = block

    # ========================================================================
    # REGISTRATION (Mutating)
    # ========================================================================

    def register_wallet(self, wallet_id: str) -> str:
        """
        Register a new wallet.

        Raises:
            ValueError: If wallet is empty or already registered
        """
        if not wallet_id or not wallet_id.strip():
            raise ValueError("Wallet id cannot be empty")
        if wallet_id in self.registered_wallets:
            raise ValueError(f"Wallet {wallet_id} already registered")
        self.registered_wallets.add(wallet_id)
        self.balances[wallet_id] = defaultdict(int)
        return wallet_id

    def ensure_wallet(self, wallet_id: str) -> str:
        """Register a wallet unless it is already registered."""
        if wallet_id not in self.registered_wallets:
            self.register_wallet(wallet_id)
        return wallet_id

    def register_unit(self, unit: Unit) -> None:
        """
        Register a new unit.

        Raises:
            ValueError: If unit symbol is already registered
        """
        if unit.symbol in self.units:
            raise ValueError(f"Unit {unit.symbol} already registered")
        self.units[unit.symbol] = unit
        if self.verbose:
            print(f"📝 Registered: {unit.symbol} ({unit.name}) [decimals={unit.decimals}]")

    # ========================================================================
    # EXECUTION (Mutating)
    # ========================================================================

    def execute(self, moves: Sequence[Move]) -> ExecuteResult:
        """
        Execute a batch of moves atomically.

        All moves succeed together or all fail together. A batch is rejected
        if any unit or wallet is unregistered or if any non-system wallet
        would end up below the unit's min_balance.

        Returns:
            ExecuteResult.APPLIED if successful
            ExecuteResult.REJECTED if validation failed
        """
        moves = tuple(moves)
        if not moves:
            return ExecuteResult.APPLIED

        valid, reason = self._validate(moves)
        if not valid:
            if self.verbose:
                print(f"✗ REJECTED: {reason}")
            return ExecuteResult.REJECTED

        sequence = self._next_sequence
        self._next_sequence += 1
        self._execute_moves(moves)
        entry = LedgerEntry(moves=moves, block=self._current_block, sequence_number=sequence)
        self.transaction_log.append(entry)

        if self.verbose:
            summary = ", ".join(repr(m) for m in moves)
            print(f"✓ APPLIED #{sequence} @{self._current_block}: {summary}")
        return ExecuteResult.APPLIED

    def _validate(self, moves: Tuple[Move, ...]) -> Tuple[bool, str]:
        """
        Validate a batch against registration and balance constraints.

        Returns:
            (success, reason); reason is empty on success
        """
        for move in moves:
            if move.unit_symbol not in self.units:
                return False, f"unit not registered: {move.unit_symbol}"
            if move.source not in self.registered_wallets:
                return False, f"wallet not registered: {move.source}"
            if move.dest not in self.registered_wallets:
                return False, f"wallet not registered: {move.dest}"

        net: Dict[Tuple[str, str], int] = {}
        for move in moves:
            key_src = (move.source, move.unit_symbol)
            key_dst = (move.dest, move.unit_symbol)
            net[key_src] = net.get(key_src, 0) - move.quantity
            net[key_dst] = net.get(key_dst, 0) + move.quantity

        # SYSTEM_WALLET is exempt - it is the issuer
        for (wallet, unit_sym), delta in net.items():
            if wallet == SYSTEM_WALLET:
                continue
            proposed = self.balances[wallet].get(unit_sym, 0) + delta
            unit = self.units[unit_sym]
            if proposed < unit.min_balance:
                return False, f"{wallet} {unit_sym}: {proposed} < min {unit.min_balance}"

        return True, ""

    def _execute_moves(self, moves: Tuple[Move, ...]) -> None:
        for move in moves:
            self.balances[move.source][move.unit_symbol] -= move.quantity
            self.balances[move.dest][move.unit_symbol] += move.quantity

    # ========================================================================
    # SNAPSHOT / RESTORE
    # ========================================================================

    def snapshot(self) -> LedgerSnapshot:
        """
        Capture balances and log position for a later restore().

        Registrations are not captured: wallets and units are never removed.
        """
        frozen = tuple(
            (wallet, tuple(sorted(bals.items())))
            for wallet, bals in self.balances.items()
        )
        return LedgerSnapshot(
            balances=frozen,
            log_length=len(self.transaction_log),
            next_sequence=self._next_sequence,
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        """
        Roll balances and the audit trail back to a snapshot.

        Wallets registered after the snapshot keep their registration but
        their balances are cleared.
        """
        saved = {wallet: dict(items) for wallet, items in snapshot.balances}
        for wallet in self.registered_wallets:
            self.balances[wallet] = defaultdict(int, saved.get(wallet, {}))
        del self.transaction_log[snapshot.log_length:]
        self._next_sequence = snapshot.next_sequence

    def replay(self, until_block: Optional[int] = None) -> Ledger:
        """
        Rebuild a ledger by re-executing the audit trail.

        Args:
            until_block: Only replay entries executed at or before this height

        Returns:
            New Ledger with the replayed balances
        """
        new_ledger = Ledger(f"{self.name}_replayed", verbose=self.verbose)
        for unit in self.units.values():
            new_ledger.units[unit.symbol] = unit
        for wallet in self.registered_wallets:
            new_ledger.ensure_wallet(wallet)
        for entry in self.transaction_log:
            if until_block is not None and entry.block > until_block:
                break
            new_ledger.advance_to(entry.block)
            if new_ledger.execute(entry.moves) == ExecuteResult.REJECTED:
                raise PoolError(f"Replay failed at entry {entry.sequence_number}")
        return new_ledger
