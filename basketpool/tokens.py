"""
tokens.py - Token Services over the Custody Ledger

Thin service handles the pool calls into:
    AssetToken: an underlying asset (transfer, transfer_from, balance_of, decimals)
    ShareToken: the pooled share token (mint, burn_from, balance_of, total_supply)
    ShareTokenFactory: creates and registers ShareTokens

Balances live on the Ledger. Issuance and redemption are moves from/to
SYSTEM_WALLET, so the ledger's double-entry check covers share supply too.
A move the ledger rejects surfaces here as TransferFailed.
"""

from __future__ import annotations
from typing import List

from .access import AccessControl, Role
from .core import (
    Move, Unit, ExecuteResult, SYSTEM_WALLET,
    TransferFailed,
)
from .ledger import Ledger


def _execute_transfer(ledger: Ledger, move: Move) -> None:
    if ledger.execute([move]) != ExecuteResult.APPLIED:
        raise TransferFailed(
            f"{move.unit_symbol} transfer of {move.quantity} "
            f"from {move.source} to {move.dest} rejected"
        )


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TransferFailed(f"amount must be int, got {type(amount)}")
    if amount < 0:
        raise TransferFailed(f"amount cannot be negative, got {amount}")


class AssetToken:
    """
    Handle to an underlying asset on the custody ledger.

    Zero-amount transfers succeed without touching the ledger.

    Example:
        weth = AssetToken(ledger, "WETH", "Wrapped Ether")
        weth.mint("alice", 10 ** 18)
        weth.transfer("alice", "bob", 5 * 10 ** 17)
    """

    def __init__(self, ledger: Ledger, symbol: str, name: str, decimals: int = 18):
        self.ledger = ledger
        self.symbol = symbol
        self.name = name
        if symbol not in ledger.units:
            ledger.register_unit(Unit(symbol=symbol, name=name, decimals=decimals))
        self._decimals = ledger.get_unit(symbol).decimals

    def decimals(self) -> int:
        return self._decimals

    def balance_of(self, account: str) -> int:
        if not self.ledger.is_registered(account):
            return 0
        return self.ledger.get_balance(account, self.symbol)

    def transfer_from(self, owner: str, to: str, amount: int) -> None:
        """Pull amount from owner into to (custody pull on the owner's behalf)."""
        _check_amount(amount)
        if amount == 0:
            return
        _execute_transfer(self.ledger, Move(amount, self.symbol, owner, to, f"{self.symbol}:transfer_from"))

    def mint(self, to: str, amount: int) -> None:
        """Issue new units to a wallet (test and setup faucet)."""
        _check_amount(amount)
        if amount == 0:
            return
        _execute_transfer(self.ledger, Move(amount, self.symbol, SYSTEM_WALLET, to, f"{self.symbol}:mint"))

    def __repr__(self) -> str:
        return f"AssetToken({self.symbol})"


class ShareToken:
    """
    Fungible pool-share token with role-gated mint and burn.

    The owner passed at creation holds ADMIN on the token and is the only
    account that can grant roles.
    """

    def __init__(self, ledger: Ledger, name: str, symbol: str, owner: str, decimals: int = 18):
        if not owner or not owner.strip():
            raise ValueError("ShareToken owner cannot be empty")
        self.ledger = ledger
        self.name = name
        self.symbol = symbol
        self.owner = owner
        ledger.register_unit(Unit(symbol=symbol, name=name, decimals=decimals))
        self._decimals = decimals
        self.access = AccessControl()
        self.access.grant_role(Role.ADMIN, owner)

    def decimals(self) -> int:
        return self._decimals

    def total_supply(self) -> int:
        return self.ledger.total_supply(self.symbol)

    def balance_of(self, account: str) -> int:
        if not self.ledger.is_registered(account):
            return 0
        return self.ledger.get_balance(account, self.symbol)

    def grant_role(self, caller: str, role: Role, account: str) -> None:
        self.access.require(Role.ADMIN, caller)
        self.access.grant_role(role, account)

    def revoke_role(self, caller: str, role: Role, account: str) -> None:
        self.access.require(Role.ADMIN, caller)
        self.access.revoke_role(role, account)

    def has_role(self, role: Role, account: str) -> bool:
        return self.access.has_role(role, account)

    def mint(self, caller: str, to: str, amount: int) -> None:
        self.access.require(Role.MINTER, caller)
        _check_amount(amount)
        if amount == 0:
            return
        _execute_transfer(self.ledger, Move(amount, self.symbol, SYSTEM_WALLET, to, f"{self.symbol}:mint"))

    def burn_from(self, caller: str, holder: str, amount: int) -> None:
        self.access.require(Role.BURNER, caller)
        _check_amount(amount)
        if amount == 0:
            return
        _execute_transfer(self.ledger, Move(amount, self.symbol, holder, SYSTEM_WALLET, f"{self.symbol}:burn"))

    def transfer(self, sender: str, to: str, amount: int) -> None:
        _check_amount(amount)
        if amount == 0:
            return
        _execute_transfer(self.ledger, Move(amount, self.symbol, sender, to, f"{self.symbol}:transfer"))

    def __repr__(self) -> str:
        return f"ShareToken({self.symbol}, supply={self.total_supply()})"


class ShareTokenFactory:
    """Creates ShareTokens on a ledger and remembers what it created."""

    def __init__(self, ledger: Ledger, decimals: int = 18):
        self.ledger = ledger
        self.decimals = decimals
        self.created: List[ShareToken] = []

    def create_share_token(self, name: str, symbol: str, owner: str) -> ShareToken:
        token = ShareToken(self.ledger, name, symbol, owner, decimals=self.decimals)
        self.created.append(token)
        return token
