"""
access.py - Role Membership and Capability Policy

Two pieces:
    AccessControl: a role-membership service (who holds which role).
    OPERATION_CAPABILITIES: a value-level policy naming the roles each
        LiquidityPool entry point requires.

The pool evaluates the policy once per operation, before any mutation, via
require_capabilities(). There is no inheritance-based gating.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Set

from .core import Unauthorized


class Role(str, Enum):
    """Capabilities that can be granted to a wallet."""
    ADMIN = "admin"       # top-level administration
    MINTER = "minter"     # may mint share units
    BURNER = "burner"     # may burn share units from a holder


_NONE: FrozenSet[Role] = frozenset()
_ADMIN_ONLY: FrozenSet[Role] = frozenset({Role.ADMIN})

# Roles required by each LiquidityPool entry point.
OPERATION_CAPABILITIES: Mapping[str, FrozenSet[Role]] = {
    "initialize_share_token": _ADMIN_ONLY,
    "set_loan_terms": _ADMIN_ONLY,
    "set_flash_fee_bps": _ADMIN_ONLY,
    "withdraw_admin_fees": _ADMIN_ONLY,
    "force_repay": _ADMIN_ONLY,
    "deposit": _NONE,
    "redeem": _NONE,
    "borrow": _NONE,
    "repay": _NONE,
    "flash_borrow": _NONE,
}


class AccessControl:
    """
    Role-membership service.

    Example:
        access = AccessControl()
        access.grant_role(Role.ADMIN, "treasury")
        access.has_role(Role.ADMIN, "treasury")   # True
        access.require(Role.ADMIN, "mallory")     # raises Unauthorized
    """

    def __init__(self):
        self._members: Dict[Role, Set[str]] = {role: set() for role in Role}

    def grant_role(self, role: Role, account: str) -> None:
        if not account or not account.strip():
            raise ValueError("Cannot grant a role to an empty account")
        self._members[Role(role)].add(account)

    def revoke_role(self, role: Role, account: str) -> None:
        self._members[Role(role)].discard(account)

    def has_role(self, role: Role, account: str) -> bool:
        return account in self._members[Role(role)]

    def members(self, role: Role) -> FrozenSet[str]:
        return frozenset(self._members[Role(role)])

    def require(self, role: Role, account: str) -> None:
        """Raise Unauthorized unless account holds role."""
        if not self.has_role(role, account):
            raise Unauthorized(f"{account} lacks role {Role(role).value}")


def require_capabilities(access: AccessControl, operation: str, caller: str) -> None:
    """
    Check every role the operation requires against the caller.

    Raises:
        KeyError: If the operation has no policy entry
        Unauthorized: If the caller lacks any required role
    """
    for role in sorted(OPERATION_CAPABILITIES[operation], key=lambda r: r.value):
        access.require(role, caller)
