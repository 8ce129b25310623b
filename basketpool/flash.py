"""
flash.py - Flash Settlement

A flash loan hands `amount` to a receiver, calls the receiver back, and
checks that the pool's custody balance grew by at least the fee by the time
the callback returns:

    balance_after >= balance_before + fee

The receiver is the only place where outside code runs during a pool
operation. LiquidityPool does no bookkeeping between the outbound transfer
and the callback return, and rolls the whole operation back (outbound
transfer included) if the check fails.
"""

from __future__ import annotations
from typing import Any, Protocol, runtime_checkable

from .core import UnrepaidFlashLoan


@runtime_checkable
class FlashReceiver(Protocol):
    """
    Callback target of LiquidityPool.flash_borrow().

    The receiver holds the borrowed amount in its `address` wallet during
    execute_operation() and must send amount + fee back to the pool before
    returning.
    """

    address: str

    def execute_operation(
        self,
        asset: str,
        amount: int,
        fee: int,
        initiator: str,
        params: Any,
    ) -> None:
        ...


def verify_flash_repayment(asset: str, balance_before: int, balance_after: int, fee: int) -> None:
    """
    Raises:
        UnrepaidFlashLoan: If custody did not grow by at least fee
    """
    if balance_after < balance_before + fee:
        raise UnrepaidFlashLoan(
            f"{asset}: custody balance {balance_after} below required {balance_before + fee}"
        )
