"""
pool.py - The Basket Liquidity Pool

LiquidityPool is the only stateful component of the package. It owns:
    - the per-asset pool registry (AssetPool records, configured order)
    - the required-ratio vector
    - live loans, keyed by borrower
    - the loan terms table and the flash fee
    - the one-time share-token binding
    - the audit event log

Every mutating entry point runs inside _operation(), which
    1. refuses re-entry while another entry point is running,
    2. evaluates the capability policy once,
    3. snapshots all mutable state (custody ledger included),
    4. restores the snapshot if anything raises.
So an entry point either completes fully or leaves no trace.

Inside an entry point the order is always: validate, price (fees.py,
basket.py, loans.py), update records, move value through the token
services, emit events.

Thread Safety:
    Not thread-safe. Each thread should maintain its own LiquidityPool.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .access import AccessControl, Role, require_capabilities
from .basket import MintQuote, RedemptionQuote, compute_mint, compute_redemption
from .config import PoolConfig
from .core import (
    EventType, PoolEvent,
    BPS_DENOMINATOR, MIN_ASSETS, MAX_ASSETS,
    DuplicateLoan, InsufficientInput, InsufficientLiquidity, InvalidAsset,
    InvalidConfiguration, LoanNotExpired, NativeValueRejected, NoActiveLoan,
    NotInitialized, ReentrantCall,
)
from .fees import LoanTerms, calculate_flash_fee
from .flash import FlashReceiver, verify_flash_repayment
from .ledger import Ledger, LedgerSnapshot
from .loans import (
    Loan, LoanTerm, RepaymentQuote,
    compute_collateral, compute_forced_repayment, compute_repayment,
    is_expired, loan_maturity,
)
from .pool_ledger import (
    AssetPool,
    aggregate_available_liquidity, aggregate_total_deposits, available_liquidity,
    distribute_fee, token_list,
    with_admin_fee_withdrawal, with_borrow, with_deposit, with_holder_fee_claim,
    with_repayment, with_withdrawal,
)
from .tokens import AssetToken, ShareToken, ShareTokenFactory


DEFAULT_POOL_ADDRESS = "basket_pool"


@dataclass(frozen=True, slots=True)
class _PoolSnapshot:
    pools: Tuple[Tuple[str, AssetPool], ...]
    loans: Tuple[Tuple[str, Loan], ...]
    loan_terms: Tuple[Tuple[LoanTerm, LoanTerms], ...]
    flash_fee_bps: int
    share_token: Optional[ShareToken]
    event_count: int
    ledger: LedgerSnapshot


def _resolve_term(loan_term: Any, error: type = InsufficientInput) -> LoanTerm:
    try:
        return LoanTerm(loan_term)
    except ValueError:
        raise error(f"Unknown loan term {loan_term!r}") from None


class LiquidityPool:
    """
    Multi-asset basket pool with collateralized and flash lending.

    Example:
        ledger = Ledger("main", verbose=False)
        usdc = AssetToken(ledger, "USDC", "USD Coin", decimals=6)
        weth = AssetToken(ledger, "WETH", "Wrapped Ether")
        pool = LiquidityPool(
            ledger, [usdc, weth], [2_000, 1],
            factory=ShareTokenFactory(ledger), admin="treasury",
        )
        pool.initialize_share_token("treasury", token_admin="treasury")
        shares = pool.deposit("alice", [20_000, 10])
    """

    def __init__(
        self,
        ledger: Ledger,
        assets: Sequence[AssetToken],
        required_ratios: Sequence[int],
        factory: Optional[ShareTokenFactory],
        admin: str,
        config: Optional[PoolConfig] = None,
        address: str = DEFAULT_POOL_ADDRESS,
        verbose: bool = True,
    ):
        """
        Create a pool over a fixed basket of assets.

        Args:
            ledger: Custody ledger shared with the asset tokens
            assets: Asset tokens, in the order deposits list their amounts
            required_ratios: Amount of each asset backing one unit-share
            factory: Creates the share token on initialize_share_token()
            admin: Wallet granted the pool's ADMIN role
            config: Tunables (defaults to PoolConfig())
            address: The pool's own custody wallet
            verbose: Print each audit event (default: True)

        Raises:
            InvalidConfiguration: Asset count outside [2, 10], ratio vector
                length mismatch, non-positive ratio, duplicate asset, asset on
                another ledger, missing factory or empty admin
        """
        if not (MIN_ASSETS <= len(assets) <= MAX_ASSETS):
            raise InvalidConfiguration(
                f"Asset count must be within [{MIN_ASSETS}, {MAX_ASSETS}], got {len(assets)}"
            )
        if len(required_ratios) != len(assets):
            raise InvalidConfiguration(
                f"Expected {len(assets)} required ratios, got {len(required_ratios)}"
            )
        if any(isinstance(r, bool) or not isinstance(r, int) or r <= 0 for r in required_ratios):
            raise InvalidConfiguration(f"Required ratios must be positive ints, got {list(required_ratios)}")
        symbols = [asset.symbol for asset in assets]
        if len(set(symbols)) != len(symbols):
            raise InvalidConfiguration(f"Duplicate assets in {symbols}")
        if any(asset.ledger is not ledger for asset in assets):
            raise InvalidConfiguration("Every asset must live on the pool's ledger")
        if factory is None:
            raise InvalidConfiguration("Share token factory is required")
        if not admin or not admin.strip():
            raise InvalidConfiguration("Admin address is required")
        if not address or not address.strip():
            raise InvalidConfiguration("Pool address is required")

        self.ledger = ledger
        self.address = address
        self.config = config or PoolConfig()
        self.factory = factory
        self.verbose = verbose
        self.access = AccessControl()
        self.access.grant_role(Role.ADMIN, admin)

        self._assets: Dict[str, AssetToken] = {asset.symbol: asset for asset in assets}
        self._pools: Dict[str, AssetPool] = {symbol: AssetPool(asset=symbol) for symbol in symbols}
        self._ratios: Tuple[int, ...] = tuple(required_ratios)
        self._loans: Dict[str, Loan] = {}
        self._loan_terms: Dict[LoanTerm, LoanTerms] = dict(self.config.loan_terms)
        self._flash_fee_bps: int = self.config.flash_fee_bps
        self._share_token: Optional[ShareToken] = None
        self.events: List[PoolEvent] = []
        self._entered = False

        ledger.ensure_wallet(address)
        for symbol, token in self._assets.items():
            self._emit(EventType.POOL_ADDED, asset=symbol, decimals=token.decimals())
        self._emit(EventType.REQUIRED_RATIOS_SET, assets=tuple(symbols), ratios=self._ratios)

    # ========================================================================
    # OPERATION GUARD
    # ========================================================================

    @contextmanager
    def _operation(self, name: str, caller: str) -> Iterator[None]:
        if self._entered:
            raise ReentrantCall(f"{name} called while another pool operation is running")
        self._entered = True
        try:
            require_capabilities(self.access, name, caller)
            snapshot = self._snapshot()
            try:
                yield
            except BaseException:
                self._restore(snapshot)
                if self.verbose:
                    print(f"✗ REVERTED: {name} by {caller}")
                raise
        finally:
            self._entered = False

    def _snapshot(self) -> _PoolSnapshot:
        return _PoolSnapshot(
            pools=tuple(self._pools.items()),
            loans=tuple(self._loans.items()),
            loan_terms=tuple(self._loan_terms.items()),
            flash_fee_bps=self._flash_fee_bps,
            share_token=self._share_token,
            event_count=len(self.events),
            ledger=self.ledger.snapshot(),
        )

    def _restore(self, snapshot: _PoolSnapshot) -> None:
        self._pools = dict(snapshot.pools)
        self._loans = dict(snapshot.loans)
        self._loan_terms = dict(snapshot.loan_terms)
        self._flash_fee_bps = snapshot.flash_fee_bps
        self._share_token = snapshot.share_token
        del self.events[snapshot.event_count:]
        self.ledger.restore(snapshot.ledger)

    def _emit(self, event_type: EventType, **data: Any) -> PoolEvent:
        event = PoolEvent(
            event_type=event_type,
            sequence=len(self.events),
            block=self.ledger.current_block,
            data=data,
        )
        self.events.append(event)
        if self.verbose:
            print(f"📣 {event!r}")
        return event

    def _pool(self, asset: str) -> AssetPool:
        if asset not in self._pools:
            raise InvalidAsset(f"Unknown asset {asset}")
        return self._pools[asset]

    def _require_share_token(self) -> ShareToken:
        if self._share_token is None:
            raise NotInitialized("Share token has not been initialized")
        return self._share_token

    def _book_fee(self, asset: str, fee: int, admin_fee_bps: int) -> None:
        self._pools[asset], split = distribute_fee(self._pools[asset], fee, admin_fee_bps)
        self._emit(
            EventType.FEE_DISTRIBUTED,
            asset=asset, fee=fee,
            admin_share=split.admin_share, holder_share=split.holder_share,
        )

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    @property
    def now(self) -> int:
        return self.ledger.current_block

    @property
    def share_token(self) -> Optional[ShareToken]:
        return self._share_token

    @property
    def is_initialized(self) -> bool:
        return self._share_token is not None

    @property
    def required_ratios(self) -> Tuple[int, ...]:
        return self._ratios

    @property
    def flash_fee_bps(self) -> int:
        return self._flash_fee_bps

    def tokens(self) -> List[str]:
        """Asset symbols in configured order."""
        return token_list(self._pools.values())

    def get_asset(self, asset: str) -> AssetToken:
        self._pool(asset)
        return self._assets[asset]

    def get_pool(self, asset: str) -> AssetPool:
        return self._pool(asset)

    def pools(self) -> Tuple[AssetPool, ...]:
        return tuple(self._pools.values())

    def available_liquidity(self, asset: str) -> int:
        return available_liquidity(self._pool(asset))

    def total_available_liquidity(self) -> int:
        return aggregate_available_liquidity(self._pools.values())

    def total_deposits(self) -> int:
        return aggregate_total_deposits(self._pools.values())

    def custody_balance(self, asset: str) -> int:
        return self.get_asset(asset).balance_of(self.address)

    def get_loan(self, borrower: str) -> Optional[Loan]:
        """The borrower's live loan, or None."""
        return self._loans.get(borrower)

    def has_active_loan(self, borrower: str) -> bool:
        return borrower in self._loans

    def get_loan_terms(self, loan_term: LoanTerm) -> LoanTerms:
        return self._loan_terms[_resolve_term(loan_term)]

    def loan_terms(self) -> Dict[LoanTerm, LoanTerms]:
        return dict(self._loan_terms)

    def _live_loan(self, borrower: str) -> Loan:
        loan = self._loans.get(borrower)
        if loan is None:
            raise NoActiveLoan(f"{borrower} has no active loan")
        return loan

    def loan_maturity(self, borrower: str) -> int:
        """Block at which the borrower's loan can be force-repaid."""
        loan = self._live_loan(borrower)
        return loan_maturity(loan, self._loan_terms[loan.loan_term])

    def is_loan_expired(self, borrower: str) -> bool:
        loan = self._live_loan(borrower)
        return is_expired(loan, self._loan_terms[loan.loan_term], self.now)

    def loan_due(self, borrower: str) -> RepaymentQuote:
        """What a voluntary repay() would settle right now."""
        loan = self._live_loan(borrower)
        return compute_repayment(
            loan, self._loan_terms[loan.loan_term],
            self.config.time_units_per_year, self.config.minimum_fee_bps,
        )

    def preview_deposit(self, amounts: Sequence[int]) -> MintQuote:
        return compute_mint(list(amounts), self._ratios)

    def preview_redeem(self, share_amount: int) -> RedemptionQuote:
        share_token = self._require_share_token()
        return compute_redemption(list(self._pools.values()), share_amount, share_token.total_supply())

    def events_of(self, event_type: EventType) -> List[PoolEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def verify_invariants(self) -> Dict[str, Any]:
        """
        Check every pool record against custody.

        Each asset's custody balance should cover what the records say the
        pool owes: available liquidity, both fee balances and the collateral
        locked by open loans.

        Returns:
            Dict with keys:
            - 'valid': bool - True if no asset is short
            - 'shortfalls': List[Dict] - asset, custody, owed for each short asset
        """
        locked: Dict[str, int] = {symbol: 0 for symbol in self._pools}
        for loan in self._loans.values():
            locked[loan.asset] += loan.collateral

        shortfalls = []
        for symbol, pool in self._pools.items():
            owed = available_liquidity(pool) + pool.admin_fees + pool.holder_fees + locked[symbol]
            custody = self.custody_balance(symbol)
            if custody < owed:
                shortfalls.append({'asset': symbol, 'custody': custody, 'owed': owed})
        return {'valid': len(shortfalls) == 0, 'shortfalls': shortfalls}

    # ========================================================================
    # BASKET MINT / REDEEM
    # ========================================================================

    def deposit(self, caller: str, amounts: Sequence[int]) -> int:
        """
        Deposit a basket and receive shares.

        Only the exact multiple of the required ratios is pulled; any surplus
        stays with the caller.

        Args:
            caller: Depositing wallet
            amounts: One amount per asset, in configured order

        Returns:
            Share units minted (mint_units * 10**share_decimals)

        Raises:
            NotInitialized: Share token not bound yet
            InsufficientInput: Wrong length, amount below ratio, zero mint
            TransferFailed: Caller cannot cover the pull
        """
        with self._operation("deposit", caller):
            share_token = self._require_share_token()
            quote = compute_mint(list(amounts), self._ratios)

            for symbol, amount in zip(self._pools, quote.pulled):
                self._pools[symbol] = with_deposit(self._pools[symbol], amount)
            for symbol, amount in zip(self._pools, quote.pulled):
                self._assets[symbol].transfer_from(caller, self.address, amount)

            shares = quote.mint_units * 10 ** share_token.decimals()
            share_token.mint(self.address, caller, shares)
            self._emit(EventType.DEPOSIT, depositor=caller, amounts=quote.pulled, shares=shares)
            return shares

    def redeem(self, caller: str, share_amount: int) -> Tuple[int, ...]:
        """
        Burn shares for a proportional slice of every pool plus holder fees.

        Returns:
            Amount paid out per asset, in configured order

        Raises:
            NotInitialized: Share token not bound yet
            InsufficientInput: share_amount <= 0 or above the caller's balance
            InsufficientLiquidity: Custody cannot cover a payout
        """
        with self._operation("redeem", caller):
            share_token = self._require_share_token()
            if share_amount <= 0:
                raise InsufficientInput(f"Share amount must be positive, got {share_amount}")
            balance = share_token.balance_of(caller)
            if balance < share_amount:
                raise InsufficientInput(f"{caller} holds {balance} shares, cannot redeem {share_amount}")

            supply = share_token.total_supply()
            quote = compute_redemption(list(self._pools.values()), share_amount, supply)
            share_token.burn_from(self.address, caller, share_amount)

            returned = []
            for payout in quote.payouts:
                pool = with_withdrawal(self._pools[payout.asset], payout.deposit_portion)
                if payout.fee_portion:
                    pool = with_holder_fee_claim(pool, payout.fee_portion)
                    self._emit(EventType.FEE_CLAIMED, holder=caller, asset=payout.asset, amount=payout.fee_portion)
                self._pools[payout.asset] = pool

                token = self._assets[payout.asset]
                custody = token.balance_of(self.address)
                if custody < payout.total:
                    raise InsufficientLiquidity(
                        f"{payout.asset}: custody {custody} cannot cover payout {payout.total}"
                    )
                token.transfer(self.address, caller, payout.total)
                returned.append(payout.total)

            self._emit(EventType.REDEEM, holder=caller, shares=share_amount, amounts=tuple(returned))
            return tuple(returned)

    # ========================================================================
    # COLLATERALIZED LOANS
    # ========================================================================

    def borrow(self, caller: str, asset: str, amount: int, loan_term: LoanTerm = LoanTerm.SHORT) -> Loan:
        """
        Open a loan against same-asset collateral.

        The caller posts amount * collateralization_ratio // 100 of the asset
        and receives amount.

        Raises:
            InvalidAsset: Unknown asset
            InsufficientInput: amount <= 0 or unknown loan term
            DuplicateLoan: Caller already has a live loan
            InsufficientLiquidity: Pool cannot lend amount
            TransferFailed: Caller cannot post the collateral
        """
        with self._operation("borrow", caller):
            pool = self._pool(asset)
            term = _resolve_term(loan_term)
            collateral = compute_collateral(amount, self.config.collateralization_ratio)
            if caller in self._loans:
                raise DuplicateLoan(f"{caller} already has an active loan")
            if available_liquidity(pool) < amount:
                raise InsufficientLiquidity(
                    f"{asset}: borrow {amount} exceeds available {available_liquidity(pool)}"
                )

            self._pools[asset] = with_borrow(pool, amount)
            loan = Loan(amount=amount, collateral=collateral, borrow_time=self.now, loan_term=term, asset=asset)
            self._loans[caller] = loan

            token = self._assets[asset]
            token.transfer_from(caller, self.address, collateral)
            token.transfer(self.address, caller, amount)
            self._emit(
                EventType.BORROW,
                borrower=caller, asset=asset, amount=amount,
                collateral=collateral, loan_term=term, borrow_time=loan.borrow_time,
            )
            return loan

    def repay(self, caller: str) -> RepaymentQuote:
        """
        Close the caller's loan; the collateral covers principal plus fee.

        Can be called at any time. The fee is the full-term fee either way.

        Raises:
            NoActiveLoan: Caller has no live loan
            FeeExceedsCollateral: Collateral cannot cover principal + fee
        """
        with self._operation("repay", caller):
            loan = self._live_loan(caller)
            quote = compute_repayment(
                loan, self._loan_terms[loan.loan_term],
                self.config.time_units_per_year, self.config.minimum_fee_bps,
            )
            self._pools[loan.asset] = with_repayment(self._pools[loan.asset], loan.amount)
            self._book_fee(loan.asset, quote.fee, self.config.admin_fee_bps)
            del self._loans[caller]

            self._assets[loan.asset].transfer(self.address, caller, quote.net_return)
            self._emit(
                EventType.REPAY,
                borrower=caller, asset=loan.asset, amount=loan.amount,
                fee=quote.fee, returned=quote.net_return,
            )
            return quote

    def force_repay(self, caller: str, borrower: str) -> RepaymentQuote:
        """
        Administrator settlement of a matured loan.

        The collateral absorbs only the fee; the rest goes back to the
        borrower and the principal is written off the borrowed total.

        Raises:
            Unauthorized: Caller is not an administrator
            NoActiveLoan: Borrower has no live loan
            LoanNotExpired: now < borrow_time + duration
            FeeExceedsCollateral: Fee above the collateral
        """
        with self._operation("force_repay", caller):
            loan = self._live_loan(borrower)
            terms = self._loan_terms[loan.loan_term]
            if not is_expired(loan, terms, self.now):
                raise LoanNotExpired(
                    f"{borrower}'s loan matures at block {loan_maturity(loan, terms)}, now {self.now}"
                )
            quote = compute_forced_repayment(
                loan, terms, self.config.time_units_per_year, self.config.minimum_fee_bps,
            )
            self._pools[loan.asset] = with_repayment(self._pools[loan.asset], loan.amount)
            self._book_fee(loan.asset, quote.fee, self.config.admin_fee_bps)
            del self._loans[borrower]

            self._assets[loan.asset].transfer(self.address, borrower, quote.net_return)
            self._emit(
                EventType.FORCE_REPAY,
                admin=caller, borrower=borrower, asset=loan.asset,
                amount=loan.amount, fee=quote.fee, returned=quote.net_return,
            )
            return quote

    # ========================================================================
    # FLASH LOANS
    # ========================================================================

    def flash_borrow(
        self,
        caller: str,
        asset: str,
        amount: int,
        receiver: FlashReceiver,
        params: Any = None,
    ) -> int:
        """
        Lend amount to receiver for the duration of one callback.

        Returns:
            The fee collected

        Raises:
            InvalidAsset: Unknown asset
            InvalidConfiguration: receiver does not implement FlashReceiver
            InsufficientInput: amount <= 0
            InsufficientLiquidity: Pool cannot lend amount
            UnrepaidFlashLoan: Custody did not grow by the fee
        """
        with self._operation("flash_borrow", caller):
            pool = self._pool(asset)
            if not isinstance(receiver, FlashReceiver):
                raise InvalidConfiguration(f"{receiver!r} is not a flash receiver")
            if amount <= 0:
                raise InsufficientInput(f"Flash amount must be positive, got {amount}")
            if available_liquidity(pool) < amount:
                raise InsufficientLiquidity(
                    f"{asset}: flash loan {amount} exceeds available {available_liquidity(pool)}"
                )

            fee = calculate_flash_fee(amount, self._flash_fee_bps)
            token = self._assets[asset]
            balance_before = token.balance_of(self.address)
            token.transfer(self.address, receiver.address, amount)
            receiver.execute_operation(asset, amount, fee, caller, params)
            balance_after = token.balance_of(self.address)
            verify_flash_repayment(asset, balance_before, balance_after, fee)

            self._emit(
                EventType.FLASH_LOAN,
                receiver=receiver.address, initiator=caller, asset=asset, amount=amount, fee=fee,
            )
            self._book_fee(asset, fee, self.config.flash_admin_fee_bps)
            return fee

    # ========================================================================
    # ADMINISTRATION
    # ========================================================================

    def initialize_share_token(self, caller: str, token_admin: str) -> ShareToken:
        """
        Create and bind the share token. Can only succeed once.

        The pool gets MINTER and BURNER on the new token; token_admin gets
        ADMIN on it.

        Raises:
            Unauthorized: Caller is not an administrator
            InvalidConfiguration: Already bound, token_admin is empty, or the
                share symbol is already a unit on the ledger
        """
        with self._operation("initialize_share_token", caller):
            if self._share_token is not None:
                raise InvalidConfiguration("Share token already initialized")
            if not token_admin or not token_admin.strip():
                raise InvalidConfiguration("Share token admin is required")
            if self.config.share_symbol in self.ledger.units:
                raise InvalidConfiguration(
                    f"Share symbol {self.config.share_symbol} is already registered on the ledger"
                )

            token = self.factory.create_share_token(
                self.config.share_name, self.config.share_symbol, owner=self.address,
            )
            token.grant_role(self.address, Role.MINTER, self.address)
            token.grant_role(self.address, Role.BURNER, self.address)
            token.grant_role(self.address, Role.ADMIN, token_admin)
            self._share_token = token
            self._emit(EventType.SHARE_TOKEN_SET, token=token.symbol, admin=token_admin)
            return token

    def set_loan_terms(self, caller: str, loan_term: LoanTerm, duration: int, rate_bps: int) -> LoanTerms:
        """
        Replace one tier of the loan terms table.

        Open loans on that tier are priced with the new terms when they settle.
        """
        with self._operation("set_loan_terms", caller):
            term = _resolve_term(loan_term, InvalidConfiguration)
            try:
                terms = LoanTerms(duration=duration, rate_bps=rate_bps)
            except ValueError as e:
                raise InvalidConfiguration(str(e)) from e
            self._loan_terms[term] = terms
            self._emit(EventType.LOAN_TERMS_SET, loan_term=term, duration=duration, rate_bps=rate_bps)
            return terms

    def set_flash_fee_bps(self, caller: str, new_fee_bps: int) -> None:
        with self._operation("set_flash_fee_bps", caller):
            if new_fee_bps < 0 or new_fee_bps > BPS_DENOMINATOR:
                raise InvalidConfiguration(f"Flash fee must be within [0, {BPS_DENOMINATOR}] bps, got {new_fee_bps}")
            old = self._flash_fee_bps
            self._flash_fee_bps = new_fee_bps
            self._emit(EventType.FLASH_FEE_SET, old_fee_bps=old, new_fee_bps=new_fee_bps)

    def withdraw_admin_fees(self, caller: str, asset: str) -> int:
        """
        Pay the asset's whole admin fee balance to the calling administrator.

        Raises:
            Unauthorized: Caller is not an administrator
            InvalidAsset: Unknown asset
            InsufficientInput: Nothing to withdraw
        """
        with self._operation("withdraw_admin_fees", caller):
            self._pools[asset], amount = with_admin_fee_withdrawal(self._pool(asset))
            self._assets[asset].transfer(self.address, caller, amount)
            self._emit(EventType.ADMIN_FEES_WITHDRAWN, admin=caller, asset=asset, amount=amount)
            return amount

    def receive_native(self, sender: str, amount: int) -> None:
        """The pool never accepts bare native value."""
        raise NativeValueRejected(f"Pool does not accept native value ({amount} from {sender})")

    def __repr__(self) -> str:
        return f"LiquidityPool({self.address}, assets={self.tokens()}, loans={len(self._loans)})"
