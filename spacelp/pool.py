"""ETH/SPC constant product liquidity pool.

The pool never trusts declared amounts. Callers push assets to the pool's
address first, then call mint/burn/swap; the pool measures what actually
arrived as `balance - cached reserve`. This keeps the accounting correct
when SPC withholds a transfer tax or when someone donates to the pool.

The pool is itself the LP share ledger (TokenLedger). Burning works the
same way as depositing: shares are transferred to the pool's own address
first and burn redeems whatever the pool holds of itself.

mint, burn and swap:
- run as one atomic call on the chain (any failure restores everything)
- hold the pool lock for their whole duration, so a payout recipient that
  calls back into the pool fails with LiquidityPoolLocked
- set reserves to the actual post-transfer balances before returning
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

import structlog

from spacelp.config import DEFAULT_POOL_CONFIG, PoolConfig
from spacelp.errors import (
    BurnTransferEthToError,
    InsufficientInAmount,
    InsufficientLiquidityBurned,
    LiquidityPoolLocked,
    NativeTransferFailed,
    NoLiquidityInPool,
    NoLiquidityProvided,
    OnlyOneTokenInAllowed,
    ReservesAmountInvalid,
    SwapTransferEthToError,
)
from spacelp.events import Burned, Minted, SwapDirection, Swapped
from spacelp.ledger import AssetLedger, TokenLedger
from spacelp.pricing import constant_product
from spacelp.safe_int import S
from spacelp.types import normalize_address

if TYPE_CHECKING:
    from spacelp.chain import Chain

logger = structlog.get_logger()


class ReservePair(NamedTuple):
    """Cached pool balances as of the last mint/burn/swap."""

    reserve_eth: int
    reserve_spc: int

    @property
    def product(self) -> int:
        """The constant product k = reserve_eth * reserve_spc."""
        return self.reserve_eth * self.reserve_spc


@dataclass(frozen=True)
class SwapResult:
    """Result of a pool swap."""

    direction: SwapDirection
    amount_in: int
    amount_out: int


class LiquidityPool(TokenLedger):
    """Two-asset (ETH/SPC) pool and LP share ledger."""

    def __init__(
        self,
        chain: Chain,
        token: AssetLedger,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        address: str | None = None,
    ) -> None:
        super().__init__(chain, address or chain.new_address("liquidity-pool"), symbol="SPC-ETH-LP")
        self._token = token
        self._native = chain.native
        self._config = config
        self._reserve_eth = 0
        self._reserve_spc = 0
        # Not part of the snapshot: the lock guard releases it on every exit path
        self._locked = False

    # --- State ---

    def snapshot(self) -> tuple:
        return super().snapshot(), self._reserve_eth, self._reserve_spc

    def restore(self, snapshot: tuple) -> None:
        ledger_snapshot, self._reserve_eth, self._reserve_spc = snapshot
        super().restore(ledger_snapshot)

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def token(self) -> AssetLedger:
        return self._token

    @property
    def locked(self) -> bool:
        return self._locked

    def get_reserves(self) -> ReservePair:
        """Current cached reserves. Read-only, always succeeds."""
        return ReservePair(self._reserve_eth, self._reserve_spc)

    @contextmanager
    def _lock(self) -> Iterator[None]:
        if self._locked:
            logger.warning("pool_reentry_blocked", pool=self.address)
            raise LiquidityPoolLocked(self.address)
        self._locked = True
        try:
            yield
        finally:
            self._locked = False

    def _asset_balances(self) -> tuple[int, int]:
        return self._native.balance_of(self.address), self._token.balance_of(self.address)

    def _sync_reserves(self) -> None:
        self._reserve_eth, self._reserve_spc = self._asset_balances()

    def _receive_value(self, sender: str | None, value: int) -> None:
        if value == 0:
            return
        if sender is None:
            raise ValueError("sender is required when attaching value")
        self._native.send(sender, self.address, value)

    def _pay_eth(self, to: str, amount: int) -> None:
        self._native.send(self.address, to, amount)

    # --- Operations ---

    def mint(self, to: str, *, sender: str | None = None, value: int = 0) -> int:
        """Issue LP shares to `to` for the assets deposited since the last sync.

        Args:
            to: Recipient of the new shares
            sender: Account attaching `value` (required when value > 0)
            value: Native amount sent along with the call

        Returns:
            Number of shares minted

        Raises:
            NoLiquidityProvided: If nothing was deposited, or the deposit
                is worth zero shares
            LiquidityPoolLocked: If called while another operation is running
        """
        to = normalize_address(to)
        with self._chain.atomic():
            self._receive_value(sender, value)
            with self._lock():
                balance_eth, balance_spc = self._asset_balances()
                amount_eth = S(balance_eth).saturating_sub(self._reserve_eth).value
                amount_spc = S(balance_spc).saturating_sub(self._reserve_spc).value
                if amount_eth == 0 and amount_spc == 0:
                    raise NoLiquidityProvided(to)

                total_supply = self.total_supply
                if total_supply == 0:
                    liquidity = constant_product.initial_liquidity(amount_eth, amount_spc)
                else:
                    liquidity = constant_product.proportional_liquidity(
                        amount_eth,
                        amount_spc,
                        self._reserve_eth,
                        self._reserve_spc,
                        total_supply,
                    )
                if liquidity == 0:
                    raise NoLiquidityProvided(to)

                self._mint(to, liquidity)
                self._sync_reserves()
                self._chain.emit(Minted(self.address, to, amount_eth, amount_spc))

        logger.debug(
            "pool_minted",
            to=to,
            amount_eth=amount_eth,
            amount_spc=amount_spc,
            liquidity=liquidity,
        )
        return liquidity

    def burn(self, liquidity: int, to: str, *, sender: str | None = None) -> tuple[int, int]:
        """Redeem the shares held by the pool itself, paying both assets to `to`.

        The shares must have been transferred to the pool's address first.
        `liquidity` is what the caller expects to burn; the pool burns what it
        actually holds.

        Returns:
            (amount_eth, amount_spc) paid out

        Raises:
            NoLiquidityInPool: If no shares exist
            InsufficientLiquidityBurned: If either payout rounds to zero
            BurnTransferEthToError: If the ETH payout is rejected
            LiquidityPoolLocked: If called while another operation is running
        """
        to = normalize_address(to)
        with self._chain.atomic(), self._lock():
            total_supply = self.total_supply
            if total_supply == 0:
                raise NoLiquidityInPool()

            shares = self.balance_of(self.address)
            if shares != liquidity:
                logger.warning(
                    "burn_liquidity_mismatch",
                    sender=sender,
                    declared=liquidity,
                    held=shares,
                )

            balance_eth, balance_spc = self._asset_balances()
            amount_eth = constant_product.pro_rata_amount(shares, balance_eth, total_supply)
            amount_spc = constant_product.pro_rata_amount(shares, balance_spc, total_supply)
            if amount_eth == 0 or amount_spc == 0:
                raise InsufficientLiquidityBurned(amount_eth, amount_spc)

            self._burn(self.address, shares)
            self._token.transfer(self.address, to, amount_spc)
            try:
                self._pay_eth(to, amount_eth)
            except NativeTransferFailed as err:
                raise BurnTransferEthToError(to, amount_eth) from err

            self._sync_reserves()
            self._chain.emit(Burned(self.address, to, amount_eth, amount_spc))

        logger.debug(
            "pool_burned",
            to=to,
            liquidity=shares,
            amount_eth=amount_eth,
            amount_spc=amount_spc,
        )
        return amount_eth, amount_spc

    def swap(self, to: str, *, sender: str | None = None, value: int = 0) -> SwapResult:
        """Trade whichever asset was deposited since the last sync for the other.

        Args:
            to: Recipient of the output
            sender: Account attaching `value` (required when value > 0)
            value: Native amount sent along with the call (ETH in)

        Raises:
            OnlyOneTokenInAllowed: If both assets were deposited
            InsufficientInAmount: If neither asset was deposited
            ReservesAmountInvalid: If the pool has no reserves to price against
            SwapTransferEthToError: If the ETH payout is rejected
            LiquidityPoolLocked: If called while another operation is running
        """
        to = normalize_address(to)
        with self._chain.atomic():
            self._receive_value(sender, value)
            with self._lock():
                balance_eth, balance_spc = self._asset_balances()
                amount_in_eth = S(balance_eth).saturating_sub(self._reserve_eth).value
                amount_in_spc = S(balance_spc).saturating_sub(self._reserve_spc).value

                if amount_in_eth > 0 and amount_in_spc > 0:
                    raise OnlyOneTokenInAllowed(amount_in_eth, amount_in_spc)
                if amount_in_eth == 0 and amount_in_spc == 0:
                    raise InsufficientInAmount(amount_in_eth, amount_in_spc)

                if amount_in_eth > 0:
                    direction = SwapDirection.ETH_FOR_SPC
                    amount_in, reserve_in, reserve_out = amount_in_eth, self._reserve_eth, self._reserve_spc
                else:
                    direction = SwapDirection.SPC_FOR_ETH
                    amount_in, reserve_in, reserve_out = amount_in_spc, self._reserve_spc, self._reserve_eth
                if reserve_in == 0 or reserve_out == 0:
                    raise ReservesAmountInvalid(reserve_in, reserve_out)

                amount_out = constant_product.get_amount_out(
                    amount_in,
                    reserve_in,
                    reserve_out,
                    fee_multiplier=self._config.fee_multiplier,
                    fee_base=self._config.swap_fee_base,
                )

                amount_out_eth = amount_out_spc = 0
                if direction is SwapDirection.ETH_FOR_SPC:
                    amount_out_spc = amount_out
                    self._token.transfer(self.address, to, amount_out_spc)
                else:
                    amount_out_eth = amount_out
                    try:
                        self._pay_eth(to, amount_out_eth)
                    except NativeTransferFailed as err:
                        raise SwapTransferEthToError(to, amount_out_eth) from err

                self._sync_reserves()
                self._chain.emit(
                    Swapped(
                        self.address,
                        to,
                        direction,
                        amount_in_eth,
                        amount_in_spc,
                        amount_out_eth,
                        amount_out_spc,
                    )
                )

        logger.debug(
            "pool_swapped",
            to=to,
            direction=direction.value,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return SwapResult(direction=direction, amount_in=amount_in, amount_out=amount_out)


__all__ = ["LiquidityPool", "ReservePair", "SwapResult"]
