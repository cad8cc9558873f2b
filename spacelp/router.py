"""User-facing router for the ETH/SPC pool.

The router is stateless. For each operation it moves the caller's assets
into the pool, invokes the pool, and then checks the realized result against
the caller's declared bounds. The pool does not enforce slippage limits; the
router does, after the fact, and a violation reverts the whole call.

Realized output is measured as the change in the caller's balance, so a
taxed SPC payout counts at what the caller actually received.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

from spacelp.errors import InsufficientETHAmount, InsufficientSPCAmount, SpaceLPError
from spacelp.ledger import AssetLedger
from spacelp.pool import LiquidityPool
from spacelp.pricing import constant_product
from spacelp.safe_int import S
from spacelp.types import normalize_address

if TYPE_CHECKING:
    from spacelp.chain import Chain

logger = structlog.get_logger()


class Router:
    """Deposit, withdraw and swap entry point for one pool."""

    def __init__(
        self,
        chain: Chain,
        pool: LiquidityPool,
        token: AssetLedger,
        address: str | None = None,
    ) -> None:
        self._chain = chain
        self._pool = pool
        self._token = token
        self._native = chain.native
        self.address = normalize_address(address or chain.new_address("router"))

    @property
    def pool(self) -> LiquidityPool:
        return self._pool

    @contextmanager
    def _call(self, operation: str, sender: str) -> Iterator[None]:
        """Run one router operation atomically, logging the reason if it reverts."""
        try:
            with self._chain.atomic():
                yield
        except SpaceLPError as err:
            logger.warning(
                "router_call_reverted",
                operation=operation,
                sender=sender,
                error=err.name,
                **err.args_dict(),
            )
            raise

    # --- Quotes ---

    def calc_optimal_amount(self, amount_desired: int, reserve_in: int, reserve_out: int) -> int:
        """Amount of the other asset that matches amount_desired at the current price.

        Raises:
            InputAmountInvalid: If amount_desired is zero
            ReservesAmountInvalid: If either reserve is zero
        """
        return constant_product.calc_optimal_amount(amount_desired, reserve_in, reserve_out)

    def get_amount_received(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Quote a swap with the pool's pricing formula and fee.

        Raises:
            InputAmountInvalid: If amount_in is zero
            ReservesAmountInvalid: If either reserve is zero
        """
        config = self._pool.config
        return constant_product.get_amount_out(
            amount_in,
            reserve_in,
            reserve_out,
            fee_multiplier=config.fee_multiplier,
            fee_base=config.swap_fee_base,
        )

    # --- Liquidity ---

    def deposit(self, token_amount_desired: int, *, sender: str, value: int = 0) -> int:
        """Deposit SPC (pulled via allowance) and attached ETH, minting shares to sender.

        No ratio check is applied: on a non-empty pool, the pool's proportional
        mint credits the scarcer side only.

        Returns:
            Shares minted

        Raises:
            InsufficientAllowance: If the router may not pull the SPC
            NoLiquidityProvided: If the deposit is worth no shares
        """
        sender = normalize_address(sender)
        with self._call("deposit", sender):
            self._token.transfer_from(self.address, sender, self._pool.address, token_amount_desired)
            if value:
                self._native.send(sender, self._pool.address, value)
            liquidity = self._pool.mint(sender, sender=self.address)

        logger.info(
            "router_deposit",
            sender=sender,
            spc_desired=token_amount_desired,
            eth=value,
            liquidity=liquidity,
        )
        return liquidity

    def withdraw(self, lp_amount: int, *, sender: str) -> tuple[int, int]:
        """Return lp_amount shares (pulled via allowance) to the pool and redeem them.

        Returns:
            (amount_eth, amount_spc) paid out by the pool

        Raises:
            InsufficientAllowance: If the router may not pull the shares
            InsufficientLiquidityBurned: If the shares are worth nothing
        """
        sender = normalize_address(sender)
        with self._call("withdraw", sender):
            self._pool.transfer_from(self.address, sender, self._pool.address, lp_amount)
            amount_eth, amount_spc = self._pool.burn(lp_amount, sender, sender=self.address)

        logger.info(
            "router_withdraw",
            sender=sender,
            liquidity=lp_amount,
            amount_eth=amount_eth,
            amount_spc=amount_spc,
        )
        return amount_eth, amount_spc

    # --- Swaps ---

    def swap_eth_for_spc(self, min_out: int, *, sender: str, value: int) -> int:
        """Swap the attached ETH for SPC, requiring at least min_out SPC received.

        Returns:
            SPC actually received by sender

        Raises:
            InsufficientSPCAmount: If sender received less than min_out
        """
        sender = normalize_address(sender)
        with self._call("swap_eth_for_spc", sender):
            before = self._token.balance_of(sender)
            self._native.send(sender, self._pool.address, value)
            self._pool.swap(sender, sender=self.address)
            received = S(self._token.balance_of(sender)).saturating_sub(before).value
            if received < min_out:
                raise InsufficientSPCAmount(received, min_out)

        logger.info("router_swap", sender=sender, direction="ETH_FOR_SPC", amount_in=value, amount_out=received)
        return received

    def swap_spc_for_eth(self, amount_in: int, min_out: int, *, sender: str) -> int:
        """Swap amount_in SPC (pulled via allowance) for ETH, requiring at least min_out ETH.

        Returns:
            ETH actually received by sender

        Raises:
            InsufficientETHAmount: If sender received less than min_out
        """
        sender = normalize_address(sender)
        with self._call("swap_spc_for_eth", sender):
            before = self._native.balance_of(sender)
            self._token.transfer_from(self.address, sender, self._pool.address, amount_in)
            self._pool.swap(sender, sender=self.address)
            received = S(self._native.balance_of(sender)).saturating_sub(before).value
            if received < min_out:
                raise InsufficientETHAmount(received, min_out)

        logger.info("router_swap", sender=sender, direction="SPC_FOR_ETH", amount_in=amount_in, amount_out=received)
        return received


__all__ = ["Router"]
