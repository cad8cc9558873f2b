"""Constant product pricing and LP share math.

The pool prices trades with the constant product formula x * y = k, taking
a proportional fee on the input (1% by default):

    amount_in_with_fee = amount_in * fee_multiplier
    amount_out = amount_in_with_fee * reserve_out // (reserve_in * fee_base + amount_in_with_fee)

Share issuance:
    first deposit:       isqrt(amount_eth * amount_spc)
    later deposits:      min(amount_eth * supply // reserve_eth, amount_spc * supply // reserve_spc)
    withdrawal (each):   liquidity * balance // supply

All math is integer-only and rounds down, in favour of the pool.
"""

from __future__ import annotations

from spacelp.constants import SWAP_FEE_BASE, SWAP_FEE_PERCENT
from spacelp.errors import InputAmountInvalid, ReservesAmountInvalid
from spacelp.safe_int import S

DEFAULT_FEE_MULTIPLIER = SWAP_FEE_BASE - SWAP_FEE_PERCENT


class ConstantProduct:
    """Constant product math shared by the pool (execution) and the router (quotes)."""

    def _check_quote_inputs(self, amount: int, reserve_in: int, reserve_out: int) -> None:
        if amount <= 0:
            raise InputAmountInvalid(amount)
        if reserve_in <= 0 or reserve_out <= 0:
            raise ReservesAmountInvalid(reserve_in, reserve_out)

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
        fee_base: int = SWAP_FEE_BASE,
    ) -> int:
        """Calculate output amount using the constant product formula.

        Args:
            amount_in: Input amount (before fee)
            reserve_in: Reserve of the input asset
            reserve_out: Reserve of the output asset
            fee_multiplier: Priced share of the input (default 99 for a 1% fee)
            fee_base: Fee denominator (default 100)

        Returns:
            Output amount, rounded down

        Raises:
            InputAmountInvalid: If amount_in is zero
            ReservesAmountInvalid: If either reserve is zero
        """
        self._check_quote_inputs(amount_in, reserve_in, reserve_out)

        amount_in_with_fee = S(amount_in) * S(fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(fee_base) + amount_in_with_fee

        return (numerator // denominator).value

    def calc_optimal_amount(self, amount_desired: int, reserve_in: int, reserve_out: int) -> int:
        """Amount of the other asset matching amount_desired at the current price.

        Raises:
            InputAmountInvalid: If amount_desired is zero
            ReservesAmountInvalid: If either reserve is zero
        """
        self._check_quote_inputs(amount_desired, reserve_in, reserve_out)
        return (S(amount_desired) * S(reserve_out) // S(reserve_in)).value

    def initial_liquidity(self, amount_eth: int, amount_spc: int) -> int:
        """Shares for the first deposit: the geometric mean of both amounts."""
        return (S(amount_eth) * S(amount_spc)).isqrt().value

    def proportional_liquidity(
        self,
        amount_eth: int,
        amount_spc: int,
        reserve_eth: int,
        reserve_spc: int,
        total_supply: int,
    ) -> int:
        """Shares for a later deposit, priced by the scarcer side.

        An unbalanced deposit is accepted but only credited for its smaller
        side; the excess is absorbed into reserves for all holders.
        """
        by_eth = S(amount_eth) * S(total_supply) // S(reserve_eth)
        by_spc = S(amount_spc) * S(total_supply) // S(reserve_spc)
        return by_eth.min(by_spc).value

    def pro_rata_amount(self, liquidity: int, balance: int, total_supply: int) -> int:
        """Share of balance owed for liquidity out of total_supply."""
        return (S(liquidity) * S(balance) // S(total_supply)).value


# Singleton instance
constant_product = ConstantProduct()


__all__ = ["ConstantProduct", "constant_product", "DEFAULT_FEE_MULTIPLIER"]
