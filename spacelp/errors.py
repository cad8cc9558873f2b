"""Typed errors raised by the pool, the router and the ledgers.

Each error carries the addresses and amounts involved as attributes, and
exposes them through args_dict() so callers (and the API layer) can handle
failures programmatically.
"""

from __future__ import annotations


class SpaceLPError(Exception):
    """Base error for pool, router and ledger operations."""

    def __init__(self, message: str, **fields: int | str) -> None:
        super().__init__(message)
        self._fields = fields

    @property
    def name(self) -> str:
        return type(self).__name__

    def args_dict(self) -> dict[str, int | str]:
        """Return the error's structured fields."""
        return dict(self._fields)


# --- Input validation ---


class InputValidationError(SpaceLPError):
    """Caller input is unusable: zero amounts, zero reserves, ambiguous input."""

    pass


class InputAmountInvalid(InputValidationError):
    """Quoted input amount is zero."""

    def __init__(self, amount: int) -> None:
        super().__init__(f"Input amount must be positive, got {amount}", amount=amount)
        self.amount = amount


class ReservesAmountInvalid(InputValidationError):
    """One of the reserves used for pricing is zero."""

    def __init__(self, reserve_in: int, reserve_out: int) -> None:
        super().__init__(
            f"Reserves must be positive, got ({reserve_in}, {reserve_out})",
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )
        self.reserve_in = reserve_in
        self.reserve_out = reserve_out


class NoLiquidityProvided(InputValidationError):
    """Mint found nothing (or not enough) deposited to issue shares."""

    def __init__(self, to: str) -> None:
        super().__init__(f"No liquidity provided for {to}", to=to)
        self.to = to


class OnlyOneTokenInAllowed(InputValidationError):
    """Swap found both assets pre-funded."""

    def __init__(self, amount_in_eth: int, amount_in_spc: int) -> None:
        super().__init__(
            f"Only one asset may be swapped in, got ETH={amount_in_eth} SPC={amount_in_spc}",
            amount_in_eth=amount_in_eth,
            amount_in_spc=amount_in_spc,
        )
        self.amount_in_eth = amount_in_eth
        self.amount_in_spc = amount_in_spc


class InsufficientInAmount(InputValidationError):
    """Swap found neither asset pre-funded."""

    def __init__(self, amount_in_eth: int, amount_in_spc: int) -> None:
        super().__init__(
            f"No input amount for swap, got ETH={amount_in_eth} SPC={amount_in_spc}",
            amount_in_eth=amount_in_eth,
            amount_in_spc=amount_in_spc,
        )
        self.amount_in_eth = amount_in_eth
        self.amount_in_spc = amount_in_spc


# --- Pool state ---


class PoolStateError(SpaceLPError):
    """Operation is inconsistent with the pool's current state."""

    pass


class NoLiquidityInPool(PoolStateError):
    """Burn called while no shares exist."""

    def __init__(self) -> None:
        super().__init__("Pool has no liquidity")


class InsufficientLiquidityBurned(PoolStateError):
    """Burn would pay out zero of one of the assets."""

    def __init__(self, amount_eth: int, amount_spc: int) -> None:
        super().__init__(
            f"Insufficient liquidity burned: ETH={amount_eth} SPC={amount_spc}",
            amount_eth=amount_eth,
            amount_spc=amount_spc,
        )
        self.amount_eth = amount_eth
        self.amount_spc = amount_spc


class LiquidityPoolLocked(PoolStateError):
    """A mint, burn or swap was entered while another is in progress."""

    def __init__(self, pool: str) -> None:
        super().__init__(f"Liquidity pool {pool} is locked", pool=pool)
        self.pool = pool


# --- Transfers ---


class TransferError(SpaceLPError):
    """An asset transfer could not be completed."""

    pass


class InsufficientBalance(TransferError):
    """Ledger balance too low for a transfer."""

    def __init__(self, owner: str, balance: int, needed: int) -> None:
        super().__init__(
            f"{owner} has {balance}, needs {needed}",
            owner=owner,
            balance=balance,
            needed=needed,
        )
        self.owner = owner
        self.balance = balance
        self.needed = needed


class InsufficientAllowance(TransferError):
    """Spender's allowance too low for a transfer_from."""

    def __init__(self, owner: str, spender: str, allowance: int, needed: int) -> None:
        super().__init__(
            f"{spender} may spend {allowance} of {owner}, needs {needed}",
            owner=owner,
            spender=spender,
            allowance=allowance,
            needed=needed,
        )
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed


class NativeTransferFailed(TransferError):
    """The recipient of a native payout rejected it."""

    def __init__(self, to: str, amount: int) -> None:
        super().__init__(f"Native transfer of {amount} to {to} failed", to=to, amount=amount)
        self.to = to
        self.amount = amount


class BurnTransferEthToError(TransferError):
    """ETH payout to the burn recipient failed."""

    def __init__(self, to: str, amount: int) -> None:
        super().__init__(f"Burn ETH payout of {amount} to {to} failed", to=to, amount=amount)
        self.to = to
        self.amount = amount


class SwapTransferEthToError(TransferError):
    """ETH payout to the swap recipient failed."""

    def __init__(self, to: str, amount: int) -> None:
        super().__init__(f"Swap ETH payout of {amount} to {to} failed", to=to, amount=amount)
        self.to = to
        self.amount = amount


# --- Router slippage policy ---


class SlippageError(SpaceLPError):
    """Realized output is below the caller's declared minimum."""

    def __init__(self, asset: str, actual_out: int, min_out: int) -> None:
        super().__init__(
            f"Received {actual_out} {asset}, minimum was {min_out}",
            actual_out=actual_out,
            min_out=min_out,
        )
        self.actual_out = actual_out
        self.min_out = min_out


class InsufficientSPCAmount(SlippageError):
    """ETH→SPC swap paid out less SPC than min_out."""

    def __init__(self, actual_out: int, min_out: int) -> None:
        super().__init__("SPC", actual_out, min_out)


class InsufficientETHAmount(SlippageError):
    """SPC→ETH swap paid out less ETH than min_out."""

    def __init__(self, actual_out: int, min_out: int) -> None:
        super().__init__("ETH", actual_out, min_out)


# --- Ledger administration ---


class MustBeOwner(SpaceLPError):
    """Caller is not the ledger owner."""

    def __init__(self, caller: str) -> None:
        super().__init__(f"{caller} is not the owner", caller=caller)
        self.caller = caller


__all__ = [
    "SpaceLPError",
    "InputValidationError",
    "InputAmountInvalid",
    "ReservesAmountInvalid",
    "NoLiquidityProvided",
    "OnlyOneTokenInAllowed",
    "InsufficientInAmount",
    "PoolStateError",
    "NoLiquidityInPool",
    "InsufficientLiquidityBurned",
    "LiquidityPoolLocked",
    "TransferError",
    "InsufficientBalance",
    "InsufficientAllowance",
    "NativeTransferFailed",
    "BurnTransferEthToError",
    "SwapTransferEthToError",
    "SlippageError",
    "InsufficientSPCAmount",
    "InsufficientETHAmount",
    "MustBeOwner",
]
