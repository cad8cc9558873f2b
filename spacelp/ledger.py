"""Asset ledgers: the native asset (ETH) and fungible tokens (SPC, LP shares).

The pool only depends on the AssetLedger protocol, so tests can inject
ledgers that deduct transfer taxes or fail transfers.

Two transfer mechanisms exist, with different trust properties:
- Token transfers are ledger bookkeeping and never hand control to the
  recipient.
- Native transfers may run recipient code (a receiver registered for the
  address), which can reject the payment or call back into the sender.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

import structlog

from spacelp.constants import BPS_BASE, UINT256_MAX, ZERO_ADDRESS
from spacelp.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    MustBeOwner,
    NativeTransferFailed,
)
from spacelp.events import Approval, Transfer
from spacelp.safe_int import S
from spacelp.types import normalize_address

if TYPE_CHECKING:
    from spacelp.chain import Chain

logger = structlog.get_logger()

# A receiver is called with (sender, amount) after the amount is credited.
# Raising rejects the payment.
Receiver = Callable[[str, int], None]


class AssetLedger(Protocol):
    """Balance and transfer surface the pool and router need from a token."""

    address: str

    def balance_of(self, owner: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> None: ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None: ...


def _check_amount(amount: int) -> int:
    return S(amount).to_uint256()


class NativeLedger:
    """Balances of the native asset, with recipient code on receipt."""

    def __init__(self, chain: Chain) -> None:
        self._chain = chain
        self._balances: dict[str, int] = {}
        self._receivers: dict[str, Receiver] = {}
        chain.register(self)

    def snapshot(self) -> dict[str, int]:
        return dict(self._balances)

    def restore(self, snapshot: dict[str, int]) -> None:
        self._balances = dict(snapshot)

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def fund(self, to: str, amount: int) -> None:
        """Credit newly created native balance (genesis allocation / faucet).

        Raises:
            Uint256Overflow: If the resulting balance exceeds the uint256 maximum
        """
        to = normalize_address(to)
        self._balances[to] = _check_amount(self.balance_of(to) + _check_amount(amount))

    def register_receiver(self, address: str, receiver: Receiver) -> None:
        """Run receiver whenever address is paid."""
        self._receivers[normalize_address(address)] = receiver

    def send(self, sender: str, to: str, amount: int) -> None:
        """Move native balance from sender to to, running to's receiver if any.

        Raises:
            InsufficientBalance: If sender cannot cover amount
            NativeTransferFailed: If the receiver raised; the credit is undone
        """
        sender = normalize_address(sender)
        to = normalize_address(to)
        amount = _check_amount(amount)

        with self._chain.atomic():
            balance = self.balance_of(sender)
            if balance < amount:
                raise InsufficientBalance(sender, balance, amount)
            self._balances[sender] = balance - amount
            self._balances[to] = _check_amount(self.balance_of(to) + amount)

            receiver = self._receivers.get(to)
            if receiver is not None:
                try:
                    receiver(sender, amount)
                except Exception as err:
                    logger.warning(
                        "native_transfer_rejected",
                        to=to,
                        amount=amount,
                        reason=type(err).__name__,
                    )
                    raise NativeTransferFailed(to, amount) from err


class TokenLedger:
    """ERC20-style fungible ledger with allowances.

    Mutating methods take the acting account explicitly (`sender`, `owner`,
    `spender`) since there is no implicit message sender.
    """

    def __init__(self, chain: Chain, address: str, symbol: str) -> None:
        self._chain = chain
        self.address = normalize_address(address)
        self.symbol = symbol
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        chain.register(self)

    def snapshot(self) -> tuple:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def restore(self, snapshot: tuple) -> None:
        balances, allowances, total_supply = snapshot
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        owner = normalize_address(owner)
        spender = normalize_address(spender)
        self._allowances[(owner, spender)] = _check_amount(amount)
        self._chain.emit(Approval(self.address, owner, spender, amount))

    def increase_allowance(self, owner: str, spender: str, added: int) -> None:
        """Raise an allowance, saturating at the uint256 maximum."""
        current = self.allowance(owner, spender)
        self.approve(owner, spender, min(current + _check_amount(added), UINT256_MAX))

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move amount from sender to to.

        Raises:
            InsufficientBalance: If sender cannot cover amount
        """
        self._move(normalize_address(sender), normalize_address(to), _check_amount(amount))

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move amount from owner to to, spending spender's allowance.

        A maximum (uint256) allowance is never decremented.

        Raises:
            InsufficientAllowance: If the allowance cannot cover amount
            InsufficientBalance: If owner cannot cover amount
        """
        spender = normalize_address(spender)
        owner = normalize_address(owner)
        amount = _check_amount(amount)

        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(owner, spender, allowed, amount)
        self._move(owner, normalize_address(to), amount)
        if allowed != UINT256_MAX:
            self._allowances[(owner, spender)] = allowed - amount

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount
        self._chain.emit(Transfer(self.address, sender, to, amount))

    def _mint(self, to: str, amount: int) -> None:
        to = normalize_address(to)
        self._total_supply = S(self._total_supply + amount).to_uint256()
        self._balances[to] = self.balance_of(to) + amount
        self._chain.emit(Transfer(self.address, ZERO_ADDRESS, to, amount))

    def _burn(self, owner: str, amount: int) -> None:
        owner = normalize_address(owner)
        balance = self.balance_of(owner)
        if balance < amount:
            raise InsufficientBalance(owner, balance, amount)
        self._balances[owner] = balance - amount
        self._total_supply = (S(self._total_supply) - S(amount)).value
        self._chain.emit(Transfer(self.address, owner, ZERO_ADDRESS, amount))


class SpaceCoin(TokenLedger):
    """SPC: the traded asset, with an owner-toggled transfer tax.

    While the tax is enabled every transfer withholds `tax_bps` of the amount
    and credits it to the treasury, so recipients receive less than was sent.
    """

    def __init__(
        self,
        chain: Chain,
        *,
        owner: str,
        treasury: str,
        total_supply: int,
        tax_bps: int,
        tax_enabled: bool = False,
        address: str | None = None,
    ) -> None:
        super().__init__(chain, address or chain.new_address("space-coin"), symbol="SPC")
        self.owner = normalize_address(owner)
        self.treasury = normalize_address(treasury)
        self.tax_bps = tax_bps
        self._tax_enabled = tax_enabled
        self._mint(self.treasury, total_supply)

    def snapshot(self) -> tuple:
        return super().snapshot(), self._tax_enabled

    def restore(self, snapshot: tuple) -> None:
        ledger_snapshot, self._tax_enabled = snapshot
        super().restore(ledger_snapshot)

    @property
    def tax_enabled(self) -> bool:
        return self._tax_enabled

    def toggle_tax(self, caller: str) -> bool:
        """Flip the transfer tax on or off. Returns the new state.

        Raises:
            MustBeOwner: If caller is not the owner
        """
        if normalize_address(caller) != self.owner:
            raise MustBeOwner(caller)
        self._tax_enabled = not self._tax_enabled
        logger.info("spc_tax_toggled", tax_enabled=self._tax_enabled)
        return self._tax_enabled

    def tax_on(self, amount: int) -> int:
        """Tax withheld from a transfer of amount under the current setting."""
        if not self._tax_enabled:
            return 0
        return (S(amount) * S(self.tax_bps) // S(BPS_BASE)).value

    def _move(self, sender: str, to: str, amount: int) -> None:
        tax = self.tax_on(amount)
        if tax == 0:
            super()._move(sender, to, amount)
            return

        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        super()._move(sender, to, amount - tax)
        super()._move(sender, self.treasury, tax)


__all__ = [
    "AssetLedger",
    "NativeLedger",
    "Receiver",
    "SpaceCoin",
    "TokenLedger",
]
