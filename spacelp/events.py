"""Events emitted by the pool and the ledgers.

Events are appended to the chain's event log for observers. Core logic never
reads them back; they are rolled back together with the call that emitted them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SwapDirection(str, Enum):
    """Which asset went into the pool."""

    ETH_FOR_SPC = "ETH_FOR_SPC"
    SPC_FOR_ETH = "SPC_FOR_ETH"


@dataclass(frozen=True)
class Event:
    """Base class for events. `emitter` is the address of the emitting contract."""

    emitter: str


@dataclass(frozen=True)
class Transfer(Event):
    sender: str
    to: str
    amount: int


@dataclass(frozen=True)
class Approval(Event):
    owner: str
    spender: str
    amount: int


@dataclass(frozen=True)
class Minted(Event):
    """LP shares were issued against deposited ETH and SPC."""

    to: str
    amount_eth: int
    amount_spc: int


@dataclass(frozen=True)
class Burned(Event):
    """LP shares were redeemed for ETH and SPC."""

    to: str
    amount_eth: int
    amount_spc: int


@dataclass(frozen=True)
class Swapped(Event):
    """One asset was traded for the other.

    All four amounts are reported so observers can reconstruct direction
    and size without re-deriving reserves.
    """

    to: str
    direction: SwapDirection
    amount_in_eth: int
    amount_in_spc: int
    amount_out_eth: int
    amount_out_spc: int


__all__ = [
    "SwapDirection",
    "Event",
    "Transfer",
    "Approval",
    "Minted",
    "Burned",
    "Swapped",
]
