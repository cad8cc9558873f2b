"""In-memory execution host for the pool and its collaborators.

The Chain provides what a blockchain provides to the pool:
- addresses for accounts and contracts
- the native asset ledger (ETH), whose payouts may run recipient code
- an event log
- all-or-nothing calls: `atomic()` snapshots every registered stateful
  component and restores all of them if the call raises

Calls are strictly serial. A nested call (for example a payout recipient
calling back into the pool) runs inside the outer call's atomic scope, so a
failure anywhere unwinds everything the outer call did.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

import structlog

from spacelp.events import Event
from spacelp.ledger import NativeLedger

logger = structlog.get_logger()


class Stateful(Protocol):
    """A component whose state is rolled back when a call fails."""

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


class Chain:
    """Serial execution host with snapshot/rollback semantics."""

    def __init__(self) -> None:
        self._components: list[Stateful] = []
        self._events: list[Event] = []
        self._labels: dict[str, str] = {}
        self._depth = 0
        self.native = NativeLedger(self)

    # --- Addresses ---

    def new_address(self, label: str) -> str:
        """Create a fresh deterministic address, remembered under label."""
        seed = f"{label}:{len(self._labels)}".encode()
        address = "0x" + hashlib.sha256(seed).hexdigest()[:40]
        self._labels[address] = label
        return address

    def label(self, address: str) -> str:
        """Human-readable label for an address (the address itself if unknown)."""
        return self._labels.get(address, address)

    # --- State ---

    def register(self, component: Stateful) -> None:
        """Include a component in every future snapshot."""
        self._components.append(component)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run a block as one call: on any exception, restore all state and re-raise."""
        snapshots = [(component, component.snapshot()) for component in self._components]
        event_count = len(self._events)
        self._depth += 1
        try:
            yield
        except BaseException as err:
            for component, snapshot in snapshots:
                component.restore(snapshot)
            del self._events[event_count:]
            logger.debug("call_reverted", depth=self._depth, error=type(err).__name__)
            raise
        finally:
            self._depth -= 1

    # --- Events ---

    def emit(self, event: Event) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[Event]:
        """Events emitted by successful calls, oldest first."""
        return list(self._events)

    def events_of(self, kind: type[Event]) -> list[Event]:
        """Events of one type, oldest first."""
        return [event for event in self._events if isinstance(event, kind)]


__all__ = ["Chain", "Stateful"]
