"""Factory functions for accounts, liquidity and payout receivers.

Usage:
    from tests.helpers import fund_account, base_mint
    # or
    from tests.helpers.factories import ReentrantReceiver

    alice = fund_account(deployment, "alice")
    base_mint(deployment, alice)
"""

from collections.abc import Callable

from spacelp.deployment import Deployment
from spacelp.errors import SpaceLPError
from tests.helpers.constants import (
    ACCOUNT_ETH_FUNDING,
    ACCOUNT_SPC_FUNDING,
    BASE_ETH_LIQUIDITY,
    BASE_SPC_LIQUIDITY,
)


def fund_account(
    deployment: Deployment,
    label: str,
    eth: int = ACCOUNT_ETH_FUNDING,
    spc: int = ACCOUNT_SPC_FUNDING,
) -> str:
    """Create an account holding eth (fresh) and spc (from the treasury).

    Args:
        deployment: Deployment to fund the account on
        label: Label for the new address
        eth: Native balance to create (default: 10k ETH)
        spc: SPC to transfer from the treasury (default: 10k SPC)

    Returns:
        The new account's address
    """
    address = deployment.chain.new_address(label)
    deployment.chain.native.fund(address, eth)
    if spc:
        deployment.spc.transfer(deployment.treasury, address, spc)
    return address


def base_mint(
    deployment: Deployment,
    provider: str,
    eth: int = BASE_ETH_LIQUIDITY,
    spc: int = BASE_SPC_LIQUIDITY,
) -> int:
    """Seed the pool directly: push both assets, then mint to provider.

    Returns:
        Shares minted
    """
    deployment.spc.transfer(provider, deployment.pool.address, spc)
    return deployment.pool.mint(provider, sender=provider, value=eth)


def approve_router(deployment: Deployment, owner: str) -> None:
    """Give the router an unlimited allowance over owner's SPC and LP shares."""
    unlimited = 2**256 - 1
    deployment.spc.approve(owner, deployment.router.address, unlimited)
    deployment.pool.approve(owner, deployment.router.address, unlimited)


class RejectingReceiver:
    """Native receiver that refuses every payment."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, sender: str, amount: int) -> None:
        self.calls += 1
        raise RuntimeError(f"payment of {amount} from {sender} rejected")


class ReentrantReceiver:
    """Native receiver that calls back into the pool when paid.

    Args:
        attack: Callback run on receipt (e.g. a pool.swap or pool.burn call)
        propagate: Re-raise the callback's error (failing the payment) instead
            of swallowing it
    """

    def __init__(self, attack: Callable[[], object], propagate: bool = True) -> None:
        self.attack = attack
        self.propagate = propagate
        self.errors: list[SpaceLPError] = []

    def __call__(self, sender: str, amount: int) -> None:
        try:
            self.attack()
        except SpaceLPError as err:
            self.errors.append(err)
            if self.propagate:
                raise


__all__ = [
    "RejectingReceiver",
    "ReentrantReceiver",
    "approve_router",
    "base_mint",
    "fund_account",
]
