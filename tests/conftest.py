"""Pytest configuration and fixtures."""

import pytest

from spacelp.chain import Chain
from spacelp.deployment import Deployment, deploy
from tests.helpers import approve_router, base_mint, fund_account


@pytest.fixture
def deployment() -> Deployment:
    """Fresh SpaceCoin, pool and router on a fresh chain."""
    return deploy()


@pytest.fixture
def chain(deployment: Deployment) -> Chain:
    return deployment.chain


@pytest.fixture
def alice(deployment: Deployment) -> str:
    """Funded account that has approved the router."""
    address = fund_account(deployment, "alice")
    approve_router(deployment, address)
    return address


@pytest.fixture
def bob(deployment: Deployment) -> str:
    """Funded account that has approved the router."""
    address = fund_account(deployment, "bob")
    approve_router(deployment, address)
    return address


@pytest.fixture
def seeded(deployment: Deployment, alice: str) -> Deployment:
    """Deployment whose pool alice seeded with 100 ETH and 500 SPC."""
    base_mint(deployment, alice)
    return deployment
