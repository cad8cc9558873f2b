"""Test helpers module for shared test utilities.

- constants: Common amounts and the slippage helper
- factories: Account funding, pool seeding and payout receivers
"""

from tests.helpers.constants import (
    ACCOUNT_ETH_FUNDING,
    ACCOUNT_SPC_FUNDING,
    BASE_ETH_LIQUIDITY,
    BASE_SPC_LIQUIDITY,
    ONE_ETHER,
    apply_slippage,
)
from tests.helpers.factories import (
    RejectingReceiver,
    ReentrantReceiver,
    approve_router,
    base_mint,
    fund_account,
)

__all__ = [
    # Constants
    "ONE_ETHER",
    "BASE_ETH_LIQUIDITY",
    "BASE_SPC_LIQUIDITY",
    "ACCOUNT_ETH_FUNDING",
    "ACCOUNT_SPC_FUNDING",
    "apply_slippage",
    # Factories
    "fund_account",
    "base_mint",
    "approve_router",
    "RejectingReceiver",
    "ReentrantReceiver",
]
