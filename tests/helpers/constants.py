"""Shared amounts for tests.

Usage:
    from tests.helpers import BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY
    # or
    from tests.helpers.constants import ONE_ETHER
"""

from spacelp.constants import ONE_ETHER

# =============================================================================
# Liquidity seeded by base_mint (1 ETH : 5 SPC)
# =============================================================================

BASE_ETH_LIQUIDITY = 100 * ONE_ETHER
BASE_SPC_LIQUIDITY = 500 * ONE_ETHER

# =============================================================================
# Account funding
# =============================================================================

ACCOUNT_ETH_FUNDING = 10_000 * ONE_ETHER
ACCOUNT_SPC_FUNDING = 10_000 * ONE_ETHER


def apply_slippage(amount: int, percent: int = 5) -> int:
    """Lower bound for amount tolerating percent slippage."""
    return amount - amount * percent // 100


__all__ = [
    "ACCOUNT_ETH_FUNDING",
    "ACCOUNT_SPC_FUNDING",
    "BASE_ETH_LIQUIDITY",
    "BASE_SPC_LIQUIDITY",
    "ONE_ETHER",
    "apply_slippage",
]
