"""SPC/ETH constant product liquidity pool and router."""

from spacelp.chain import Chain
from spacelp.config import DEFAULT_POOL_CONFIG, PoolConfig, load_config
from spacelp.deployment import Deployment, deploy
from spacelp.ledger import NativeLedger, SpaceCoin, TokenLedger
from spacelp.pool import LiquidityPool, ReservePair, SwapResult
from spacelp.router import Router

__version__ = "0.1.0"
__all__ = [
    "Chain",
    "DEFAULT_POOL_CONFIG",
    "Deployment",
    "LiquidityPool",
    "NativeLedger",
    "PoolConfig",
    "ReservePair",
    "Router",
    "SpaceCoin",
    "SwapResult",
    "TokenLedger",
    "deploy",
    "load_config",
    "__version__",
]
