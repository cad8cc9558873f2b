"""Deploy SpaceCoin, the pool and the router onto a chain."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from spacelp.chain import Chain
from spacelp.config import DEFAULT_POOL_CONFIG, PoolConfig
from spacelp.ledger import SpaceCoin
from spacelp.pool import LiquidityPool
from spacelp.router import Router

logger = structlog.get_logger()


@dataclass
class Deployment:
    """Everything a deployment created, for callers and tests."""

    chain: Chain
    spc: SpaceCoin
    pool: LiquidityPool
    router: Router
    deployer: str
    treasury: str
    config: PoolConfig


def deploy(
    chain: Chain | None = None,
    *,
    deployer: str | None = None,
    treasury: str | None = None,
    config: PoolConfig = DEFAULT_POOL_CONFIG,
) -> Deployment:
    """Create SpaceCoin (whole supply to the treasury), the pool and its router.

    Args:
        chain: Chain to deploy onto (a fresh one if None)
        deployer: Owner of SpaceCoin, allowed to toggle the tax (fresh address if None)
        treasury: Receives the SPC supply and the transfer tax (fresh address if None)
        config: Fee and token parameters

    Returns:
        Deployment bundle
    """
    chain = chain or Chain()
    deployer = deployer or chain.new_address("deployer")
    treasury = treasury or chain.new_address("treasury")

    spc = SpaceCoin(
        chain,
        owner=deployer,
        treasury=treasury,
        total_supply=config.spc_total_supply,
        tax_bps=config.spc_tax_bps,
        tax_enabled=config.spc_tax_enabled,
    )
    pool = LiquidityPool(chain, spc, config)
    router = Router(chain, pool, spc)

    logger.info(
        "deployed",
        spc=spc.address,
        pool=pool.address,
        router=router.address,
        treasury=treasury,
        swap_fee_percent=config.swap_fee_percent,
    )
    return Deployment(
        chain=chain,
        spc=spc,
        pool=pool,
        router=router,
        deployer=spc.owner,
        treasury=spc.treasury,
        config=config,
    )


__all__ = ["Deployment", "deploy"]
