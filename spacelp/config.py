"""Pool configuration."""

import os
from dataclasses import dataclass

from spacelp.constants import (
    BPS_BASE,
    SPC_TAX_BPS,
    SPC_TOTAL_SUPPLY,
    SWAP_FEE_BASE,
    SWAP_FEE_PERCENT,
)


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for a pool deployment.

    Pool parameters are fixed for the lifetime of a pool: there is no
    governance path that changes them after deployment.

    Attributes:
        swap_fee_percent: Fee charged on swap input, in percent of swap_fee_base (default: 1)
        swap_fee_base: Denominator for the fee (default: 100)
        spc_tax_bps: SpaceCoin transfer tax when enabled, in basis points (default: 200)
        spc_total_supply: SpaceCoin supply minted to the treasury (default: 500k SPC)
        spc_tax_enabled: Whether the SpaceCoin tax starts enabled (default: False)
    """

    swap_fee_percent: int = SWAP_FEE_PERCENT
    swap_fee_base: int = SWAP_FEE_BASE

    spc_tax_bps: int = SPC_TAX_BPS
    spc_total_supply: int = SPC_TOTAL_SUPPLY
    spc_tax_enabled: bool = False

    def __post_init__(self) -> None:
        if self.swap_fee_base <= 0:
            raise ValueError(f"swap_fee_base must be positive, got {self.swap_fee_base}")
        if not 0 <= self.swap_fee_percent < self.swap_fee_base:
            raise ValueError(
                f"swap_fee_percent must be in [0, {self.swap_fee_base}), got {self.swap_fee_percent}"
            )
        if not 0 <= self.spc_tax_bps < BPS_BASE:
            raise ValueError(f"spc_tax_bps must be in [0, {BPS_BASE}), got {self.spc_tax_bps}")
        if self.spc_total_supply < 0:
            raise ValueError(f"spc_total_supply cannot be negative, got {self.spc_total_supply}")

    @property
    def fee_multiplier(self) -> int:
        """Share of the swap input that is priced (swap_fee_base - swap_fee_percent).

        For the default 1% fee this returns 99.
        """
        return self.swap_fee_base - self.swap_fee_percent


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


def load_config() -> PoolConfig:
    """Build a PoolConfig from environment variables.

    Configuration via environment variables:
    - SPACELP_SWAP_FEE_PERCENT: Swap fee in percent (default: 1)
    - SPACELP_SPC_TAX_BPS: SpaceCoin tax in basis points (default: 200)
    - SPACELP_SPC_TOTAL_SUPPLY: SpaceCoin supply in base units (default: 500k SPC)
    - SPACELP_SPC_TAX_ENABLED: Start with the tax enabled (default: false)

    Raises:
        ValueError: If a variable is not an integer or is out of range
    """
    return PoolConfig(
        swap_fee_percent=int(os.environ.get("SPACELP_SWAP_FEE_PERCENT", str(SWAP_FEE_PERCENT))),
        spc_tax_bps=int(os.environ.get("SPACELP_SPC_TAX_BPS", str(SPC_TAX_BPS))),
        spc_total_supply=int(os.environ.get("SPACELP_SPC_TOTAL_SUPPLY", str(SPC_TOTAL_SUPPLY))),
        spc_tax_enabled=_env_bool("SPACELP_SPC_TAX_ENABLED", False),
    )


__all__ = ["PoolConfig", "DEFAULT_POOL_CONFIG", "load_config"]
