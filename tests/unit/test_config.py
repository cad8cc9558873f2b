"""Tests for PoolConfig and environment loading."""

import pytest

from spacelp.config import DEFAULT_POOL_CONFIG, PoolConfig, load_config
from spacelp.constants import SPC_TOTAL_SUPPLY
from spacelp.deployment import deploy


class TestPoolConfig:
    def test_defaults(self):
        assert DEFAULT_POOL_CONFIG.swap_fee_percent == 1
        assert DEFAULT_POOL_CONFIG.fee_multiplier == 99
        assert DEFAULT_POOL_CONFIG.spc_tax_bps == 200
        assert DEFAULT_POOL_CONFIG.spc_total_supply == SPC_TOTAL_SUPPLY
        assert DEFAULT_POOL_CONFIG.spc_tax_enabled is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"swap_fee_percent": 100},
            {"swap_fee_percent": -1},
            {"swap_fee_base": 0},
            {"spc_tax_bps": 10_000},
            {"spc_total_supply": -1},
        ],
    )
    def test_rejects_out_of_range(self, kwargs):
        with pytest.raises(ValueError):
            PoolConfig(**kwargs)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POOL_CONFIG.swap_fee_percent = 3


class TestLoadConfig:
    def test_defaults_without_env(self, monkeypatch):
        for name in (
            "SPACELP_SWAP_FEE_PERCENT",
            "SPACELP_SPC_TAX_BPS",
            "SPACELP_SPC_TOTAL_SUPPLY",
            "SPACELP_SPC_TAX_ENABLED",
        ):
            monkeypatch.delenv(name, raising=False)
        assert load_config() == DEFAULT_POOL_CONFIG

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("SPACELP_SWAP_FEE_PERCENT", "3")
        monkeypatch.setenv("SPACELP_SPC_TAX_BPS", "100")
        monkeypatch.setenv("SPACELP_SPC_TOTAL_SUPPLY", "1000")
        monkeypatch.setenv("SPACELP_SPC_TAX_ENABLED", "yes")

        config = load_config()

        assert config.fee_multiplier == 97
        assert config.spc_tax_bps == 100
        assert config.spc_total_supply == 1000
        assert config.spc_tax_enabled is True

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("SPACELP_SWAP_FEE_PERCENT", "lots")
        with pytest.raises(ValueError):
            load_config()


class TestDeployWithConfig:
    def test_fee_flows_into_pool_pricing(self):
        deployment = deploy(config=PoolConfig(swap_fee_percent=3))
        assert deployment.router.get_amount_received(1, 100, 500) == 97 * 500 // (100 * 100 + 97)

    def test_tax_enabled_at_deploy(self):
        deployment = deploy(config=PoolConfig(spc_tax_enabled=True))
        assert deployment.spc.tax_enabled
