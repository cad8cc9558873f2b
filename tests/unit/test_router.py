"""Tests for the Router: quotes, deposits, withdrawals and slippage-checked swaps."""

import pytest
from structlog.testing import capture_logs

from spacelp.errors import (
    BurnTransferEthToError,
    InputAmountInvalid,
    InsufficientAllowance,
    InsufficientETHAmount,
    InsufficientSPCAmount,
    ReservesAmountInvalid,
    SwapTransferEthToError,
)
from spacelp.pool import ReservePair
from tests.helpers import (
    BASE_ETH_LIQUIDITY,
    BASE_SPC_LIQUIDITY,
    ONE_ETHER,
    RejectingReceiver,
    apply_slippage,
    fund_account,
)


class TestQuotes:
    def test_get_amount_received(self, deployment):
        assert deployment.router.get_amount_received(1, 100, 500) == 4

    def test_get_amount_received_invalid(self, deployment):
        with pytest.raises(InputAmountInvalid):
            deployment.router.get_amount_received(0, 100, 500)
        with pytest.raises(ReservesAmountInvalid):
            deployment.router.get_amount_received(1, 100, 0)

    def test_calc_optimal_amount(self, deployment):
        assert deployment.router.calc_optimal_amount(ONE_ETHER, BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY) == 5 * ONE_ETHER


class TestDeposit:
    """Tests for Router.deposit."""

    def test_first_deposit(self, deployment, alice):
        liquidity = deployment.router.deposit(BASE_SPC_LIQUIDITY, sender=alice, value=BASE_ETH_LIQUIDITY)

        pool = deployment.pool
        assert liquidity == pool.balance_of(alice) == pool.total_supply
        assert pool.get_reserves() == ReservePair(BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)

    def test_quoted_second_deposit(self, seeded, bob):
        router = seeded.router
        reserves = seeded.pool.get_reserves()
        spc_amount = router.calc_optimal_amount(ONE_ETHER, reserves.reserve_eth, reserves.reserve_spc)
        supply = seeded.pool.total_supply

        liquidity = router.deposit(spc_amount, sender=bob, value=ONE_ETHER)

        assert liquidity == supply // 100
        assert seeded.pool.balance_of(bob) == liquidity

    def test_deposit_without_allowance_reverts(self, deployment):
        carol = fund_account(deployment, "carol")
        eth_before = deployment.chain.native.balance_of(carol)

        with pytest.raises(InsufficientAllowance):
            deployment.router.deposit(BASE_SPC_LIQUIDITY, sender=carol, value=BASE_ETH_LIQUIDITY)

        assert deployment.chain.native.balance_of(carol) == eth_before
        assert deployment.pool.get_reserves() == ReservePair(0, 0)


class TestWithdraw:
    """Tests for Router.withdraw."""

    def test_full_withdrawal(self, seeded, alice):
        shares = seeded.pool.balance_of(alice)
        eth_before = seeded.chain.native.balance_of(alice)
        spc_before = seeded.spc.balance_of(alice)

        amount_eth, amount_spc = seeded.router.withdraw(shares, sender=alice)

        assert (amount_eth, amount_spc) == (BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)
        assert seeded.pool.get_reserves() == ReservePair(0, 0)
        assert seeded.pool.balance_of(alice) == 0
        assert seeded.chain.native.balance_of(alice) == eth_before + BASE_ETH_LIQUIDITY
        assert seeded.spc.balance_of(alice) == spc_before + BASE_SPC_LIQUIDITY

    def test_rejected_payout_returns_shares(self, seeded, alice):
        """A failed withdrawal leaves the shares with their owner."""
        shares = seeded.pool.balance_of(alice)
        seeded.chain.native.register_receiver(alice, RejectingReceiver())

        with pytest.raises(BurnTransferEthToError):
            seeded.router.withdraw(shares, sender=alice)

        assert seeded.pool.balance_of(alice) == shares
        assert seeded.pool.balance_of(seeded.pool.address) == 0


class TestSwapEthForSpc:
    def test_receives_quote(self, seeded, bob):
        quote = seeded.router.get_amount_received(ONE_ETHER, BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)
        spc_before = seeded.spc.balance_of(bob)

        received = seeded.router.swap_eth_for_spc(apply_slippage(quote), sender=bob, value=ONE_ETHER)

        assert received == quote
        assert seeded.spc.balance_of(bob) == spc_before + quote

    def test_min_out_above_quote_reverts(self, seeded, bob):
        """Slippage failure leaves every balance and reserve untouched."""
        quote = seeded.router.get_amount_received(ONE_ETHER, BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)
        eth_before = seeded.chain.native.balance_of(bob)
        spc_before = seeded.spc.balance_of(bob)
        reserves = seeded.pool.get_reserves()

        with pytest.raises(InsufficientSPCAmount) as exc_info:
            seeded.router.swap_eth_for_spc(quote + 1, sender=bob, value=ONE_ETHER)

        assert exc_info.value.actual_out == quote
        assert exc_info.value.min_out == quote + 1
        assert seeded.chain.native.balance_of(bob) == eth_before
        assert seeded.spc.balance_of(bob) == spc_before
        assert seeded.pool.get_reserves() == reserves

    def test_tax_counts_against_min_out(self, seeded, bob):
        """With the tax on, the caller receives 98% of the pool's output."""
        seeded.spc.toggle_tax(seeded.deployer)
        quote = seeded.router.get_amount_received(ONE_ETHER, BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)
        after_tax = quote - quote * 200 // 10_000

        with pytest.raises(InsufficientSPCAmount):
            seeded.router.swap_eth_for_spc(quote, sender=bob, value=ONE_ETHER)

        received = seeded.router.swap_eth_for_spc(apply_slippage(quote), sender=bob, value=ONE_ETHER)
        assert received == after_tax


class TestSwapSpcForEth:
    def test_receives_quote(self, seeded, bob):
        quote = seeded.router.get_amount_received(5 * ONE_ETHER, BASE_SPC_LIQUIDITY, BASE_ETH_LIQUIDITY)
        eth_before = seeded.chain.native.balance_of(bob)

        received = seeded.router.swap_spc_for_eth(5 * ONE_ETHER, apply_slippage(quote), sender=bob)

        assert received == quote
        assert seeded.chain.native.balance_of(bob) == eth_before + quote
        assert seeded.pool.get_reserves() == ReservePair(
            BASE_ETH_LIQUIDITY - quote, BASE_SPC_LIQUIDITY + 5 * ONE_ETHER
        )

    def test_min_out_above_quote_reverts(self, seeded, bob):
        quote = seeded.router.get_amount_received(5 * ONE_ETHER, BASE_SPC_LIQUIDITY, BASE_ETH_LIQUIDITY)
        spc_before = seeded.spc.balance_of(bob)

        with pytest.raises(InsufficientETHAmount):
            seeded.router.swap_spc_for_eth(5 * ONE_ETHER, quote + 1, sender=bob)

        assert seeded.spc.balance_of(bob) == spc_before
        assert seeded.pool.get_reserves() == ReservePair(BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)

    def test_rejected_payout_reverts_transfer_in(self, seeded, bob):
        seeded.chain.native.register_receiver(bob, RejectingReceiver())
        spc_before = seeded.spc.balance_of(bob)

        with pytest.raises(SwapTransferEthToError):
            seeded.router.swap_spc_for_eth(5 * ONE_ETHER, 0, sender=bob)

        assert seeded.spc.balance_of(bob) == spc_before


class TestOutcomeLogging:
    """The router's log records the outcome; the pool's own records are debug-level."""

    def test_reverted_swap_not_logged_as_completed(self, seeded, bob):
        quote = seeded.router.get_amount_received(ONE_ETHER, BASE_ETH_LIQUIDITY, BASE_SPC_LIQUIDITY)

        with capture_logs() as logs, pytest.raises(InsufficientSPCAmount):
            seeded.router.swap_eth_for_spc(quote + 1, sender=bob, value=ONE_ETHER)

        levels = {entry["event"]: entry["log_level"] for entry in logs}
        assert levels["pool_swapped"] == "debug"
        assert levels["router_call_reverted"] == "warning"
        assert "router_swap" not in levels

    def test_completed_swap_logged_by_router(self, seeded, bob):
        with capture_logs() as logs:
            seeded.router.swap_eth_for_spc(0, sender=bob, value=ONE_ETHER)

        info_events = [entry["event"] for entry in logs if entry["log_level"] == "info"]
        assert info_events == ["router_swap"]
