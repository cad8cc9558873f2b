"""API endpoints for the simulated ETH/SPC pool."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException

from spacelp.api.models import (
    AccountBalances,
    AmountReceivedRequest,
    Approvable,
    ApproveRequest,
    Asset,
    DepositRequest,
    DepositResponse,
    FaucetRequest,
    OptimalAmountRequest,
    PoolState,
    QuoteResponse,
    SwapEthForSpcRequest,
    SwapResponse,
    SwapSpcForEthRequest,
    WithdrawRequest,
    WithdrawResponse,
)
from spacelp.config import load_config
from spacelp.deployment import Deployment, deploy
from spacelp.safe_int import Uint256Overflow
from spacelp.types import normalize_address

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def _default_deployment() -> Deployment:
    return deploy(config=load_config())


def get_deployment() -> Deployment:
    """Dependency provider for the deployment the API operates on.

    Override this in tests to inject a fresh deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment
    """
    return _default_deployment()


def _reserves_for(deployment: Deployment, asset_in: Asset) -> tuple[int, int]:
    reserves = deployment.pool.get_reserves()
    if asset_in is Asset.ETH:
        return reserves.reserve_eth, reserves.reserve_spc
    return reserves.reserve_spc, reserves.reserve_eth


@router.get("/pool", response_model=PoolState)
async def pool_state(deployment: Deployment = Depends(get_deployment)) -> PoolState:
    """Current reserves, share supply and parameters."""
    reserves = deployment.pool.get_reserves()
    return PoolState(
        address=deployment.pool.address,
        reserve_eth=reserves.reserve_eth,
        reserve_spc=reserves.reserve_spc,
        total_supply=deployment.pool.total_supply,
        swap_fee_percent=deployment.config.swap_fee_percent,
        spc_tax_enabled=deployment.spc.tax_enabled,
    )


@router.get("/accounts/{address}", response_model=AccountBalances)
async def account_balances(
    address: str,
    deployment: Deployment = Depends(get_deployment),
) -> AccountBalances:
    """ETH, SPC and LP share balances of an account."""
    try:
        address = normalize_address(address, validate=True)
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return AccountBalances(
        address=address,
        eth=deployment.chain.native.balance_of(address),
        spc=deployment.spc.balance_of(address),
        lp=deployment.pool.balance_of(address),
    )


@router.post("/faucet", response_model=AccountBalances)
async def faucet(
    request: FaucetRequest,
    deployment: Deployment = Depends(get_deployment),
) -> AccountBalances:
    """Fund a simulation account: fresh ETH, SPC transferred from the treasury."""
    address = normalize_address(request.address)
    try:
        with deployment.chain.atomic():
            deployment.chain.native.fund(address, int(request.eth))
            if int(request.spc):
                deployment.spc.transfer(deployment.treasury, address, int(request.spc))
    except Uint256Overflow as err:
        raise HTTPException(status_code=409, detail=str(err)) from err
    logger.info("faucet_funded", address=address, eth=request.eth, spc=request.spc)
    return await account_balances(address, deployment)


@router.post("/approve", status_code=204)
async def approve(
    request: ApproveRequest,
    deployment: Deployment = Depends(get_deployment),
) -> None:
    """Set the router's allowance over an account's SPC or LP shares."""
    ledger = deployment.spc if request.asset is Approvable.SPC else deployment.pool
    ledger.approve(request.owner, deployment.router.address, int(request.amount))


@router.post("/quote/amount-received", response_model=QuoteResponse)
async def quote_amount_received(
    request: AmountReceivedRequest,
    deployment: Deployment = Depends(get_deployment),
) -> QuoteResponse:
    """Quote the output of swapping amountIn of assetIn at the current reserves."""
    reserve_in, reserve_out = _reserves_for(deployment, request.asset_in)
    amount = deployment.router.get_amount_received(int(request.amount_in), reserve_in, reserve_out)
    return QuoteResponse(amount=amount)


@router.post("/quote/optimal-amount", response_model=QuoteResponse)
async def quote_optimal_amount(
    request: OptimalAmountRequest,
    deployment: Deployment = Depends(get_deployment),
) -> QuoteResponse:
    """Quote the amount of the other asset that matches amountDesired."""
    reserve_in, reserve_out = _reserves_for(deployment, request.asset)
    amount = deployment.router.calc_optimal_amount(int(request.amount_desired), reserve_in, reserve_out)
    return QuoteResponse(amount=amount)


@router.post("/deposit", response_model=DepositResponse)
async def deposit(
    request: DepositRequest,
    deployment: Deployment = Depends(get_deployment),
) -> DepositResponse:
    """Add liquidity through the router."""
    liquidity = deployment.router.deposit(
        int(request.spc_amount),
        sender=request.account,
        value=int(request.eth_amount),
    )
    return DepositResponse(liquidity=liquidity)


@router.post("/withdraw", response_model=WithdrawResponse)
async def withdraw(
    request: WithdrawRequest,
    deployment: Deployment = Depends(get_deployment),
) -> WithdrawResponse:
    """Remove liquidity through the router."""
    amount_eth, amount_spc = deployment.router.withdraw(int(request.lp_amount), sender=request.account)
    return WithdrawResponse(amount_eth=amount_eth, amount_spc=amount_spc)


@router.post("/swap/eth-for-spc", response_model=SwapResponse)
async def swap_eth_for_spc(
    request: SwapEthForSpcRequest,
    deployment: Deployment = Depends(get_deployment),
) -> SwapResponse:
    """Swap ETH for SPC with a minimum SPC received."""
    amount_out = deployment.router.swap_eth_for_spc(
        int(request.min_spc_out),
        sender=request.account,
        value=int(request.eth_amount),
    )
    return SwapResponse(amount_out=amount_out)


@router.post("/swap/spc-for-eth", response_model=SwapResponse)
async def swap_spc_for_eth(
    request: SwapSpcForEthRequest,
    deployment: Deployment = Depends(get_deployment),
) -> SwapResponse:
    """Swap SPC for ETH with a minimum ETH received."""
    amount_out = deployment.router.swap_spc_for_eth(
        int(request.spc_amount),
        int(request.min_eth_out),
        sender=request.account,
    )
    return SwapResponse(amount_out=amount_out)
