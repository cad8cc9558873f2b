"""Pydantic request/response models for the pool API.

Amounts travel as uint256 decimal strings; field names are camelCase on
the wire and snake_case in Python.
"""

from enum import Enum

from pydantic import BaseModel, Field

from spacelp.types import Address, Uint256


class Asset(str, Enum):
    """One side of the pair."""

    ETH = "ETH"
    SPC = "SPC"


class PoolState(BaseModel):
    """Pool reserves and parameters."""

    address: Address
    reserve_eth: Uint256 = Field(alias="reserveEth")
    reserve_spc: Uint256 = Field(alias="reserveSpc")
    total_supply: Uint256 = Field(alias="totalSupply")
    swap_fee_percent: int = Field(alias="swapFeePercent")
    spc_tax_enabled: bool = Field(alias="spcTaxEnabled")

    model_config = {"populate_by_name": True}


class AccountBalances(BaseModel):
    """Balances of one account in all three assets."""

    address: Address
    eth: Uint256
    spc: Uint256
    lp: Uint256


class FaucetRequest(BaseModel):
    """Fund a simulation account with ETH and SPC (SPC comes from the treasury)."""

    address: Address
    eth: Uint256 = "0"
    spc: Uint256 = "0"


class Approvable(str, Enum):
    """Assets the router pulls via allowance."""

    SPC = "SPC"
    LP = "LP"


class ApproveRequest(BaseModel):
    """Let the router pull SPC or LP shares from an account."""

    owner: Address
    asset: Approvable
    amount: Uint256


class AmountReceivedRequest(BaseModel):
    """Quote a swap against the current reserves."""

    amount_in: Uint256 = Field(alias="amountIn")
    asset_in: Asset = Field(alias="assetIn")

    model_config = {"populate_by_name": True}


class OptimalAmountRequest(BaseModel):
    """Quote the matching deposit amount against the current reserves."""

    amount_desired: Uint256 = Field(alias="amountDesired")
    asset: Asset = Field(description="Asset of amountDesired")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount: Uint256


class DepositRequest(BaseModel):
    account: Address
    spc_amount: Uint256 = Field(alias="spcAmount")
    eth_amount: Uint256 = Field(alias="ethAmount")

    model_config = {"populate_by_name": True}


class DepositResponse(BaseModel):
    liquidity: Uint256


class WithdrawRequest(BaseModel):
    account: Address
    lp_amount: Uint256 = Field(alias="lpAmount")

    model_config = {"populate_by_name": True}


class WithdrawResponse(BaseModel):
    amount_eth: Uint256 = Field(alias="amountEth")
    amount_spc: Uint256 = Field(alias="amountSpc")

    model_config = {"populate_by_name": True}


class SwapEthForSpcRequest(BaseModel):
    account: Address
    eth_amount: Uint256 = Field(alias="ethAmount")
    min_spc_out: Uint256 = Field(alias="minSpcOut")

    model_config = {"populate_by_name": True}


class SwapSpcForEthRequest(BaseModel):
    account: Address
    spc_amount: Uint256 = Field(alias="spcAmount")
    min_eth_out: Uint256 = Field(alias="minEthOut")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Typed domain error, as returned with 4xx statuses."""

    error: str
    detail: str
    args: dict[str, int | str]


__all__ = [
    "AccountBalances",
    "AmountReceivedRequest",
    "Approvable",
    "ApproveRequest",
    "Asset",
    "DepositRequest",
    "DepositResponse",
    "ErrorResponse",
    "FaucetRequest",
    "OptimalAmountRequest",
    "PoolState",
    "QuoteResponse",
    "SwapEthForSpcRequest",
    "SwapResponse",
    "SwapSpcForEthRequest",
    "WithdrawRequest",
    "WithdrawResponse",
]
