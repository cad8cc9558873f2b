"""Protocol constants for the SPC/ETH liquidity pool.

Centralizes token units, fee parameters and well-known addresses.
"""

# Token units (both assets use 18 decimals)
DECIMALS = 18
ONE_ETHER = 10**DECIMALS

# Maximum uint256 value, the bound for every ledger amount
UINT256_MAX = 2**256 - 1

# Swap fee applied to the input amount: 1% means 99/100 of the input is priced.
# amount_in_with_fee = amount_in * SWAP_FEE_MULTIPLIER
# amount_out = amount_in_with_fee * reserve_out // (reserve_in * SWAP_FEE_BASE + amount_in_with_fee)
SWAP_FEE_PERCENT = 1
SWAP_FEE_BASE = 100

# SpaceCoin transfer tax, in basis points (200 bps = 2%), credited to the treasury
SPC_TAX_BPS = 200
BPS_BASE = 10_000

# SpaceCoin total supply (500k SPC), all minted to the treasury at deployment
SPC_TOTAL_SUPPLY = 500_000 * ONE_ETHER

# Counterparty of the Transfer events emitted when tokens are minted or burned
ZERO_ADDRESS = "0x" + "00" * 20
