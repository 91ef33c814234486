from earn_vault.constants import MAX_UINT256

SIX_DECIMALS = 10 ** 6
EIGHT_DECIMALS = 10 ** 8
EIGHTEEN_DECIMALS = 10 ** 18


PARAMS = {
    "base": {
        # share accounting
        "EARN_VAULT_DECIMALS_OFFSET": 6,
        # fees (bps)
        "EARN_VAULT_REWARD_FEE": 20_00,
        # mock target (simulations only)
        "MOCK_TARGET_DEPOSIT_CAP": MAX_UINT256,
    },
    "local": {
        # share accounting
        "EARN_VAULT_DECIMALS_OFFSET": 6,
        # fees (bps)
        "EARN_VAULT_REWARD_FEE": 5_00,
        # mock target (simulations only)
        "MOCK_TARGET_DEPOSIT_CAP": MAX_UINT256,
    },
}


# per asset vault info (min first deposit in asset units)
VAULT_INFO = {
    "USDC": {
        "name": "Earn USDC",
        "symbol": "evUSDC",
        "decimals": 6,
        "minFirstDeposit": 1 * SIX_DECIMALS,
    },
    "WETH": {
        "name": "Earn WETH",
        "symbol": "evWETH",
        "decimals": 18,
        "minFirstDeposit": EIGHTEEN_DECIMALS // 1000,
    },
    "CBBTC": {
        "name": "Earn cbBTC",
        "symbol": "evCBBTC",
        "decimals": 8,
        "minFirstDeposit": EIGHT_DECIMALS // 10_000,
    },
}


TOKENS = {
    "base": {
        "USDC": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        "WETH": "0x4200000000000000000000000000000000000006",
        "CBBTC": "0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf",
    },
    "local": {},
}
