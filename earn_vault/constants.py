ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2 ** 256 - 1

HUNDRED_PERCENT = 100_00
MAX_REWARD_FEE = 50_00

# virtual shares offset (decimal exponent)
DEFAULT_DECIMALS_OFFSET = 6
MAX_DECIMALS_OFFSET = 18
