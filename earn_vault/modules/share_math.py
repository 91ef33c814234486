"""
Asset <-> share conversion with virtual shares.

    shares = assets * (totalSupply + 10**offset) / (totalAssets + 1)
    assets = shares * (totalAssets + 1) / (totalSupply + 10**offset)

The virtual term on each side keeps the exchange rate bounded while the
vault is empty or nearly empty, so a first depositor (or a donation to
the target) can only move the price at a cost proportional to
10**offset. Rounding always favours the vault: deposit / redeem round
down, mint / withdraw round up.
"""


def mul_div(_x: int, _y: int, _denom: int, _roundUp: bool = False) -> int:
    numerator = _x * _y
    result = numerator // _denom
    if _roundUp and numerator % _denom != 0:
        result += 1
    return result


def virtual_shares(_offset: int) -> int:
    return 10 ** _offset


def to_shares(_assets: int, _totalSupply: int, _totalAssets: int, _offset: int, _roundUp: bool = False) -> int:
    return mul_div(_assets, _totalSupply + virtual_shares(_offset), _totalAssets + 1, _roundUp)


def to_assets(_shares: int, _totalSupply: int, _totalAssets: int, _offset: int, _roundUp: bool = False) -> int:
    return mul_div(_shares, _totalAssets + 1, _totalSupply + virtual_shares(_offset), _roundUp)


# frozen ratio (recovery)


def to_assets_frozen(_shares: int, _recoveryAssets: int, _recoverySupply: int) -> int:
    if _recoverySupply == 0:
        return 0
    return _shares * _recoveryAssets // _recoverySupply


def to_shares_frozen(_assets: int, _recoveryAssets: int, _recoverySupply: int) -> int:
    if _recoveryAssets == 0:
        return 0
    return _assets * _recoverySupply // _recoveryAssets
