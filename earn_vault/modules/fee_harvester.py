from dataclasses import dataclass

from earn_vault.constants import HUNDRED_PERCENT
from earn_vault.modules.share_math import mul_div, virtual_shares


@dataclass(frozen=True)
class HarvestResult:
    currentAssets: int
    profit: int
    feeValue: int
    feeShares: int


def calc_harvest(_currentAssets: int, _lastTotalAssets: int, _totalSupply: int, _rewardFeeBps: int, _offset: int) -> HarvestResult:
    """
    Profit above the high-water mark and the treasury shares it pays for.

    Fee shares are priced against the pre-mint supply and the asset base
    net of the fee itself, so minting them moves exactly `feeValue` of
    value from existing holders to the treasury:

        feeShares / (totalSupply + feeShares) == feeValue / currentAssets
    """
    if _currentAssets <= _lastTotalAssets:
        return HarvestResult(_currentAssets, 0, 0, 0)

    profit = _currentAssets - _lastTotalAssets
    feeValue = profit * _rewardFeeBps // HUNDRED_PERCENT

    # nobody to charge, profit just raises the mark
    if feeValue == 0 or _totalSupply == 0:
        return HarvestResult(_currentAssets, profit, 0, 0)

    feeShares = mul_div(feeValue, _totalSupply + virtual_shares(_offset), _currentAssets + 1 - feeValue)
    return HarvestResult(_currentAssets, profit, feeValue, feeShares)
