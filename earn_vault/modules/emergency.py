"""
Emergency liquidation of the target position.

Draining never raises: a broken or illiquid target simply yields less
(or zero) progress, and the caller can try again once liquidity returns.
"""

from earn_vault.utils import log


def calc_drain_amount(_targetValue: int, _maxWithdrawable: int) -> int:
    return max(0, min(_targetValue, _maxWithdrawable))


def drain_target(_lego, _asset, _vaultAddr) -> int:
    """Pull as much as the target allows into the vault's idle balance, returns assets recovered"""
    try:
        targetValue = _lego.totalAssets()
        maxWithdrawable = _lego.maxWithdrawable(_vaultAddr)
    except Exception as e:
        log.error(f"Emergency drain: cannot read target position ({e!r})")
        return 0

    amount = calc_drain_amount(targetValue, maxWithdrawable)
    if amount == 0:
        log.warn("Emergency drain: nothing withdrawable from target")
        return 0

    idleBefore = _asset.balanceOf(_vaultAddr)
    try:
        _lego.withdraw(amount)
    except Exception as e:
        log.error(f"Emergency drain: target withdraw of {amount} failed ({e!r})")
        return 0

    recovered = _asset.balanceOf(_vaultAddr) - idleBefore
    log.h3(f"Emergency drain: recovered {recovered} of {targetValue} held in target")
    return recovered


def target_value_or_zero(_lego) -> int:
    # valuation of whatever is still stuck in the target, 0 if it cannot answer
    try:
        return _lego.totalAssets()
    except Exception:
        return 0
