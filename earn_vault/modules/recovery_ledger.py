from dataclasses import dataclass

from earn_vault.modules.share_math import to_assets_frozen


@dataclass(frozen=True)
class RecoverySettlement:
    shares: int
    assets: int
    recoveryAssets: int
    recoverySupply: int


def settle_redeem(_shares: int, _recoveryAssets: int, _recoverySupply: int) -> RecoverySettlement:
    """
    Pro-rata payout against the frozen ratio.

    Both sides of the ratio shrink by what is actually settled, so the
    floor remainder of each redemption stays in the pool for later
    redeemers instead of drifting the ratio.
    """
    assets = to_assets_frozen(_shares, _recoveryAssets, _recoverySupply)
    return RecoverySettlement(
        shares=_shares,
        assets=assets,
        recoveryAssets=_recoveryAssets - assets,
        recoverySupply=_recoverySupply - _shares,
    )


def freeze(_state, _idleBalance: int, _totalSupply: int) -> int:
    """Lock the recovery pool to the vault's own balance and the current supply"""
    _state.recoveryAssets = _idleBalance
    _state.recoverySupply = _totalSupply
    return _idleBalance


def apply_settlement(_state, _settlement: RecoverySettlement):
    _state.recoveryAssets = _settlement.recoveryAssets
    _state.recoverySupply = _settlement.recoverySupply
