from dataclasses import dataclass
from enum import IntEnum

from earn_vault.errors import (
    DisabledDuringEmergencyMode,
    DisabledDuringRecoveryMode,
    EmergencyModeNotActive,
    InvalidModeTransition,
)


class VaultMode(IntEnum):
    NORMAL = 1
    EMERGENCY = 2
    RECOVERY = 3


# one-way: normal -> emergency -> recovery
ALLOWED_TRANSITIONS = {
    VaultMode.NORMAL: {VaultMode.EMERGENCY},
    VaultMode.EMERGENCY: {VaultMode.RECOVERY},
    VaultMode.RECOVERY: set(),
}


# modes in which each operation may run
OPERATION_MODES = {
    "deposit": {VaultMode.NORMAL},
    "mint": {VaultMode.NORMAL},
    "withdraw": {VaultMode.NORMAL},
    "redeem": {VaultMode.NORMAL, VaultMode.RECOVERY},
    "depositUnallocatedAssets": {VaultMode.NORMAL},
    "harvestFees": {VaultMode.NORMAL},
    "emergencyWithdraw": {VaultMode.EMERGENCY},
}


@dataclass
class VaultState:
    lastTotalAssets: int = 0
    rewardFeeBps: int = 0
    offset: int = 0
    minFirstDeposit: int = 0
    mode: VaultMode = VaultMode.NORMAL
    recoveryAssets: int = 0
    recoverySupply: int = 0

    @property
    def emergencyMode(self) -> bool:
        return self.mode >= VaultMode.EMERGENCY

    @property
    def recoveryMode(self) -> bool:
        return self.mode == VaultMode.RECOVERY


def can_run(_mode: VaultMode, _op: str) -> bool:
    return _mode in OPERATION_MODES[_op]


def check_operation(_mode: VaultMode, _op: str):
    if can_run(_mode, _op):
        return
    if _mode == VaultMode.RECOVERY:
        raise DisabledDuringRecoveryMode()
    if _mode == VaultMode.EMERGENCY:
        raise DisabledDuringEmergencyMode()
    raise EmergencyModeNotActive()


def check_transition(_state: VaultState, _to: VaultMode):
    if _to in ALLOWED_TRANSITIONS[_state.mode]:
        return
    if _state.mode == VaultMode.NORMAL and _to == VaultMode.RECOVERY:
        raise EmergencyModeNotActive()
    raise InvalidModeTransition(_state.mode, _to)


def transition(_state: VaultState, _to: VaultMode):
    check_transition(_state, _to)
    _state.mode = _to
