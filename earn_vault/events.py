from dataclasses import dataclass


# erc20


@dataclass(frozen=True)
class Transfer:
    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Approval:
    owner: str
    spender: str
    amount: int


# erc4626


@dataclass(frozen=True)
class Deposit:
    sender: str
    owner: str
    assets: int
    shares: int


@dataclass(frozen=True)
class Withdraw:
    sender: str
    receiver: str
    owner: str
    assets: int
    shares: int


# fees / config


@dataclass(frozen=True)
class FeesHarvested:
    profit: int
    feeValue: int
    feeShares: int
    treasury: str


@dataclass(frozen=True)
class RewardFeeSet:
    prevFee: int
    newFee: int


@dataclass(frozen=True)
class MinFirstDepositSet:
    prevAmount: int
    newAmount: int


# emergency / recovery


@dataclass(frozen=True)
class EmergencyModeActivated:
    lastTotalAssets: int


@dataclass(frozen=True)
class EmergencyWithdrawal:
    amount: int
    idleBalance: int


@dataclass(frozen=True)
class RecoveryModeActivated:
    recoveryAssets: int
    recoverySupply: int


# idle balance


@dataclass(frozen=True)
class UnallocatedAssetsDeposited:
    amount: int
    remainingIdle: int


@dataclass(frozen=True)
class FundsRecovered:
    token: str
    recipient: str
    amount: int
