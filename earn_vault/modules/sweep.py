from earn_vault.errors import TargetDepositFailed


def calc_sweep_amount(_idleBalance: int, _remainingCapacity: int) -> int:
    amount = max(0, min(_idleBalance, _remainingCapacity))
    if amount == 0:
        if _idleBalance == 0:
            raise TargetDepositFailed("no unallocated assets")
        raise TargetDepositFailed("target at capacity")
    return amount
