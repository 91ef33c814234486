class VaultError(Exception):
    """Base class for every error raised by the vault engine"""

    message = "vault error"

    def __init__(self, msg=None):
        super().__init__(msg or self.message)


class ZeroAmount(VaultError):
    message = "cannot use 0 amount"


class ZeroAddress(VaultError):
    message = "invalid recipient"


class FirstDepositTooSmall(VaultError):
    def __init__(self, minimum, given):
        self.minimum = minimum
        self.given = given
        super().__init__(f"first deposit too small ({given} < {minimum})")


class InsufficientShares(VaultError):
    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super().__init__(f"insufficient shares (requested {requested}, available {available})")


class InsufficientBalance(VaultError):
    message = "insufficient funds"


class InsufficientAllowance(VaultError):
    message = "insufficient allowance"


class InvalidFee(VaultError):
    def __init__(self, given):
        self.given = given
        super().__init__(f"invalid reward fee: {given}")


class DisabledDuringEmergencyMode(VaultError):
    message = "disabled during emergency mode"


class DisabledDuringRecoveryMode(VaultError):
    message = "disabled during recovery mode"


class EmergencyModeNotActive(VaultError):
    message = "emergency mode not active"


class InvalidModeTransition(VaultError):
    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(f"invalid mode transition: {current.name} -> {requested.name}")


class TargetDepositFailed(VaultError):
    message = "deposit failed"


class TargetWithdrawFailed(VaultError):
    message = "withdraw failed"


class CannotRecoverForeignTargetShares(VaultError):
    message = "cannot recover target vault shares"


class CannotRecoverVaultAsset(VaultError):
    message = "cannot recover vault asset"


class InvalidToken(VaultError):
    message = "invalid token"
