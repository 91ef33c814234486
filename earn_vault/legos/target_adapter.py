from abc import ABC, abstractmethod


class TargetAdapter(ABC):
    """
    Capability surface of the external yield source, as seen by one vault.

    Amounts are in the vault's asset unless named `shares` (the target's
    own claim token). Any method may raise; the vault decides whether a
    failure aborts the operation or is tolerated.
    """

    @abstractmethod
    def deposit(self, _assets: int) -> int:
        """Move `_assets` of idle vault balance into the target, returns target shares received"""

    @abstractmethod
    def withdraw(self, _assets: int) -> int:
        """Pull `_assets` out of the target into the vault, returns target shares burned"""

    @abstractmethod
    def balanceOfVault(self) -> int:
        """Target shares held by the vault"""

    @abstractmethod
    def convertToAssets(self, _shares: int) -> int:
        pass

    @abstractmethod
    def maxWithdrawable(self, _holder) -> int:
        """Assets `_holder` can pull out right now (liquidity bound)"""

    @abstractmethod
    def remainingCapacity(self) -> int:
        """Assets the target still accepts"""

    @abstractmethod
    def claimToken(self) -> str:
        """Address of the target's share token"""

    def totalAssets(self) -> int:
        return self.convertToAssets(self.balanceOfVault())

    def bindVault(self, _vault):
        """Attach the adapter to the vault it acts for"""
        self.vault = _vault
