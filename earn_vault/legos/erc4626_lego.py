from earn_vault.legos.target_adapter import TargetAdapter
from earn_vault.modules.addys import checksum


class Erc4626Lego(TargetAdapter):
    """TargetAdapter for an ERC4626-shaped yield vault, acting on behalf of one earn vault"""

    def __init__(self, _targetVault, _asset):
        self.target = _targetVault
        self.asset = _asset
        self.vault = None

    def bindVault(self, _vault):
        self.vault = checksum(_vault)

    def deposit(self, _assets: int) -> int:
        self.asset.approve(self.target.address, _assets, sender=self.vault)
        return self.target.deposit(_assets, self.vault, sender=self.vault)

    def withdraw(self, _assets: int) -> int:
        return self.target.withdraw(_assets, self.vault, self.vault, sender=self.vault)

    def balanceOfVault(self) -> int:
        return self.target.balanceOf(self.vault)

    def convertToAssets(self, _shares: int) -> int:
        return self.target.convertToAssets(_shares)

    def maxWithdrawable(self, _holder) -> int:
        return self.target.maxWithdraw(_holder)

    def remainingCapacity(self) -> int:
        return self.target.maxDeposit(self.vault)

    def claimToken(self) -> str:
        return self.target.address
