from earn_vault.constants import MAX_UINT256
from earn_vault.modules.addys import checksum
from earn_vault.modules.erc20 import Erc20
from earn_vault.modules.share_math import mul_div
from earn_vault.modules.transaction import transaction, view


class MockTargetError(Exception):
    pass


class MockTargetReverted(MockTargetError):
    pass


class MockYieldVault(Erc20):
    """
    Minimal ERC4626 yield source.

    Yield is simulated by minting asset straight to this contract, losses
    by `simulateLoss`. The deposit cap bounds `maxDeposit`, the liquidity
    cap bounds `maxWithdraw`, and `setShouldRevert(True)` makes every call
    fail the way an unreachable or hostile target would.
    """

    def __init__(self, _asset, _depositCap=MAX_UINT256, _name="Mock Yield Vault", _symbol="mYV"):
        super().__init__(_name, _symbol, _asset.decimals())
        self.asset = _asset
        self.depositCap = _depositCap
        self.liquidityCap = None
        self.shouldRevert = False

    def _checkRevert(self):
        if self.shouldRevert:
            raise MockTargetReverted("target reverted")

    ##########
    # Config #
    ##########

    def setDepositCap(self, _cap):
        self.depositCap = _cap

    def setLiquidityCap(self, _cap):
        # None means all assets are liquid
        self.liquidityCap = _cap

    def setShouldRevert(self, _shouldRevert):
        self.shouldRevert = _shouldRevert

    def simulateLoss(self, _amount):
        self.asset.burn(self.address, _amount)

    #########
    # Views #
    #########

    @view
    def balanceOf(self, _user) -> int:
        self._checkRevert()
        return super().balanceOf(_user)

    def totalAssets(self) -> int:
        self._checkRevert()
        return self.asset.balanceOf(self.address)

    def convertToShares(self, _assets, _roundUp=False) -> int:
        self._checkRevert()
        totalAssets = self.totalAssets()
        if self._totalSupply == 0 or totalAssets == 0:
            return _assets
        return mul_div(_assets, self._totalSupply, totalAssets, _roundUp)

    def convertToAssets(self, _shares) -> int:
        self._checkRevert()
        if self._totalSupply == 0:
            return _shares
        return mul_div(_shares, self.totalAssets(), self._totalSupply)

    def previewWithdraw(self, _assets) -> int:
        return self.convertToShares(_assets, True)

    def maxDeposit(self, _receiver) -> int:
        self._checkRevert()
        if self.depositCap == MAX_UINT256:
            return MAX_UINT256
        return max(0, self.depositCap - self.totalAssets())

    def maxWithdraw(self, _owner) -> int:
        self._checkRevert()
        ownerAssets = self.convertToAssets(super().balanceOf(_owner))
        liquid = self.totalAssets()
        if self.liquidityCap is not None:
            liquid = min(liquid, self.liquidityCap)
        return min(ownerAssets, liquid)

    ###########
    # Actions #
    ###########

    @transaction
    def deposit(self, _assets, _receiver, sender=None) -> int:
        self._checkRevert()
        if _assets > self.maxDeposit(_receiver):
            raise MockTargetError("exceeds deposit cap")

        shares = self.convertToShares(_assets)
        self.asset.transferFrom(sender, self.address, _assets, sender=self.address)
        self._mint(_receiver, shares)
        return shares

    @transaction
    def withdraw(self, _assets, _receiver, _owner, sender=None) -> int:
        self._checkRevert()
        if _assets > self.maxWithdraw(_owner):
            raise MockTargetError("insufficient liquidity")

        shares = self.previewWithdraw(_assets)
        if checksum(sender) != checksum(_owner):
            self._spendAllowance(_owner, sender, shares)
        self._burn(_owner, shares)
        self.asset.transfer(_receiver, _assets, sender=self.address)
        if self.liquidityCap is not None:
            self.liquidityCap -= _assets
        return shares
