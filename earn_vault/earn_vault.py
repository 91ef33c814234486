"""
EarnVault: single-asset ERC4626 vault routed into one external yield target.

Normal mode
    deposits go straight into the target through the lego; shares are
    priced with virtual shares (see share_math) and every user action
    harvests the performance fee first, so profit is charged exactly once.

Emergency mode (one-way)
    user actions stop and the target position is pulled back into the
    vault's idle balance, as far as the target's liquidity allows.

Recovery mode (one-way, from emergency)
    idle balance and supply are frozen into a ratio; holders redeem
    against it without the target ever being called again.

Every public mutating call is one transaction (see modules.transaction):
it either completes or leaves the vault ledger untouched.
"""

from dataclasses import replace

from earn_vault import events
from earn_vault.constants import (
    DEFAULT_DECIMALS_OFFSET,
    MAX_DECIMALS_OFFSET,
    MAX_REWARD_FEE,
    MAX_UINT256,
)
from earn_vault.errors import (
    CannotRecoverForeignTargetShares,
    CannotRecoverVaultAsset,
    FirstDepositTooSmall,
    InsufficientShares,
    InvalidFee,
    InvalidToken,
    TargetDepositFailed,
    TargetWithdrawFailed,
    ZeroAddress,
    ZeroAmount,
)
from earn_vault.modules import share_math
from earn_vault.modules.addys import checksum, is_valid_addr
from earn_vault.modules.emergency import drain_target, target_value_or_zero
from earn_vault.modules.erc20 import Erc20
from earn_vault.modules.fee_harvester import calc_harvest
from earn_vault.modules.recovery_ledger import apply_settlement, freeze, settle_redeem
from earn_vault.modules.sweep import calc_sweep_amount
from earn_vault.modules.transaction import transaction, view
from earn_vault.utils import log
from earn_vault.vault_state import (
    VaultMode,
    VaultState,
    can_run,
    check_operation,
    check_transition,
    transition,
)


class EarnVault(Erc20):

    def __init__(
        self,
        _asset,
        _lego,
        _treasury,
        _name="Earn Vault",
        _symbol=None,
        _decimalsOffset=DEFAULT_DECIMALS_OFFSET,
        _minFirstDeposit=0,
        _rewardFeeBps=0,
        _address=None,
    ):
        if not is_valid_addr(_treasury):
            raise ZeroAddress("invalid treasury")
        if not 0 <= _decimalsOffset <= MAX_DECIMALS_OFFSET:
            raise ValueError(f"invalid decimals offset: {_decimalsOffset}")
        if not 0 <= _rewardFeeBps <= MAX_REWARD_FEE:
            raise InvalidFee(_rewardFeeBps)

        super().__init__(
            _name,
            _symbol or f"ev{_asset.symbol()}",
            _asset.decimals() + _decimalsOffset,
            _address,
        )

        self._asset = _asset
        self.lego = _lego
        self.lego.bindVault(self.address)
        self.treasury = checksum(_treasury)

        self.state = VaultState(
            rewardFeeBps=_rewardFeeBps,
            offset=_decimalsOffset,
            minFirstDeposit=_minFirstDeposit,
        )

    def _snapshot(self):
        snapshot = super()._snapshot()
        snapshot["state"] = replace(self.state)
        return snapshot

    def _restore(self, _snapshot):
        super()._restore(_snapshot)
        self.state = _snapshot["state"]

    ##############
    # Vault Info #
    ##############

    def asset(self) -> str:
        return self._asset.address

    def offset(self) -> int:
        return self.state.offset

    def rewardFeeBps(self) -> int:
        return self.state.rewardFeeBps

    def minFirstDeposit(self) -> int:
        return self.state.minFirstDeposit

    def lastTotalAssets(self) -> int:
        return self.state.lastTotalAssets

    def vaultMode(self) -> VaultMode:
        return self.state.mode

    def emergencyMode(self) -> bool:
        return self.state.emergencyMode

    def recoveryMode(self) -> bool:
        return self.state.recoveryMode

    def recoveryAssets(self) -> int:
        return self.state.recoveryAssets

    def recoverySupply(self) -> int:
        return self.state.recoverySupply

    def idleBalance(self) -> int:
        return self._asset.balanceOf(self.address)

    ################
    # Total Assets #
    ################

    @view
    def totalAssets(self) -> int:
        mode = self.state.mode
        if mode == VaultMode.NORMAL:
            # idle balance only counts once swept into the target
            return self.lego.totalAssets()
        if mode == VaultMode.EMERGENCY:
            return self.idleBalance() + target_value_or_zero(self.lego)
        return self.state.recoveryAssets

    def _liveTotals(self):
        # (supply, assets) as the next mutating call will see them, pending fee included
        if self.state.mode != VaultMode.NORMAL:
            return self._totalSupply, self.totalAssets()

        current = self.lego.totalAssets()
        harvest = calc_harvest(current, self.state.lastTotalAssets, self._totalSupply, self.state.rewardFeeBps, self.state.offset)
        return self._totalSupply + harvest.feeShares, current

    ###############
    # Conversions #
    ###############

    @view
    def convertToShares(self, _assets) -> int:
        if self.state.recoveryMode:
            return share_math.to_shares_frozen(_assets, self.state.recoveryAssets, self.state.recoverySupply)
        totalSupply, totalAssets = self._liveTotals()
        return share_math.to_shares(_assets, totalSupply, totalAssets, self.state.offset)

    @view
    def convertToAssets(self, _shares) -> int:
        if self.state.recoveryMode:
            return share_math.to_assets_frozen(_shares, self.state.recoveryAssets, self.state.recoverySupply)
        totalSupply, totalAssets = self._liveTotals()
        return share_math.to_assets(_shares, totalSupply, totalAssets, self.state.offset)

    @view
    def previewDeposit(self, _assets) -> int:
        return self.convertToShares(_assets)

    @view
    def previewMint(self, _shares) -> int:
        totalSupply, totalAssets = self._liveTotals()
        return share_math.to_assets(_shares, totalSupply, totalAssets, self.state.offset, True)

    @view
    def previewWithdraw(self, _assets) -> int:
        totalSupply, totalAssets = self._liveTotals()
        return share_math.to_shares(_assets, totalSupply, totalAssets, self.state.offset, True)

    @view
    def previewRedeem(self, _shares) -> int:
        return self.convertToAssets(_shares)

    @view
    def pricePerShare(self) -> int:
        return self.convertToAssets(10 ** self._decimals)

    ##########
    # Limits #
    ##########

    @view
    def maxDeposit(self, _receiver) -> int:
        if not can_run(self.state.mode, "deposit"):
            return 0
        return self.lego.remainingCapacity()

    @view
    def maxMint(self, _receiver) -> int:
        maxAssets = self.maxDeposit(_receiver)
        if maxAssets == MAX_UINT256:
            return MAX_UINT256
        return self.convertToShares(maxAssets)

    @view
    def maxWithdraw(self, _owner) -> int:
        if not can_run(self.state.mode, "withdraw"):
            return 0
        ownerAssets = self.convertToAssets(self.balanceOf(_owner))
        return min(ownerAssets, self.lego.maxWithdrawable(self.address))

    @view
    def maxRedeem(self, _owner) -> int:
        ownerShares = self.balanceOf(_owner)
        if self.state.recoveryMode:
            return ownerShares
        if not can_run(self.state.mode, "redeem"):
            return 0

        liquid = self.lego.maxWithdrawable(self.address)
        if self.convertToAssets(ownerShares) <= liquid:
            return ownerShares
        return self.convertToShares(liquid)

    ############
    # Deposits #
    ############

    @transaction
    def deposit(self, _assets, _receiver, sender=None) -> int:
        check_operation(self.state.mode, "deposit")
        if _assets == MAX_UINT256:
            _assets = self._asset.balanceOf(sender)
        if _assets == 0:
            raise ZeroAmount("cannot deposit 0 amount")
        self._validateRecipient(_receiver)

        self._harvest()
        self._checkFirstDeposit(_assets)

        shares = share_math.to_shares(_assets, self._totalSupply, self.state.lastTotalAssets, self.state.offset)
        self._deposit(sender, _receiver, _assets, shares)
        return shares

    @transaction
    def mint(self, _shares, _receiver, sender=None) -> int:
        check_operation(self.state.mode, "mint")
        if _shares == 0:
            raise ZeroAmount("cannot mint 0 shares")
        self._validateRecipient(_receiver)

        self._harvest()
        assets = share_math.to_assets(_shares, self._totalSupply, self.state.lastTotalAssets, self.state.offset, True)
        self._checkFirstDeposit(assets)

        self._deposit(sender, _receiver, assets, _shares)
        return assets

    def _checkFirstDeposit(self, _assets):
        if self._totalSupply == 0 and _assets < self.state.minFirstDeposit:
            raise FirstDepositTooSmall(self.state.minFirstDeposit, _assets)

    def _deposit(self, _sender, _receiver, _assets, _shares):
        if _shares == 0:
            raise ZeroAmount("cannot mint 0 shares")
        if _assets > self.lego.remainingCapacity():
            raise TargetDepositFailed("exceeds target capacity")

        self._asset.transferFrom(_sender, self.address, _assets, sender=self.address)
        try:
            self.lego.deposit(_assets)
        except Exception as e:
            # hand the pulled assets back before aborting
            self._asset.transfer(_sender, _assets, sender=self.address)
            raise TargetDepositFailed() from e

        self._mint(_receiver, _shares)
        self.state.lastTotalAssets = self.lego.totalAssets()
        self._log(events.Deposit(sender=checksum(_sender), owner=checksum(_receiver), assets=_assets, shares=_shares))

    ###############
    # Withdrawals #
    ###############

    @transaction
    def withdraw(self, _assets, _receiver, _owner, sender=None) -> int:
        check_operation(self.state.mode, "withdraw")
        if _assets == 0:
            raise ZeroAmount("cannot withdraw 0 amount")
        self._validateRecipient(_receiver)

        self._harvest()
        shares = share_math.to_shares(_assets, self._totalSupply, self.state.lastTotalAssets, self.state.offset, True)
        self._withdraw(sender, _receiver, _owner, _assets, shares)
        return shares

    @transaction
    def redeem(self, _shares, _receiver, _owner, sender=None) -> int:
        check_operation(self.state.mode, "redeem")
        if _shares == MAX_UINT256:
            _shares = self.balanceOf(_owner)
        if _shares == 0:
            raise ZeroAmount("cannot redeem 0 shares")
        self._validateRecipient(_receiver)

        if self.state.recoveryMode:
            return self._recoveryRedeem(sender, _receiver, _owner, _shares)

        self._harvest()
        assets = share_math.to_assets(_shares, self._totalSupply, self.state.lastTotalAssets, self.state.offset)
        if assets == 0:
            raise ZeroAmount("cannot redeem for 0 assets")
        self._withdraw(sender, _receiver, _owner, assets, _shares)
        return assets

    def _burnFrom(self, _sender, _owner, _shares):
        ownerShares = self.balanceOf(_owner)
        if _shares > ownerShares:
            raise InsufficientShares(_shares, ownerShares)
        if checksum(_sender) != checksum(_owner):
            self._spendAllowance(_owner, _sender, _shares)
        self._burn(_owner, _shares)

    def _withdraw(self, _sender, _receiver, _owner, _assets, _shares):
        self._burnFrom(_sender, _owner, _shares)

        try:
            self.lego.withdraw(_assets)
        except Exception as e:
            raise TargetWithdrawFailed() from e

        self._asset.transfer(_receiver, _assets, sender=self.address)
        self.state.lastTotalAssets = self.lego.totalAssets()
        self._log(events.Withdraw(
            sender=checksum(_sender),
            receiver=checksum(_receiver),
            owner=checksum(_owner),
            assets=_assets,
            shares=_shares,
        ))

    def _recoveryRedeem(self, _sender, _receiver, _owner, _shares) -> int:
        # frozen ratio only, the target is never consulted
        settlement = settle_redeem(_shares, self.state.recoveryAssets, self.state.recoverySupply)
        if settlement.assets == 0:
            raise ZeroAmount("cannot redeem for 0 assets")

        self._burnFrom(_sender, _owner, _shares)
        self._asset.transfer(_receiver, settlement.assets, sender=self.address)
        apply_settlement(self.state, settlement)

        self._log(events.Withdraw(
            sender=checksum(_sender),
            receiver=checksum(_receiver),
            owner=checksum(_owner),
            assets=settlement.assets,
            shares=_shares,
        ))
        return settlement.assets

    def _validateRecipient(self, _recipient):
        if not is_valid_addr(_recipient) or checksum(_recipient) == self._asset.address:
            raise ZeroAddress("invalid recipient")

    ########
    # Fees #
    ########

    @transaction
    def harvestFees(self) -> int:
        if not can_run(self.state.mode, "harvestFees"):
            return 0
        return self._harvest()

    def _harvest(self) -> int:
        harvest = calc_harvest(
            self.lego.totalAssets(),
            self.state.lastTotalAssets,
            self._totalSupply,
            self.state.rewardFeeBps,
            self.state.offset,
        )
        if harvest.feeShares != 0:
            self._mint(self.treasury, harvest.feeShares)
            self._log(events.FeesHarvested(
                profit=harvest.profit,
                feeValue=harvest.feeValue,
                feeShares=harvest.feeShares,
                treasury=self.treasury,
            ))

        self.state.lastTotalAssets = harvest.currentAssets
        return harvest.feeShares

    @transaction
    def setRewardFee(self, _rewardFeeBps) -> bool:
        if not 0 <= _rewardFeeBps <= MAX_REWARD_FEE:
            raise InvalidFee(_rewardFeeBps)

        # profit so far is charged at the old rate
        if can_run(self.state.mode, "harvestFees"):
            self._harvest()

        prevFee = self.state.rewardFeeBps
        self.state.rewardFeeBps = _rewardFeeBps
        self._log(events.RewardFeeSet(prevFee=prevFee, newFee=_rewardFeeBps))
        return True

    @transaction
    def setMinFirstDeposit(self, _amount) -> bool:
        if _amount < 0:
            raise ValueError(f"invalid min first deposit: {_amount}")
        prevAmount = self.state.minFirstDeposit
        self.state.minFirstDeposit = _amount
        self._log(events.MinFirstDepositSet(prevAmount=prevAmount, newAmount=_amount))
        return True

    #############
    # Emergency #
    #############

    @transaction
    def activateEmergencyMode(self) -> int:
        check_transition(self.state, VaultMode.EMERGENCY)

        # a broken target must not block the switch
        try:
            self._harvest()
        except Exception as e:
            log.error(f"Emergency activation: fee harvest skipped ({e!r})")

        transition(self.state, VaultMode.EMERGENCY)
        log.h2(f"Emergency mode activated for {self._symbol} vault {self.address}")
        self._log(events.EmergencyModeActivated(lastTotalAssets=self.state.lastTotalAssets))
        return self._emergencyDrain()

    @transaction
    def emergencyWithdraw(self) -> int:
        check_operation(self.state.mode, "emergencyWithdraw")
        return self._emergencyDrain()

    def _emergencyDrain(self) -> int:
        recovered = drain_target(self.lego, self._asset, self.address)

        # assets left the target, so does the high-water mark
        self.state.lastTotalAssets = max(0, self.state.lastTotalAssets - recovered)
        self._log(events.EmergencyWithdrawal(amount=recovered, idleBalance=self.idleBalance()))
        return recovered

    ############
    # Recovery #
    ############

    @transaction
    def activateRecovery(self) -> int:
        transition(self.state, VaultMode.RECOVERY)

        # own balance and supply only, nothing from the target
        freeze(self.state, self.idleBalance(), self._totalSupply)

        log.h2(f"Recovery mode activated: {self.state.recoveryAssets} assets for {self.state.recoverySupply} shares")
        self._log(events.RecoveryModeActivated(
            recoveryAssets=self.state.recoveryAssets,
            recoverySupply=self.state.recoverySupply,
        ))
        return self.state.recoveryAssets

    ####################
    # Unallocated Idle #
    ####################

    @transaction
    def depositUnallocatedAssets(self) -> int:
        check_operation(self.state.mode, "depositUnallocatedAssets")

        amount = calc_sweep_amount(self.idleBalance(), self.lego.remainingCapacity())
        try:
            self.lego.deposit(amount)
        except Exception as e:
            raise TargetDepositFailed() from e

        # no harvest here, the next one books this as profit
        self._log(events.UnallocatedAssetsDeposited(amount=amount, remainingIdle=self.idleBalance()))
        return amount

    @transaction
    def recoverFunds(self, _token, _recipient) -> int:
        # needs the token object, not its address
        if not callable(getattr(_token, "balanceOf", None)):
            raise InvalidToken()
        token = checksum(_token)
        if token == checksum(self.lego.claimToken()):
            raise CannotRecoverForeignTargetShares()
        if token == self._asset.address:
            raise CannotRecoverVaultAsset()
        if not is_valid_addr(_recipient):
            raise ZeroAddress("invalid recipient")

        balance = _token.balanceOf(self.address)
        if balance == 0:
            raise ZeroAmount("nothing to recover")

        _token.transfer(_recipient, balance, sender=self.address)
        self._log(events.FundsRecovered(token=token, recipient=checksum(_recipient), amount=balance))
        return balance

    ############
    # Snapshot #
    ############

    @view
    def getVaultSnapshot(self) -> dict:
        return {
            "address": self.address,
            "asset": self._asset.address,
            "treasury": self.treasury,
            "mode": self.state.mode.name,
            "totalSupply": self._totalSupply,
            "totalAssets": self.totalAssets(),
            "idleBalance": self.idleBalance(),
            "lastTotalAssets": self.state.lastTotalAssets,
            "rewardFeeBps": self.state.rewardFeeBps,
            "offset": self.state.offset,
            "minFirstDeposit": self.state.minFirstDeposit,
            "recoveryAssets": self.state.recoveryAssets,
            "recoverySupply": self.state.recoverySupply,
            "balances": {user: bal for user, bal in self._balances.items() if bal != 0},
        }
