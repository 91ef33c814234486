import itertools
import threading

from earn_vault import events
from earn_vault.constants import MAX_UINT256
from earn_vault.errors import InsufficientAllowance, InsufficientBalance, ZeroAddress, ZeroAmount
from earn_vault.modules.addys import checksum, generate_address, is_valid_addr
from earn_vault.modules.transaction import transaction, view

_deployments = itertools.count(1)


class Erc20:
    """
    Fungible token ledger (balances, allowances, supply).

    Base for the vault's own shares and for the mock asset / target tokens.
    Mutating calls take the acting account as the `sender` keyword.
    """

    def __init__(self, _name, _symbol, _decimals, _address=None):
        self._name = _name
        self._symbol = _symbol
        self._decimals = _decimals
        self.address = checksum(_address) if _address else generate_address(f"{_symbol}-{next(_deployments)}")

        self._balances = {}
        self._allowances = {}
        self._totalSupply = 0

        self._lock = threading.RLock()
        self._depth = 0
        self._logs = []
        self._pendingLogs = []

    def __repr__(self):
        return f"<{type(self).__name__} {self._symbol} at {self.address}>"

    ########
    # Logs #
    ########

    def get_logs(self):
        """Events emitted by the last completed call"""
        return list(self._logs)

    def _log(self, _event):
        self._pendingLogs.append(_event)

    ###############
    # Transaction #
    ###############

    def _snapshot(self):
        return {
            "balances": dict(self._balances),
            "allowances": {owner: dict(spenders) for owner, spenders in self._allowances.items()},
            "totalSupply": self._totalSupply,
        }

    def _restore(self, _snapshot):
        self._balances = _snapshot["balances"]
        self._allowances = _snapshot["allowances"]
        self._totalSupply = _snapshot["totalSupply"]

    #########
    # Views #
    #########

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def decimals(self) -> int:
        return self._decimals

    @view
    def totalSupply(self) -> int:
        return self._totalSupply

    @view
    def balanceOf(self, _user) -> int:
        return self._balances.get(checksum(_user), 0)

    @view
    def allowance(self, _owner, _spender) -> int:
        return self._allowances.get(checksum(_owner), {}).get(checksum(_spender), 0)

    #############
    # Transfers #
    #############

    @transaction
    def transfer(self, _recipient, _amount, sender=None) -> bool:
        self._transfer(checksum(sender), _recipient, _amount)
        return True

    @transaction
    def transferFrom(self, _sender, _recipient, _amount, sender=None) -> bool:
        if _amount == 0:
            raise ZeroAmount("cannot transfer 0 amount")
        self._spendAllowance(_sender, sender, _amount)
        self._transfer(checksum(_sender), _recipient, _amount)
        return True

    @transaction
    def approve(self, _spender, _amount, sender=None) -> bool:
        if not is_valid_addr(_spender):
            raise ZeroAddress("invalid spender")
        owner = checksum(sender)
        spender = checksum(_spender)
        self._allowances.setdefault(owner, {})[spender] = _amount
        self._log(events.Approval(owner=owner, spender=spender, amount=_amount))
        return True

    ############
    # Internal #
    ############

    def _transfer(self, _sender, _recipient, _amount):
        if not is_valid_addr(_recipient) or checksum(_recipient) == self.address:
            raise ZeroAddress("invalid recipient")
        if _amount == 0:
            raise ZeroAmount("cannot transfer 0 amount")

        sender = checksum(_sender)
        recipient = checksum(_recipient)
        senderBal = self._balances.get(sender, 0)
        if senderBal < _amount:
            raise InsufficientBalance()

        self._balances[sender] = senderBal - _amount
        self._balances[recipient] = self._balances.get(recipient, 0) + _amount
        self._log(events.Transfer(sender=sender, recipient=recipient, amount=_amount))

    def _spendAllowance(self, _owner, _spender, _amount):
        owner = checksum(_owner)
        spender = checksum(_spender)
        if owner == spender:
            return

        allowance = self._allowances.get(owner, {}).get(spender, 0)
        if allowance == MAX_UINT256:
            return
        if allowance < _amount:
            raise InsufficientAllowance()
        self._allowances.setdefault(owner, {})[spender] = allowance - _amount

    def _mint(self, _recipient, _amount):
        if not is_valid_addr(_recipient):
            raise ZeroAddress("invalid recipient")
        recipient = checksum(_recipient)
        self._balances[recipient] = self._balances.get(recipient, 0) + _amount
        self._totalSupply += _amount
        self._log(events.Transfer(sender=checksum(None), recipient=recipient, amount=_amount))

    def _burn(self, _owner, _amount):
        owner = checksum(_owner)
        ownerBal = self._balances.get(owner, 0)
        if ownerBal < _amount:
            raise InsufficientBalance()
        self._balances[owner] = ownerBal - _amount
        self._totalSupply -= _amount
        self._log(events.Transfer(sender=owner, recipient=checksum(None), amount=_amount))
