from earn_vault.modules.erc20 import Erc20
from earn_vault.modules.transaction import transaction


class MockErc20(Erc20):
    """Asset token with open mint / burn, for tests and simulations"""

    def __init__(self, _name="Mock USDC", _symbol="USDC", _decimals=6, _address=None):
        super().__init__(_name, _symbol, _decimals, _address)

    @transaction
    def mint(self, _recipient, _amount, sender=None) -> bool:
        self._mint(_recipient, _amount)
        return True

    @transaction
    def burn(self, _owner, _amount, sender=None) -> bool:
        self._burn(_owner, _amount)
        return True
