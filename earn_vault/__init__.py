from earn_vault.earn_vault import EarnVault
from earn_vault.legos.erc4626_lego import Erc4626Lego
from earn_vault.legos.target_adapter import TargetAdapter
from earn_vault.vault_state import VaultMode, VaultState

__all__ = [
    "EarnVault",
    "Erc4626Lego",
    "TargetAdapter",
    "VaultMode",
    "VaultState",
]
