from eth_utils import is_address, keccak, to_checksum_address

from earn_vault.constants import ZERO_ADDRESS


def _raw(_addr):
    # accept anything exposing an `address` (tokens, vaults, legos)
    return getattr(_addr, "address", _addr)


def is_valid_addr(_addr) -> bool:
    _addr = _raw(_addr)
    if _addr is None or not is_address(_addr):
        return False
    return to_checksum_address(_addr) != ZERO_ADDRESS


def checksum(_addr) -> str:
    _addr = _raw(_addr)
    if not _addr:
        return ZERO_ADDRESS
    return to_checksum_address(_addr)


def generate_address(_label: str) -> str:
    """Deterministic address for a label (last 20 bytes of its keccak hash)"""
    return to_checksum_address(keccak(text=_label)[-20:])
