"""TRON address encoding"""
import re
from typing import Any, Optional

import base58

ADDRESS_PREFIX = '41'
_HEX_ADDRESS = re.compile(r'(?:41|0x)[0-9a-fA-F]{40}')


def is_hex_address(value: Any) -> bool:
    """True for a 41-prefixed or 0x-prefixed 20-byte hex address"""
    return isinstance(value, str) and _HEX_ADDRESS.fullmatch(value) is not None


def hex_to_base58(address: Optional[str]) -> Optional[str]:
    """
    Convert a hex TRON address to its base58check form.

    Accepts the 41-prefixed form TronGrid uses as well as 0x-prefixed
    20-byte hex. Empty input stays None.
    """
    if not address:
        return None
    if not is_hex_address(address):
        raise ValueError(f"Not a hex TRON address: {address}")
    value = ADDRESS_PREFIX + address[2:]
    return base58.b58encode_check(bytes.fromhex(value)).decode('ascii')
