"""
Strict address parsing on top of pytoniq_core.Address.

Accepts raw ("0:<64 hex>") and user-friendly (48 chars, base64 or base64url, CRC16
checked) forms and rejects everything else with InvalidAddressError, including short
raw hashes and workchains outside int8 that pytoniq_core would take as-is.
Equality ignores the bounceable and testnet flags.
"""

from __future__ import annotations

from pytoniq_core import Address, AddressError

from trust_attestation.core.exceptions import InvalidAddressError

FRIENDLY_LEN = 48
HASH_LEN = 32


def parse_address(value: Address | str) -> Address:
    """Parse a raw or user-friendly address string. Address instances pass through."""
    if isinstance(value, Address):
        return value
    if not isinstance(value, str):
        raise InvalidAddressError(f"address must be a string, got {type(value).__name__}")
    text = value.strip()
    if not text:
        raise InvalidAddressError("address must be non-empty")
    if ":" not in text and len(text) != FRIENDLY_LEN:
        raise InvalidAddressError(f"Invalid address length {len(text)}: {text!r}")
    try:
        address = Address(text)
    except (AddressError, ValueError, IndexError) as e:
        raise InvalidAddressError(f"Invalid address: {text!r}") from e
    if len(address.hash_part) != HASH_LEN:
        raise InvalidAddressError(f"address hash must be 32 bytes: {text!r}")
    if not -128 <= address.wc <= 127:
        raise InvalidAddressError(f"workchain out of int8 range: {address.wc}")
    return address


def is_valid_address(value: str) -> bool:
    try:
        parse_address(value)
    except InvalidAddressError:
        return False
    return True
