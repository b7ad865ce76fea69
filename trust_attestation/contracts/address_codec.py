"""
Deterministic user record address derivation. Pure, no network access.

The user's record contract is deployed by the attestation contract with a fixed code
template, so its address can be computed off-chain before the record exists:

    data      = user_address, uint8 0, uint64 0, parent_address, ^code
    stateInit = uint2 0, maybe ^code, maybe ^data, uint1 0
    address   = workchain 0 : repr_hash(stateInit)

The code template is a deployment constant; bump RECORD_CODE_VERSION when the contract
is redeployed with new record code, since every derived address changes with it.
"""

from __future__ import annotations

from functools import lru_cache

from pytoniq_core import Address, Cell, begin_cell

from trust_attestation.ton import load_cell, parse_address

RECORD_WORKCHAIN = 0
RECORD_CODE_VERSION = 1

# Record (user jetton wallet) code, BoC hex
RECORD_CODE_BOC_HEX = (
    "b5ee9c724102140100013b000114ff00f4a413f4bcf2c80b01020120021302014803070202cb040602dfd0ccc7434c0c05c6c2"
    "456f80871c02456f83e900c36cf1b088134c7c860842576e74e6ea497c1b81450b1c17cb87d208433e45309eea3ac40b4cfc0"
    "407481f4cffe803e900c208203d0901c3ec08076cf08d04d8572140173c584f2c1f2cfc073c5b3327b55007c057817c12103fc"
    "bc212050028c8801001cb0558cf1601fa027001cb6ac973fb000049a2e4400800e58280e78b387d013800e5b541086a993b6d"
    "80e58f8080e59fe4c080417d80400201480811020120090e0201480a0b0111ae56ed9e08122f8240120201200c0d0110a9d4db"
    "3c10345f0412010aa9bfdb3c30120201580f10000fad97fc13b7911840010dacd2ed9e2f824012010fb9996db3c145f048120"
    "01aed44d0fa40d207d33ffa40d430000cf230840ff2f0a35e372c"
)


@lru_cache(maxsize=1)
def record_code() -> Cell:
    """Parsed record code template (cached)."""
    return load_cell(RECORD_CODE_BOC_HEX)


def build_record_data(parent: Address, user: Address, code: Cell) -> Cell:
    """Initial data of a user record: owner, zeroed counters, parent, code."""
    return (
        begin_cell()
        .store_address(user)
        .store_uint(0, 8)
        .store_uint(0, 64)
        .store_address(parent)
        .store_ref(code)
        .end_cell()
    )


def build_state_init(code: Cell, data: Cell) -> Cell:
    """StateInit without split_depth, special or library."""
    return (
        begin_cell()
        .store_uint(0, 2)
        .store_maybe_ref(code)
        .store_maybe_ref(data)
        .store_uint(0, 1)
        .end_cell()
    )


def derive_user_record_address(
    parent_address: Address | str,
    user_address: Address | str,
    *,
    code: Cell | None = None,
) -> Address:
    """
    Address of user_address's attestation record under parent_address.

    Raises InvalidAddressError for malformed addresses before anything is hashed.
    """
    parent = parse_address(parent_address)
    user = parse_address(user_address)
    code = code if code is not None else record_code()
    state_init = build_state_init(code, build_record_data(parent, user, code))
    return Address((RECORD_WORKCHAIN, state_init.hash))
