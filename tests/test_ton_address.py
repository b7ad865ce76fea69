"""
Tests for strict address parsing (raw and user-friendly forms).
"""

from __future__ import annotations

import pytest
from pytoniq_core import Address

from trust_attestation.core.exceptions import InvalidAddressError
from trust_attestation.ton import is_valid_address, parse_address

MAINNET_CONTRACT = "EQBiXrm6sM4V2SxDPDDuEr-qALlRl-utFx0g2gzaGIcS827a"
RAW = "0:" + "ab" * 32


def test_parse_friendly_roundtrip():
    """Bounceable url-safe form formats back to the same string."""
    addr = parse_address(MAINNET_CONTRACT)
    assert addr.wc == 0
    assert addr.is_bounceable is True
    assert addr.is_test_only is False
    assert addr.to_str() == MAINNET_CONTRACT


def test_raw_and_friendly_forms_are_equal():
    """Every textual form of one account compares equal."""
    addr = parse_address(MAINNET_CONTRACT)
    raw = addr.to_str(is_user_friendly=False)
    assert raw.startswith("0:")
    assert parse_address(raw) == addr
    non_bounceable = addr.to_str(is_bounceable=False)
    assert non_bounceable.startswith("UQ")
    assert parse_address(non_bounceable) == addr
    assert parse_address(addr.to_str(is_url_safe=False)) == addr


def test_testnet_flag():
    addr = parse_address(RAW)
    text = addr.to_str(is_test_only=True)
    assert text.startswith("kQ")
    parsed = parse_address(text)
    assert parsed.is_test_only is True
    assert parsed == addr


def test_parse_raw_normalizes_hex_case():
    addr = parse_address("0:" + "AB" * 32)
    assert addr.to_str(is_user_friendly=False) == RAW


def test_masterchain_workchain():
    """Negative workchain survives the friendly form."""
    addr = parse_address("-1:" + "33" * 32)
    assert addr.wc == -1
    assert parse_address(addr.to_str()).wc == -1


def test_surrounding_whitespace_ignored():
    assert parse_address(f"  {MAINNET_CONTRACT}\n") == parse_address(MAINNET_CONTRACT)


def test_address_passthrough():
    addr = Address(RAW)
    assert parse_address(addr) is addr


@pytest.mark.parametrize(
    "value",
    [
        "",
        "   ",
        "not-an-address",
        "0:abcd",
        "0:" + "zz" * 32,
        "0:" + "ab" * 33,
        "300:" + "ab" * 32,
        "1:2:" + "ab" * 32,
        MAINNET_CONTRACT[:-1] + "b",
        MAINNET_CONTRACT[:-4],
        "!" * 48,
    ],
)
def test_invalid_addresses_rejected(value):
    """Malformed, short, out-of-range and bad-checksum inputs raise InvalidAddressError."""
    with pytest.raises(InvalidAddressError):
        parse_address(value)
    assert is_valid_address(value) is False


def test_invalid_address_is_value_error():
    with pytest.raises(ValueError):
        parse_address("garbage")


def test_non_string_rejected():
    with pytest.raises(InvalidAddressError, match="must be a string"):
        parse_address(12345)
