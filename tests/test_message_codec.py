"""
Tests for attestation message encoding (create/update bodies) and decoding.
"""

from __future__ import annotations

import pytest
from pytoniq_core import begin_cell

from trust_attestation.contracts.message_codec import (
    OP_CREATE_ATTESTATION,
    OP_UPDATE_ATTESTATION,
    build_create_body,
    decode_message,
    encode_create,
    encode_update,
)
from trust_attestation.core.exceptions import MessageEncodingError

EXPIRATION = 1_700_000_000
SIGNATURE = bytes.fromhex("aabb")


def _u64(value: int) -> bytes:
    return value.to_bytes(8, "big")


def test_opcodes():
    assert OP_CREATE_ATTESTATION == 0x8C839E3E
    assert OP_UPDATE_ATTESTATION == 0x96F9F442


def test_encode_create_layout():
    """op, query_id, referral_id, score, expiration, signature; all big-endian."""
    data = encode_create(
        query_id=1,
        trust_score=0x55,
        expiration_date=EXPIRATION,
        signature=SIGNATURE,
        referral_id=0,
    )
    expected = bytes.fromhex("8c839e3e") + _u64(1) + _u64(0) + b"\x55" + _u64(EXPIRATION) + SIGNATURE
    assert data == expected
    assert len(data) == 29 + len(SIGNATURE)


def test_encode_update_layout():
    """UPDATE has no referral field."""
    data = encode_update(query_id=1, trust_score=0x55, expiration_date=EXPIRATION, signature=SIGNATURE)
    expected = bytes.fromhex("96f9f442") + _u64(1) + b"\x55" + _u64(EXPIRATION) + SIGNATURE
    assert data == expected
    assert len(data) == 21 + len(SIGNATURE)


def test_referral_id_is_carried():
    data = encode_create(query_id=0, trust_score=10, expiration_date=1, signature=b"", referral_id=42)
    assert data[12:20] == _u64(42)
    assert decode_message(data).referral_id == 42


def test_missing_referral_encodes_zero():
    data = encode_create(query_id=0, trust_score=10, expiration_date=1, signature=b"", referral_id=None)
    assert data[12:20] == _u64(0)


def test_decode_create():
    data = encode_create(
        query_id=1, trust_score=0x55, expiration_date=EXPIRATION, signature=SIGNATURE, referral_id=7
    )
    msg = decode_message(data)
    assert msg.opcode == OP_CREATE_ATTESTATION
    assert msg.is_update is False
    assert msg.query_id == 1
    assert msg.referral_id == 7
    assert msg.trust_score == 0x55
    assert msg.expiration_date == EXPIRATION
    assert msg.signature == SIGNATURE


def test_decode_update_from_cell():
    body = begin_cell().store_bytes(
        encode_update(query_id=3, trust_score=90, expiration_date=EXPIRATION, signature=SIGNATURE)
    ).end_cell()
    msg = decode_message(body)
    assert msg.is_update is True
    assert msg.referral_id is None
    assert msg.query_id == 3
    assert msg.trust_score == 90


def test_score_above_eight_bits_rejected():
    with pytest.raises(MessageEncodingError, match="create_attestation"):
        encode_create(query_id=0, trust_score=256, expiration_date=1, signature=b"")
    with pytest.raises(MessageEncodingError, match="update_attestation"):
        encode_update(query_id=0, trust_score=300, expiration_date=1, signature=b"")
    with pytest.raises(MessageEncodingError):
        encode_update(query_id=0, trust_score=-1, expiration_date=1, signature=b"")


def test_score_outside_percent_range_still_encodes():
    """The 0-100 domain is enforced on-chain, not by the encoder."""
    data = encode_update(query_id=0, trust_score=101, expiration_date=1, signature=b"")
    assert decode_message(data).trust_score == 101


def test_signature_size_limit():
    """The whole body must fit one 1023-bit cell."""
    assert len(encode_create(query_id=0, trust_score=1, expiration_date=1, signature=b"\x01" * 98)) == 127
    with pytest.raises(MessageEncodingError):
        build_create_body(query_id=0, trust_score=1, expiration_date=1, signature=b"\x01" * 99)
    assert len(encode_update(query_id=0, trust_score=1, expiration_date=1, signature=b"\x01" * 106)) == 127
    with pytest.raises(MessageEncodingError):
        encode_update(query_id=0, trust_score=1, expiration_date=1, signature=b"\x01" * 107)


def test_negative_fields_rejected():
    with pytest.raises(MessageEncodingError):
        encode_update(query_id=-1, trust_score=1, expiration_date=1, signature=b"")


def test_decode_unknown_opcode():
    with pytest.raises(MessageEncodingError, match="unknown opcode"):
        decode_message(bytes.fromhex("deadbeef") + bytes(25))


def test_decode_truncated():
    data = encode_create(query_id=1, trust_score=5, expiration_date=EXPIRATION, signature=b"")
    with pytest.raises(MessageEncodingError, match="truncated"):
        decode_message(data[:20])


def test_decode_oversized_input():
    with pytest.raises(MessageEncodingError, match="too long"):
        decode_message(b"\x00" * 200)
