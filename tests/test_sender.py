"""
Tests for the TON Connect sender adapter and message payload helpers.
"""

from __future__ import annotations

import base64
from unittest.mock import MagicMock

import pytest
from pytoniq_core import Cell, begin_cell

from tests.conftest import CONTRACT
from trust_attestation.core.exceptions import BocError
from trust_attestation.models import AttestationMessage, OpCode
from trust_attestation.sender import (
    DEFAULT_VALID_FOR_SEC,
    TonConnectSender,
    build_ton_connect_request,
    external_message_hash,
)


@pytest.fixture
def message():
    return AttestationMessage(
        opcode=OpCode.CREATE_ATTESTATION,
        query_id=0,
        trust_score=85,
        expiration_date=1_700_000_000,
        signature=b"\xaa\xbb",
        value=161_000_000,
        destination=CONTRACT,
        referral_id=7,
    )


def test_ton_connect_request(message):
    request = build_ton_connect_request(message, valid_for_sec=60, now=1000.7)
    assert request["validUntil"] == 1060
    [item] = request["messages"]
    assert item["address"] == CONTRACT.to_str()
    assert item["amount"] == "161000000"
    payload = Cell.one_from_boc(base64.b64decode(item["payload"]))
    assert payload.data == message.body_bytes()


def test_payload_base64_is_body_boc(message):
    assert base64.b64decode(message.payload_base64()) == message.body.to_boc(hash_crc32=True)


def test_external_message_hash_accepts_base64_and_bytes():
    cell = begin_cell().store_uint(0x1234, 16).end_cell()
    boc = cell.to_boc()
    assert external_message_hash(boc) == cell.hash.hex()
    assert external_message_hash(base64.b64encode(boc).decode()) == cell.hash.hex()


def test_external_message_hash_invalid_base64():
    with pytest.raises(BocError):
        external_message_hash("not base64!")


def test_ton_connect_sender_returns_message_hash(message):
    signed = begin_cell().store_uint(0xBEEF, 16).end_cell()
    send = MagicMock(return_value=base64.b64encode(signed.to_boc()).decode())
    handle = TonConnectSender(send).submit(message)
    assert handle == signed.hash.hex()
    request = send.call_args.args[0]
    assert request["messages"][0]["amount"] == str(message.value)
    assert request["validUntil"] > 0
    assert DEFAULT_VALID_FOR_SEC == 300


@pytest.mark.parametrize("boc", [b"\x00\x01\x02\x03", b"", bytes.fromhex("b5ee9c72")])
def test_external_message_hash_malformed_boc(boc):
    with pytest.raises(BocError, match="malformed BoC"):
        external_message_hash(boc)
