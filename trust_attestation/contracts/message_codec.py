"""
Attestation message bodies for the attestation contract.

Layout (big-endian, one cell, at most 1023 bits):

    CREATE: op:uint32 query_id:uint64 referral_id:uint64 trust_score:uint8 expiration:uint64 signature:bytes
    UPDATE: op:uint32 query_id:uint64                    trust_score:uint8 expiration:uint64 signature:bytes

Every field is byte aligned, so the encoded bytes are the cell data. The trust score
must fit in 8 bits; the 0-100 domain is checked on-chain, not here.
"""

from __future__ import annotations

from dataclasses import dataclass

from pytoniq_core import Cell, begin_cell
from pytoniq_core.boc.tvm_bitarray import TvmBitarrayException

from trust_attestation.core.exceptions import MessageEncodingError
from trust_attestation.models import AttestationMessage, OpCode

OP_CREATE_ATTESTATION = OpCode.CREATE_ATTESTATION
OP_UPDATE_ATTESTATION = OpCode.UPDATE_ATTESTATION


@dataclass(frozen=True)
class DecodedMessage:
    opcode: int
    query_id: int
    trust_score: int
    expiration_date: int
    signature: bytes
    referral_id: int | None = None

    @property
    def is_update(self) -> bool:
        return self.opcode == OP_UPDATE_ATTESTATION


def build_create_body(
    *,
    query_id: int,
    trust_score: int,
    expiration_date: int,
    signature: bytes,
    referral_id: int | None = 0,
) -> Cell:
    try:
        return (
            begin_cell()
            .store_uint(OP_CREATE_ATTESTATION, 32)
            .store_uint(query_id, 64)
            .store_uint(referral_id or 0, 64)
            .store_uint(trust_score, 8)
            .store_uint(expiration_date, 64)
            .store_bytes(signature)
            .end_cell()
        )
    except (OverflowError, TvmBitarrayException) as e:
        raise MessageEncodingError(f"cannot encode create_attestation: {e}") from e


def build_update_body(
    *,
    query_id: int,
    trust_score: int,
    expiration_date: int,
    signature: bytes,
) -> Cell:
    try:
        return (
            begin_cell()
            .store_uint(OP_UPDATE_ATTESTATION, 32)
            .store_uint(query_id, 64)
            .store_uint(trust_score, 8)
            .store_uint(expiration_date, 64)
            .store_bytes(signature)
            .end_cell()
        )
    except (OverflowError, TvmBitarrayException) as e:
        raise MessageEncodingError(f"cannot encode update_attestation: {e}") from e


def encode_create(
    *,
    query_id: int,
    trust_score: int,
    expiration_date: int,
    signature: bytes,
    referral_id: int | None = 0,
) -> bytes:
    return build_create_body(
        query_id=query_id,
        trust_score=trust_score,
        expiration_date=expiration_date,
        signature=signature,
        referral_id=referral_id,
    ).data


def encode_update(
    *,
    query_id: int,
    trust_score: int,
    expiration_date: int,
    signature: bytes,
) -> bytes:
    return build_update_body(
        query_id=query_id,
        trust_score=trust_score,
        expiration_date=expiration_date,
        signature=signature,
    ).data


def build_message_body(message: AttestationMessage) -> Cell:
    if message.opcode == OP_UPDATE_ATTESTATION:
        return build_update_body(
            query_id=message.query_id,
            trust_score=message.trust_score,
            expiration_date=message.expiration_date,
            signature=message.signature,
        )
    if message.opcode == OP_CREATE_ATTESTATION:
        return build_create_body(
            query_id=message.query_id,
            trust_score=message.trust_score,
            expiration_date=message.expiration_date,
            signature=message.signature,
            referral_id=message.referral_id,
        )
    raise MessageEncodingError(f"unknown opcode 0x{message.opcode:08x}")


def decode_message(data: bytes | Cell) -> DecodedMessage:
    """Decode encoded bytes (or a body cell) back into fields. The opcode selects the layout."""
    if isinstance(data, Cell):
        cell = data
    else:
        try:
            cell = begin_cell().store_bytes(bytes(data)).end_cell()
        except TvmBitarrayException as e:
            raise MessageEncodingError(f"attestation message too long: {e}") from e
    s = cell.begin_parse()
    try:
        opcode = s.load_uint(32)
        query_id = s.load_uint(64)
        referral_id = s.load_uint(64) if opcode == OP_CREATE_ATTESTATION else None
        trust_score = s.load_uint(8)
        expiration_date = s.load_uint(64)
    except (TvmBitarrayException, ValueError) as e:
        # ba2int raises ValueError on an empty read
        raise MessageEncodingError(f"truncated attestation message: {e}") from e
    if opcode not in (OP_CREATE_ATTESTATION, OP_UPDATE_ATTESTATION):
        raise MessageEncodingError(f"unknown opcode 0x{opcode:08x}")
    if s.remaining_bits % 8:
        raise MessageEncodingError(f"signature is not byte aligned: {s.remaining_bits} bits")
    return DecodedMessage(
        opcode=opcode,
        query_id=query_id,
        trust_score=trust_score,
        expiration_date=expiration_date,
        signature=s.load_bytes(s.remaining_bits // 8),
        referral_id=referral_id,
    )
