"""
Value types shared by the codecs, clients, tracker and SDK facade.

All are frozen dataclasses: records are snapshots of on-chain state and are
re-fetched to observe change, claims and messages are consumed once.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pytoniq_core import Address, Cell

from trust_attestation.core.exceptions import MessageEncodingError

# Sender pays forward fees separately from the attached value
SEND_MODE_PAY_GAS_SEPARATELY = 1


class OpCode:
    """Deployed contract entry points (32-bit operation discriminators)."""

    CREATE_ATTESTATION = 0x8C839E3E
    UPDATE_ATTESTATION = 0x96F9F442


def _signature_bytes(raw: Any) -> bytes:
    """Signatures arrive hex encoded from the backend; bytes pass through."""
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, (list, tuple)):
        return bytes(raw)
    text = str(raw or "").strip()
    if text.startswith("0x"):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError:
        pass
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MessageEncodingError("signature is neither hex nor base64") from e


@dataclass(frozen=True)
class TrustClaim:
    """Signed trust score issued by the scoring backend."""

    address: str
    score: int
    expiration: int
    signature: bytes
    is_remint: bool = False

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "TrustClaim":
        """
        Build from a /trust-score response. Accepts both response shapes:
        {wallet, trust, expiration, signature, isMinted} and
        {address, score, expiration, signature, isRemint}.
        """
        address = payload.get("address") or payload.get("wallet") or ""
        score = payload.get("score", payload.get("trust"))
        if score is None:
            raise MessageEncodingError("trust score response has no score")
        expiration = payload.get("expiration")
        if expiration is None:
            raise MessageEncodingError("trust score response has no expiration")
        signature = payload.get("signature")
        if not signature:
            raise MessageEncodingError("trust score response has no signature")
        is_remint = payload.get("isRemint")
        if is_remint is None:
            is_remint = payload.get("isMinted", False)
        return cls(
            address=str(address),
            score=int(score),
            expiration=int(expiration),
            signature=_signature_bytes(signature),
            is_remint=bool(is_remint),
        )


@dataclass(frozen=True)
class AttestationRecord:
    """Snapshot of a user's record contract (get_user_data)."""

    owner: Address
    commission_owner: Address | None
    trust_score: int
    expiration_date: int
    attestation_contract_address: Address | None
    record_address: Address

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner.to_str(),
            "commission_owner": self.commission_owner.to_str() if self.commission_owner else None,
            "trust_score": self.trust_score,
            "expiration_date": self.expiration_date,
            "attestation_contract_address": (
                self.attestation_contract_address.to_str() if self.attestation_contract_address else None
            ),
            "record_address": self.record_address.to_str(),
        }


@dataclass(frozen=True)
class AttestationContractData:
    """Parent contract state (get_hapi_attestation_data)."""

    user_count: int
    contract_owner: Address | None
    commission_owner: Address | None
    create_fee: int
    update_fee: int
    wallet_code: Cell


@dataclass(frozen=True)
class FeeBreakdown:
    """Nanoton amounts attached to a create/update message."""

    base_fee: int
    gas_fee: int
    commission: int
    storage_fee: int
    total: int = field(default=-1)

    def __post_init__(self) -> None:
        parts = (self.base_fee, self.gas_fee, self.commission, self.storage_fee)
        if any(p < 0 for p in parts):
            raise ValueError("fee components must be non-negative")
        expected = sum(parts)
        if self.total == -1:
            object.__setattr__(self, "total", expected)
        elif self.total != expected:
            raise ValueError(f"fee total {self.total} != sum of components {expected}")

    def to_dict(self) -> dict[str, int]:
        return {
            "base_fee": self.base_fee,
            "gas_fee": self.gas_fee,
            "commission": self.commission,
            "storage_fee": self.storage_fee,
            "total": self.total,
        }


@dataclass(frozen=True)
class AttestationOptions:
    """Caller intent for prepare(); value and query_id are filled in when omitted."""

    trust_score: int
    expiration_date: int
    signature: bytes
    value: int | None = None
    query_id: int | None = None

    @classmethod
    def from_claim(cls, claim: TrustClaim, **overrides: Any) -> "AttestationOptions":
        return cls(
            trust_score=claim.score,
            expiration_date=claim.expiration,
            signature=claim.signature,
            **overrides,
        )


@dataclass(frozen=True)
class AttestationMessage:
    """Internal message to the attestation contract, ready for a wallet sender."""

    opcode: int
    query_id: int
    trust_score: int
    expiration_date: int
    signature: bytes
    value: int
    destination: Address
    referral_id: int | None = None
    send_mode: int = SEND_MODE_PAY_GAS_SEPARATELY

    @property
    def is_update(self) -> bool:
        return self.opcode == OpCode.UPDATE_ATTESTATION

    @property
    def body(self) -> Cell:
        from trust_attestation.contracts.message_codec import build_message_body

        return build_message_body(self)

    def body_bytes(self) -> bytes:
        return self.body.data

    def to_boc(self) -> bytes:
        return self.body.to_boc(hash_crc32=True)

    def payload_base64(self) -> str:
        return base64.b64encode(self.to_boc()).decode("ascii")


class TrackingState(str, Enum):
    POLLING = "polling"
    CONFIRMED = "confirmed"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TrackingOutcome:
    """
    Terminal result of a tracking session. status is True when confirmed, False when
    the last successful read did not match, None when no read ever succeeded.
    Callers treat None and False alike: not confirmed.
    """

    status: bool | None
    data: AttestationRecord | None = None
    attempts: int = 0
    state: TrackingState = TrackingState.EXHAUSTED

    @property
    def confirmed(self) -> bool:
        return self.status is True
