"""
Transaction submission seam. Signing is wallet specific and lives outside the SDK.

A sender is anything with submit(message) -> transaction handle. TonConnectSender adapts
a callable that takes a TON Connect sendTransaction request and returns the signed
external message BoC (base64), and hands back that message's hash as the handle.
"""

from __future__ import annotations

import base64
import binascii
import time
from typing import Any, Callable, Protocol

from trust_attestation.core.exceptions import BocError
from trust_attestation.models import AttestationMessage
from trust_attestation.ton import load_cell

DEFAULT_VALID_FOR_SEC = 5 * 60


class TransactionSender(Protocol):
    def submit(self, message: AttestationMessage) -> str: ...


def build_ton_connect_request(
    message: AttestationMessage,
    *,
    valid_for_sec: int = DEFAULT_VALID_FOR_SEC,
    now: float | None = None,
) -> dict[str, Any]:
    """sendTransaction request body: one message to the attestation contract."""
    now = time.time() if now is None else now
    return {
        "validUntil": int(now) + valid_for_sec,
        "messages": [
            {
                "address": message.destination.to_str(),
                "amount": str(message.value),
                "payload": message.payload_base64(),
            }
        ],
    }


def external_message_hash(boc: str | bytes) -> str:
    """Hex hash of the root cell of a signed message BoC (base64 string or raw bytes)."""
    if isinstance(boc, str):
        try:
            boc = base64.b64decode(boc, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BocError("signed message is not valid base64") from e
    return load_cell(boc).hash.hex()


class TonConnectSender:
    """Adapts a TON Connect style send function to TransactionSender."""

    def __init__(
        self,
        send_transaction: Callable[[dict[str, Any]], str | bytes],
        *,
        valid_for_sec: int = DEFAULT_VALID_FOR_SEC,
    ) -> None:
        self._send = send_transaction
        self.valid_for_sec = valid_for_sec

    def submit(self, message: AttestationMessage) -> str:
        request = build_ton_connect_request(message, valid_for_sec=self.valid_for_sec)
        return external_message_hash(self._send(request))
