"""
AttestationSDK: one configuration-driven entry point over the scoring backend, the
attestation contract and the tracker.

    sdk = AttestationSDK(SDKConfig(referral_id=7))
    claim = sdk.get_trust_score(jwt, address=wallet)
    message = sdk.prepare_from_claim(claim)
    handle = sender.submit(message)
    outcome = sdk.track_attestation_result(wallet, claim.score)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from pytoniq_core import Address

from trust_attestation.attest_logging import get_logger
from trust_attestation.clients.scoring import ScoringClient
from trust_attestation.clients.tonapi import TonApiClient
from trust_attestation.config.settings import SDKConfig, get_settings
from trust_attestation.contracts.attestation_client import AttestationClient
from trust_attestation.contracts.tracker import AttestationTracker
from trust_attestation.models import (
    AttestationContractData,
    AttestationMessage,
    AttestationOptions,
    AttestationRecord,
    FeeBreakdown,
    TrackingOutcome,
    TrustClaim,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Submission:
    handle: str
    message: AttestationMessage


class AttestationSDK:
    def __init__(
        self,
        config: SDKConfig | None = None,
        *,
        chain: Any | None = None,
        scoring: Any | None = None,
    ) -> None:
        self.config = config or get_settings()
        self._chain = chain or TonApiClient(
            self.config.node_url,
            api_key=self.config.api_key,
            timeout=self.config.request_timeout_sec,
        )
        self._scoring = scoring or ScoringClient(
            self.config.scoring_endpoint,
            timeout=self.config.request_timeout_sec,
        )
        self.client = AttestationClient(
            self.config.contract,
            self._chain,
            referral_id=self.config.referral_id,
        )
        self.tracker = AttestationTracker(
            self.client,
            self._scoring,
            referral_id=self.config.referral_id,
            poll_interval_sec=self.config.poll_interval_sec,
            max_attempts=self.config.max_attempts,
        )
        logger.info(
            "sdk_initialized",
            network=self.config.network,
            contract_address=self.config.contract_address,
            node_url=self.config.node_url,
            referral_id=self.config.referral_id,
        )

    @property
    def scoring(self) -> Any:
        return self._scoring

    def get_trust_score(self, jwt: str, *, address: str | None = None) -> TrustClaim:
        """Signed trust claim from the scoring backend."""
        network = self.config.network_id if address else None
        return self._scoring.get_trust_score(jwt, address=address, network=network)

    def get_user_record_address(self, user_address: Address | str) -> Address:
        return self.client.record_address(user_address)

    def get_user_attestation_onchain(self, user_address: Address | str) -> AttestationRecord:
        return self.client.read_record(user_address)

    def get_contract_data(self) -> AttestationContractData:
        return self.client.read_contract_data()

    def calculate_transaction_fee(self, is_update: bool) -> FeeBreakdown:
        return self.client.estimate_fee(is_update)

    def prepare_attestation(self, opts: AttestationOptions, is_update: bool) -> AttestationMessage:
        return self.client.prepare(opts, is_update)

    def prepare_from_claim(self, claim: TrustClaim, *, value: int | None = None) -> AttestationMessage:
        """CREATE for a first mint, UPDATE when the backend marks the claim as a remint."""
        return self.client.prepare(AttestationOptions.from_claim(claim, value=value), claim.is_remint)

    def submit_attestation(self, claim: TrustClaim, sender: Any, *, value: int | None = None) -> Submission:
        message = self.prepare_from_claim(claim, value=value)
        handle = sender.submit(message)
        logger.info("attestation_submitted", user_address=claim.address, handle=handle, is_update=message.is_update)
        return Submission(handle=handle, message=message)

    def track_attestation_result(
        self,
        user_address: Address | str,
        trust_score: int,
        *,
        poll_interval_sec: float | None = None,
        max_attempts: int | None = None,
        stop_event: threading.Event | None = None,
    ) -> TrackingOutcome:
        return self.tracker.track(
            user_address,
            trust_score,
            poll_interval_sec=poll_interval_sec,
            max_attempts=max_attempts,
            stop_event=stop_event,
        )

    def attest(
        self,
        jwt: str,
        user_address: str,
        sender: Any,
        *,
        stop_event: threading.Event | None = None,
    ) -> TrackingOutcome:
        """Fetch a claim, submit it through sender and track it to a terminal outcome."""
        claim = self.get_trust_score(jwt, address=user_address)
        self.submit_attestation(claim, sender)
        return self.track_attestation_result(user_address, claim.score, stop_event=stop_event)

    def close(self) -> None:
        for client in (self._chain, self._scoring):
            close = getattr(client, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "AttestationSDK":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
