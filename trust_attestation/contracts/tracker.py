"""
Attestation tracker: poll the user's record after submission until the new score is visible.

POLLING -> CONFIRMED | EXHAUSTED | CANCELLED.

Each attempt waits poll_interval_sec, then reads the record. trust_score >= expected
confirms; the backend is then told about the mint (best effort, failure only logged).
A read error is logged and still consumes the attempt: "not deployed yet" and transport
failures look the same here. Fixed interval, no backoff, so a session takes at most
poll_interval_sec * max_attempts. Sessions share no state and may run in parallel threads.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from pytoniq_core import Address

from trust_attestation.attest_logging import get_logger
from trust_attestation.config.settings import DEFAULT_MAX_ATTEMPTS, DEFAULT_POLL_INTERVAL_SEC
from trust_attestation.core.exceptions import AttestationError
from trust_attestation.models import AttestationRecord, TrackingOutcome, TrackingState
from trust_attestation.ton import parse_address

logger = get_logger(__name__)


class AttestationTracker:
    """Confirms submitted attestations by polling on-chain state."""

    def __init__(
        self,
        client: Any,
        scoring: Any | None = None,
        *,
        referral_id: int = 0,
        poll_interval_sec: float = DEFAULT_POLL_INTERVAL_SEC,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._client = client
        self._scoring = scoring
        self.referral_id = referral_id
        self.poll_interval_sec = poll_interval_sec
        self.max_attempts = max_attempts

    def _notify_minted(self, user_address: str) -> None:
        if self._scoring is None:
            return
        try:
            self._scoring.notify_attestation_count(user_address, self.referral_id)
            logger.info("attestation_count_updated", user_address=user_address, ref_id=self.referral_id)
        except AttestationError as e:
            logger.warning("attestation_count_update_failed", user_address=user_address, error=str(e))

    def track(
        self,
        user_address: Address | str,
        expected_score: int,
        *,
        poll_interval_sec: float | None = None,
        max_attempts: int | None = None,
        stop_event: threading.Event | None = None,
    ) -> TrackingOutcome:
        """
        Poll until the record shows trust_score >= expected_score or attempts run out.

        Returns TrackingOutcome(status=True, data=record) on confirmation. On exhaustion
        status is False, or None if no read ever succeeded. Setting stop_event ends the
        session at the next wait with state CANCELLED.
        """
        owner = parse_address(user_address)
        owner_text = user_address if isinstance(user_address, str) else owner.to_str()
        interval = self.poll_interval_sec if poll_interval_sec is None else poll_interval_sec
        budget = self.max_attempts if max_attempts is None else max_attempts
        stop = stop_event or threading.Event()
        record_address = self._client.record_address(owner)

        status: bool | None = None
        data: AttestationRecord | None = None
        state = TrackingState.POLLING
        attempt = 0
        logger.info(
            "attestation_track_started",
            user_address=owner_text,
            record_address=record_address.to_str(),
            expected_score=expected_score,
            interval_sec=interval,
            max_attempts=budget,
        )
        while attempt < budget:
            if stop.wait(timeout=interval):
                state = TrackingState.CANCELLED
                break
            attempt += 1
            try:
                record = self._client.read_record(owner)
            except AttestationError as e:
                logger.warning(
                    "attestation_track_read_failed",
                    user_address=owner_text,
                    record_address=record_address.to_str(),
                    attempt=attempt,
                    error=str(e),
                )
                continue
            if record.trust_score >= expected_score:
                status = True
                data = record
                state = TrackingState.CONFIRMED
                self._notify_minted(owner_text)
                break
            status = False
            logger.debug(
                "attestation_track_not_confirmed",
                user_address=owner_text,
                attempt=attempt,
                trust_score=record.trust_score,
                expected_score=expected_score,
            )

        if state is TrackingState.POLLING:
            state = TrackingState.EXHAUSTED
        logger.info(
            "attestation_track_finished",
            user_address=owner_text,
            state=state.value,
            status=status,
            attempts=attempt,
        )
        return TrackingOutcome(status=status, data=data, attempts=attempt, state=state)

    def track_many(
        self,
        sessions: Iterable[tuple[Address | str, int]],
        *,
        max_workers: int = 4,
        stop_event: threading.Event | None = None,
    ) -> list[TrackingOutcome]:
        """Track several (user_address, expected_score) pairs in parallel; results keep input order."""
        sessions = list(sessions)
        if not sessions:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sessions)))) as pool:
            futures = [
                pool.submit(self.track, user, score, stop_event=stop_event)
                for user, score in sessions
            ]
            return [f.result() for f in futures]
