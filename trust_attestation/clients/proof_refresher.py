"""
Background refresh of the TON proof payload used for wallet login.

The payload expires after 20 minutes, so it is re-fetched on a fixed interval and handed
to on_payload. The refresher owns its thread: start() once, stop() sets the stop event
and joins with a bounded timeout. Usable as a context manager.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from trust_attestation.attest_logging import get_logger
from trust_attestation.core.exceptions import AttestationError

logger = get_logger(__name__)

PAYLOAD_TTL_SEC = 20 * 60
SHUTDOWN_JOIN_TIMEOUT_SEC = 15.0


class ProofPayloadRefresher:
    def __init__(
        self,
        scoring: Any,
        on_payload: Callable[[str], None],
        *,
        interval_sec: float = PAYLOAD_TTL_SEC,
    ) -> None:
        self._scoring = scoring
        self._on_payload = on_payload
        self.interval_sec = interval_sec
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh_once(self) -> str | None:
        """Fetch and publish one payload. Returns None when the fetch failed."""
        try:
            payload = self._scoring.get_proof_payload()
        except AttestationError as e:
            logger.warning("proof_payload_refresh_failed", error=str(e))
            return None
        self._on_payload(payload)
        logger.debug("proof_payload_refreshed")
        return payload

    def _run(self) -> None:
        logger.info("proof_payload_refresher_started", interval_sec=self.interval_sec)
        while not self._stop.is_set():
            self.refresh_once()
            self._stop.wait(timeout=self.interval_sec)
        logger.info("proof_payload_refresher_stopped")

    def start(self) -> None:
        if self.running:
            raise RuntimeError("proof payload refresher already running")
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="proof-payload-refresher", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = SHUTDOWN_JOIN_TIMEOUT_SEC) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("proof_payload_refresher_join_timeout", timeout_sec=timeout)
            self._thread = None

    def __enter__(self) -> "ProofPayloadRefresher":
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
