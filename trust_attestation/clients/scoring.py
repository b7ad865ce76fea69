"""
Scoring backend client (requests).

- GET  /trust-score          bearer JWT -> signed TrustClaim
- POST /attestation/count    {address, refId}; best effort, callers log failures
- GET  /ref/v2/ton-payload   TON proof payload for wallet login
- POST /ref/v2/ton-login     {proof, address, network} -> {jwt}
"""

from __future__ import annotations

from typing import Any

import requests

from trust_attestation.attest_logging import get_logger
from trust_attestation.core.exceptions import (
    AttestationError,
    BackendError,
    TransportError,
    TrustScoreError,
)
from trust_attestation.models import TrustClaim

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 15.0


class ScoringClient:
    """Client for the trust scoring backend."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.request(
                method, url, params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        if not resp.ok:
            detail = resp.text
            if resp.headers.get("content-type", "").startswith("application/json"):
                try:
                    body = resp.json()
                    detail = body.get("detail") or body.get("message") or resp.text
                except ValueError:
                    pass
            raise TransportError(f"API error: {detail}", status_code=resp.status_code)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> dict[str, Any]:
        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError("scoring backend returned invalid JSON", status_code=resp.status_code) from e
        if not isinstance(body, dict):
            raise TransportError(
                f"scoring backend returned {type(body).__name__}, expected an object",
                status_code=resp.status_code,
            )
        return body

    def get_trust_score(
        self,
        jwt: str,
        *,
        address: str | None = None,
        network: int | None = None,
    ) -> TrustClaim:
        """Signed trust score for the wallet behind jwt."""
        params: dict[str, Any] = {}
        if address:
            params["address"] = address
        if network is not None:
            params["network"] = network
        try:
            payload = self._json(
                self._request(
                    "GET",
                    "/trust-score",
                    params=params or None,
                    headers={"Authorization": f"Bearer {jwt}"},
                )
            )
            if payload.get("errorCode"):
                raise BackendError(f"scoring backend errorCode={payload['errorCode']}")
            return TrustClaim.from_api(payload)
        except (AttestationError, ValueError) as e:
            raise TrustScoreError(f"Failed to get trust score: {e}") from e

    def notify_attestation_count(self, address: str, ref_id: int) -> None:
        """Tell the backend an attestation was minted (usage/referral accounting)."""
        try:
            self._request("POST", "/attestation/count", json={"address": address, "refId": ref_id})
        except TransportError as e:
            raise BackendError(f"Failed to update attestation count: {e}") from e

    def get_proof_payload(self) -> str:
        """TON proof payload to put in the wallet connect request."""
        try:
            payload = self._json(self._request("GET", "/ref/v2/ton-payload")).get("payload")
        except (TransportError, ValueError) as e:
            raise BackendError(f"Failed to get ton proof payload: {e}") from e
        if not payload:
            raise BackendError("ton proof payload missing from response")
        return str(payload)

    def login(self, proof: dict[str, Any], address: str, network: int) -> str:
        """Exchange a signed TON proof for a backend JWT."""
        body = {"proof": proof, "address": address, "network": network}
        try:
            jwt = self._json(self._request("POST", "/ref/v2/ton-login", json=body)).get("jwt")
        except (TransportError, ValueError) as e:
            raise BackendError(f"ton login failed: {e}") from e
        if not jwt:
            raise BackendError("ton login response has no jwt")
        return str(jwt)

    def close(self) -> None:
        self._session.close()
