"""
TON API client for contract get-methods.

GET {node_url}/v2/blockchain/accounts/{account}/methods/{method}?args=...
returns {"success": bool, "exit_code": int, "stack": [...]}. The stack is handed back
as a TupleReader. Bearer auth with TONAPI_KEY when set.

Stateless apart from the requests.Session; safe to share between tracking sessions.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests
from pytoniq_core import Address

from trust_attestation.attest_logging import get_logger
from trust_attestation.core.exceptions import GetterError, TransportError
from trust_attestation.ton import TupleReader, parse_address

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 15.0


class TonApiClient:
    """Runs get-methods against the TON API."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if api_key:
            self._session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"TON API request failed: {e}") from e
        if not resp.ok:
            detail = resp.text
            if resp.headers.get("content-type", "").startswith("application/json"):
                try:
                    body = resp.json()
                    if isinstance(body, dict):
                        detail = body.get("error", resp.text)
                except ValueError:
                    pass
            raise TransportError(f"TON API error: {detail}", status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError("TON API returned invalid JSON", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"TON API returned {type(data).__name__}, expected an object", status_code=resp.status_code
            )
        return data

    def run_get_method(
        self,
        address: Address | str,
        method: str,
        args: list[str] | None = None,
    ) -> TupleReader:
        """Execute a get-method; raises GetterError when it does not exit cleanly."""
        account = parse_address(address).to_str(is_user_friendly=False)
        path = f"/v2/blockchain/accounts/{quote(account, safe='')}/methods/{quote(method, safe='')}"
        params = {"args": list(args)} if args else None
        data = self._get(path, params=params)
        exit_code = data.get("exit_code", 0)
        if not data.get("success", exit_code == 0) or exit_code not in (0, 1):
            logger.debug("tonapi_get_method_failed", account=account, method=method, exit_code=exit_code)
            raise GetterError(method, exit_code)
        stack = data.get("stack") or []
        if not isinstance(stack, list):
            raise TransportError(f"TON API returned a malformed stack for {method}")
        return TupleReader(stack)

    def close(self) -> None:
        self._session.close()
