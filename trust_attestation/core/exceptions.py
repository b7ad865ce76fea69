"""
SDK exceptions.

Input errors (bad addresses, malformed BoC, oversized messages, bad config) are
also ValueError. Transport errors carry the HTTP status when there is one.
Operation-level errors wrap the transport error with what was being attempted.
"""

from __future__ import annotations


class AttestationError(Exception):
    """Base class for all SDK errors."""


class InvalidAddressError(AttestationError, ValueError):
    """Address string or bytes could not be parsed."""


class BocError(AttestationError, ValueError):
    """Bag-of-cells data is malformed or unsupported."""


class MessageEncodingError(AttestationError, ValueError):
    """Attestation message could not be encoded or decoded."""


class ConfigurationError(AttestationError, ValueError):
    """SDK configuration is missing or invalid."""


class TransportError(AttestationError):
    """An HTTP call to the TON API or the scoring backend failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GetterError(TransportError):
    """A contract get-method ran but did not succeed (non-zero exit code)."""

    def __init__(self, method: str, exit_code: int | None, status_code: int | None = None) -> None:
        super().__init__(f"get-method {method} failed with exit_code={exit_code}", status_code)
        self.method = method
        self.exit_code = exit_code


class FeeEstimationError(AttestationError):
    """Base fee could not be read from the attestation contract."""


class RecordReadError(AttestationError):
    """User attestation record could not be read."""


class TrustScoreError(AttestationError):
    """Signed trust score could not be fetched from the scoring backend."""


class BackendError(AttestationError):
    """A scoring backend call other than the trust score fetch failed."""
