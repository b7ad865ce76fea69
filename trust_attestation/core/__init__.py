"""
Core cross-cutting pieces: exception hierarchy shared by codecs, clients and the tracker.
"""

from trust_attestation.core.exceptions import (  # noqa: F401
    AttestationError,
    BackendError,
    BocError,
    ConfigurationError,
    FeeEstimationError,
    GetterError,
    InvalidAddressError,
    MessageEncodingError,
    RecordReadError,
    TransportError,
    TrustScoreError,
)
