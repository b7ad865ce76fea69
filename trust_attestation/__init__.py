"""
Trust Attestation: TON SDK for on-chain trust score attestations.

Reads signed trust-score claims from the scoring backend, sizes and encodes the
create/update messages for the attestation contract, and tracks submitted
attestations until the new score is visible on-chain. Wallet signing is left
to a caller-supplied sender.
"""

__version__ = "0.1.0"

from trust_attestation.config.settings import SDKConfig  # noqa: E402,F401
from trust_attestation.sdk import AttestationSDK  # noqa: E402,F401

__all__ = ["AttestationSDK", "SDKConfig", "__version__"]
