"""
Attestation contract layer: record address derivation, message codec, fee estimation,
contract reads and post-submission tracking.
"""

from trust_attestation.contracts.address_codec import derive_user_record_address  # noqa: F401
from trust_attestation.contracts.attestation_client import AttestationClient  # noqa: F401
from trust_attestation.contracts.fee_estimator import FeeEstimator  # noqa: F401
from trust_attestation.contracts.message_codec import (  # noqa: F401
    decode_message,
    encode_create,
    encode_update,
)
from trust_attestation.contracts.tracker import AttestationTracker  # noqa: F401
