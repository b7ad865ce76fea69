"""
HTTP clients: TON API get-methods and the scoring backend, plus the proof payload refresher.
"""

from trust_attestation.clients.proof_refresher import ProofPayloadRefresher  # noqa: F401
from trust_attestation.clients.scoring import ScoringClient  # noqa: F401
from trust_attestation.clients.tonapi import TonApiClient  # noqa: F401
