"""
Structured logging for Trust Attestation.

JSON logs with timestamp, event_type and context keys (user_address, attempt, ...).
Use get_logger() in all SDK modules.
"""

from trust_attestation.attest_logging.logger import bind_user, get_logger

__all__ = ["bind_user", "get_logger"]
