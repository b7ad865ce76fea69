"""
Configuration management for Trust Attestation.

Loads settings from environment variables and an optional .env file.
Exposes a single frozen SDKConfig for the scoring endpoint, contract, node and network.
"""

from trust_attestation.config.settings import SDKConfig, get_settings  # noqa: F401

__all__ = ["SDKConfig", "get_settings"]
