"""
SDK settings: one frozen config object, fixed at construction.

Field defaults come from the environment (see config.env); explicit keyword
arguments win. Validated in __post_init__; read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import lru_cache

from pytoniq_core import Address

from trust_attestation.config import env
from trust_attestation.core.exceptions import ConfigurationError, InvalidAddressError
from trust_attestation.ton import parse_address

CONFIG_VERSION = 1

DEFAULT_POLL_INTERVAL_SEC = 7.0
DEFAULT_MAX_ATTEMPTS = 9


@dataclass(frozen=True)
class SDKConfig:
    """Scoring endpoint, contract, node, network and referral settings."""

    referral_id: int = field(default_factory=env.get_referral_id)
    network: str = field(default_factory=env.get_network)
    scoring_endpoint: str = field(default_factory=env.get_scoring_endpoint)
    contract_address: str | None = None
    node_url: str | None = None
    api_key: str | None = field(default_factory=env.get_tonapi_key, repr=False)
    request_timeout_sec: float = field(default_factory=env.get_request_timeout)
    poll_interval_sec: float = DEFAULT_POLL_INTERVAL_SEC
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    version: int = CONFIG_VERSION

    def __post_init__(self) -> None:
        if self.network not in env.NETWORK_IDS:
            raise ConfigurationError(f"unknown network {self.network!r}")
        # Per-network defaults follow the resolved network, not TON_NETWORK
        if self.contract_address is None:
            object.__setattr__(self, "contract_address", env.get_contract_address(self.network))
        if self.node_url is None:
            object.__setattr__(self, "node_url", env.get_node_url(self.network))
        if not self.contract_address:
            raise ConfigurationError("ATTESTATION_CONTRACT_ADDRESS must be set for this network")
        try:
            parse_address(self.contract_address)
        except InvalidAddressError as e:
            raise ConfigurationError(f"invalid contract address {self.contract_address!r}") from e
        if not self.scoring_endpoint:
            raise ConfigurationError("scoring endpoint must be set")
        if not self.node_url:
            raise ConfigurationError("node url must be set")
        if self.referral_id < 0:
            raise ConfigurationError("referral_id must be non-negative")
        if self.poll_interval_sec < 0:
            raise ConfigurationError("poll_interval_sec must be non-negative")
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.version != CONFIG_VERSION:
            raise ConfigurationError(f"unsupported config version {self.version}")

    @property
    def contract(self) -> Address:
        return parse_address(self.contract_address)

    @property
    def network_id(self) -> int:
        return env.NETWORK_IDS[self.network]

    @property
    def is_testnet(self) -> bool:
        return self.network == env.NETWORK_TESTNET

    def with_overrides(self, **changes) -> "SDKConfig":
        return replace(self, **changes)


@lru_cache(maxsize=1)
def get_settings() -> SDKConfig:
    """Return the process-wide settings built from the environment."""
    return SDKConfig()
