"""
Environment variable loading for Trust Attestation.

- TON_NETWORK: mainnet | testnet (default: mainnet)
- HAPI_STAGING: use the staging scoring backend (default: 1)
- HAPI_ENDPOINT: scoring backend base URL (overrides HAPI_STAGING)
- ATTESTATION_CONTRACT_ADDRESS: attestation contract (default: mainnet deployment)
- TON_NODE_URL: TON API base URL (default per network)
- TONAPI_KEY: TON API bearer key
- REFERRAL_ID: referral id forwarded with CREATE and attestation count updates
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

SCORING_STAGING_URL = "https://hapi-one.stage.hapi.farm"
SCORING_PRODUCTION_URL = "https://score-be.hapi.mobi"

MAINNET_NODE_URL = "https://tonapi.io"
TESTNET_NODE_URL = "https://testnet.tonapi.io"

# Attestation contract, mainnet deployment
DEFAULT_MAINNET_CONTRACT_ADDRESS = "EQBiXrm6sM4V2SxDPDDuEr-qALlRl-utFx0g2gzaGIcS827a"

NETWORK_MAINNET = "mainnet"
NETWORK_TESTNET = "testnet"

# TON Connect network ids
NETWORK_IDS = {NETWORK_MAINNET: -239, NETWORK_TESTNET: -3}

DEFAULT_REQUEST_TIMEOUT_SEC = 15.0


def load_attestation_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def _parse_bool_env(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


def get_network() -> str:
    """Return TON_NETWORK from env: mainnet | testnet. Default: mainnet."""
    load_attestation_env()
    raw = (os.getenv("TON_NETWORK") or NETWORK_MAINNET).strip().lower()
    if raw in ("testnet", "test", "-3"):
        return NETWORK_TESTNET
    return NETWORK_MAINNET


def use_staging() -> bool:
    load_attestation_env()
    return _parse_bool_env("HAPI_STAGING", True)


def get_scoring_endpoint() -> str:
    """HAPI_ENDPOINT > staging/production default."""
    load_attestation_env()
    url = (os.getenv("HAPI_ENDPOINT") or "").strip()
    if url:
        return url.rstrip("/")
    return SCORING_STAGING_URL if use_staging() else SCORING_PRODUCTION_URL


def get_node_url(network: str | None = None) -> str:
    """TON_NODE_URL > default for network (TON_NETWORK when not given)."""
    load_attestation_env()
    url = (os.getenv("TON_NODE_URL") or "").strip()
    if url:
        return url.rstrip("/")
    network = network or get_network()
    return TESTNET_NODE_URL if network == NETWORK_TESTNET else MAINNET_NODE_URL


def get_contract_address(network: str | None = None) -> str:
    """
    ATTESTATION_CONTRACT_ADDRESS from env, or the mainnet deployment.
    There is no testnet default; testnet requires the env var.
    """
    load_attestation_env()
    addr = (os.getenv("ATTESTATION_CONTRACT_ADDRESS") or "").strip()
    if addr:
        return addr
    network = network or get_network()
    return "" if network == NETWORK_TESTNET else DEFAULT_MAINNET_CONTRACT_ADDRESS


def get_referral_id() -> int:
    load_attestation_env()
    raw = (os.getenv("REFERRAL_ID") or "0").strip()
    try:
        return int(raw)
    except ValueError:
        return 0


def get_tonapi_key() -> str | None:
    load_attestation_env()
    return (os.getenv("TONAPI_KEY") or "").strip() or None


def get_request_timeout() -> float:
    load_attestation_env()
    try:
        return float(os.getenv("REQUEST_TIMEOUT_SEC", str(DEFAULT_REQUEST_TIMEOUT_SEC)))
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT_SEC
