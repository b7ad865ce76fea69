"""
Pytest fixtures for Trust Attestation tests. No network: the TON API is replaced by an
in-memory get-method table and the scoring backend by MagicMock.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from pytoniq_core import Address, Cell, begin_cell

from trust_attestation.config.settings import SDKConfig
from trust_attestation.core.exceptions import GetterError
from trust_attestation.ton import TupleReader, parse_address

CONTRACT = Address((0, bytes.fromhex("aa" * 32)))
OTHER_CONTRACT = Address((0, bytes.fromhex("ab" * 32)))
USER = Address((0, bytes.fromhex("11" * 32)))
USER_2 = Address((0, bytes.fromhex("22" * 32)))
COMMISSION_OWNER = Address((0, bytes.fromhex("c0" * 32)))


class Stack:
    """Builders for TON API stack items."""

    @staticmethod
    def num(value: int) -> dict[str, Any]:
        return {"type": "num", "num": hex(value)}

    @staticmethod
    def address(addr: Address | None) -> dict[str, Any]:
        cell = begin_cell().store_address(addr).end_cell()
        return {"type": "slice", "slice": cell.to_boc().hex()}

    @staticmethod
    def cell(cell: Cell) -> dict[str, Any]:
        return {"type": "cell", "cell": cell.to_boc().hex()}

    @classmethod
    def user_data(cls, trust_score: int, expiration: int = 1_700_000_000) -> list[dict[str, Any]]:
        return [
            cls.address(COMMISSION_OWNER),
            cls.num(trust_score),
            cls.num(expiration),
            cls.address(CONTRACT),
        ]


class FakeChain:
    """run_get_method backed by a dict of (raw address, method) -> stack items or exception."""

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str, list[str] | None]] = []

    def set(self, address: Address | str, method: str, response: Any) -> None:
        self.responses[(parse_address(address).to_str(is_user_friendly=False), method)] = response

    def run_get_method(self, address: Address | str, method: str, args: list[str] | None = None) -> TupleReader:
        key = (parse_address(address).to_str(is_user_friendly=False), method)
        self.calls.append((key[0], method, args))
        response = self.responses.get(key)
        if response is None:
            raise GetterError(method, -13)
        if isinstance(response, Exception):
            raise response
        return TupleReader(response)

    def methods_called(self) -> list[str]:
        return [m for _, m, _ in self.calls]


@pytest.fixture
def stack() -> type[Stack]:
    return Stack


@pytest.fixture
def fake_chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def scoring() -> MagicMock:
    return MagicMock(name="scoring_client")


@pytest.fixture
def sdk_config() -> SDKConfig:
    return SDKConfig(
        referral_id=7,
        network="mainnet",
        scoring_endpoint="https://scoring.test",
        contract_address=CONTRACT.to_str(is_user_friendly=False),
        node_url="https://tonapi.test",
        api_key=None,
        request_timeout_sec=5.0,
        poll_interval_sec=0.0,
        max_attempts=3,
    )
