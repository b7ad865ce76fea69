"""
Tests for the typed get-method wrappers over FakeChain.
"""

from __future__ import annotations

import pytest
from pytoniq_core import Address

from tests.conftest import COMMISSION_OWNER, CONTRACT, USER
from trust_attestation.contracts.wrappers import AttestationContract, UserRecordContract
from trust_attestation.core.exceptions import BocError, GetterError

RECORD = Address((0, bytes.fromhex("ee" * 32)))


def test_fee_getters(fake_chain, stack):
    fake_chain.set(CONTRACT, "get_create_attestation_fee", [stack.num(100)])
    fake_chain.set(CONTRACT, "get_update_attestation_fee", [stack.num(80)])
    contract = AttestationContract(CONTRACT.to_str(), fake_chain)
    assert contract.get_create_attestation_fee() == 100
    assert contract.get_update_attestation_fee() == 80


def test_user_data(fake_chain, stack):
    fake_chain.set(RECORD, "get_user_data", stack.user_data(64, expiration=123))
    data = UserRecordContract(RECORD, fake_chain).get_user_data()
    assert data.commission_owner == COMMISSION_OWNER
    assert data.trust_score == 64
    assert data.expiration_date == 123
    assert data.attestation_address == CONTRACT


def test_owner_and_balance(fake_chain, stack):
    fake_chain.set(RECORD, "get_owner", [stack.address(USER)])
    fake_chain.set(RECORD, "get_smc_balance", [stack.num(10)])
    record = UserRecordContract(RECORD, fake_chain)
    assert record.get_owner() == USER
    assert record.get_balance() == 10


def test_short_stack_is_bocerror(fake_chain, stack):
    fake_chain.set(RECORD, "get_user_data", [stack.address(None), stack.num(1)])
    with pytest.raises(BocError):
        UserRecordContract(RECORD, fake_chain).get_user_data()


def test_getter_errors_propagate(fake_chain):
    with pytest.raises(GetterError):
        AttestationContract(CONTRACT, fake_chain).get_create_attestation_fee()
