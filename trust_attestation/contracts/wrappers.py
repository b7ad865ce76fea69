"""
Typed get-method wrappers for the attestation contract and a user's record contract.

The chain argument is anything with run_get_method(address, method, args=None) -> TupleReader
(TonApiClient in production, fakes in tests). Errors propagate unchanged; callers add context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pytoniq_core import Address

from trust_attestation.models import AttestationContractData
from trust_attestation.ton import parse_address


@dataclass(frozen=True)
class UserData:
    commission_owner: Address | None
    trust_score: int
    expiration_date: int
    attestation_address: Address | None


class AttestationContract:
    """Parent attestation contract (the jetton master)."""

    def __init__(self, address: Address | str, chain: Any) -> None:
        self.address = parse_address(address)
        self._chain = chain

    def get_create_attestation_fee(self) -> int:
        return self._chain.run_get_method(self.address, "get_create_attestation_fee").read_big_number()

    def get_update_attestation_fee(self) -> int:
        return self._chain.run_get_method(self.address, "get_update_attestation_fee").read_big_number()

    def get_attestation_data(self) -> AttestationContractData:
        stack = self._chain.run_get_method(self.address, "get_hapi_attestation_data")
        return AttestationContractData(
            user_count=stack.read_big_number(),
            contract_owner=stack.read_address_opt(),
            commission_owner=stack.read_address_opt(),
            create_fee=stack.read_big_number(),
            update_fee=stack.read_big_number(),
            wallet_code=stack.read_cell(),
        )

    def get_user_record_address(self, user_address: Address | str) -> Address:
        """On-chain counterpart of derive_user_record_address."""
        user = parse_address(user_address)
        stack = self._chain.run_get_method(self.address, "get_user_jetton_address", args=[user.to_str(is_user_friendly=False)])
        return stack.read_address()


class UserRecordContract:
    """A user's attestation record contract."""

    def __init__(self, address: Address | str, chain: Any) -> None:
        self.address = parse_address(address)
        self._chain = chain

    def get_user_data(self) -> UserData:
        stack = self._chain.run_get_method(self.address, "get_user_data")
        return UserData(
            commission_owner=stack.read_address_opt(),
            trust_score=stack.read_big_number(),
            expiration_date=stack.read_big_number(),
            attestation_address=stack.read_address_opt(),
        )

    def get_balance(self) -> int:
        return self._chain.run_get_method(self.address, "get_smc_balance").read_big_number()

    def get_owner(self) -> Address:
        return self._chain.run_get_method(self.address, "get_owner").read_address()
