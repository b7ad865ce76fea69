"""
Attestation client: contract reads plus message preparation.

- prepare(): size the transaction (caller value or FeeEstimator total) and build the
  CREATE/UPDATE message for a wallet sender. Never sends anything itself.
- read_record(): derive the user's record address off-chain and call get_user_data on it.
Getter failures are wrapped with the operation and re-raised; no retries here.
"""

from __future__ import annotations

from typing import Any

from pytoniq_core import Address

from trust_attestation.attest_logging import get_logger
from trust_attestation.contracts.address_codec import derive_user_record_address
from trust_attestation.contracts.fee_estimator import FeeEstimator
from trust_attestation.contracts.message_codec import (
    OP_CREATE_ATTESTATION,
    OP_UPDATE_ATTESTATION,
    build_message_body,
)
from trust_attestation.contracts.wrappers import AttestationContract, UserRecordContract
from trust_attestation.core.exceptions import AttestationError, RecordReadError
from trust_attestation.models import (
    AttestationContractData,
    AttestationMessage,
    AttestationOptions,
    AttestationRecord,
    FeeBreakdown,
)
from trust_attestation.ton import parse_address

logger = get_logger(__name__)


class AttestationClient:
    """Ties address derivation, message encoding and fee estimation to live contract reads."""

    def __init__(
        self,
        contract_address: Address | str,
        chain: Any,
        *,
        referral_id: int = 0,
        fee_estimator: FeeEstimator | None = None,
    ) -> None:
        self.contract = AttestationContract(contract_address, chain)
        self._chain = chain
        self.referral_id = referral_id
        self.fee_estimator = fee_estimator or FeeEstimator(self.contract)

    def record_address(self, user_address: Address | str) -> Address:
        return derive_user_record_address(self.contract.address, user_address)

    def estimate_fee(self, is_update: bool) -> FeeBreakdown:
        return self.fee_estimator.estimate(is_update)

    def prepare(self, opts: AttestationOptions, is_update: bool) -> AttestationMessage:
        """
        Build the message for opts. value defaults to the estimated total, query_id to
        int(is_update); CREATE always carries the configured referral id.
        """
        value = opts.value if opts.value is not None else self.estimate_fee(is_update).total
        query_id = opts.query_id if opts.query_id is not None else int(is_update)
        if is_update:
            message = AttestationMessage(
                opcode=OP_UPDATE_ATTESTATION,
                query_id=query_id,
                trust_score=opts.trust_score,
                expiration_date=opts.expiration_date,
                signature=bytes(opts.signature),
                value=value,
                destination=self.contract.address,
            )
        else:
            message = AttestationMessage(
                opcode=OP_CREATE_ATTESTATION,
                query_id=query_id,
                trust_score=opts.trust_score,
                expiration_date=opts.expiration_date,
                signature=bytes(opts.signature),
                value=value,
                destination=self.contract.address,
                referral_id=self.referral_id,
            )
        build_message_body(message)  # raises MessageEncodingError on overflow
        logger.info(
            "attestation_prepared",
            is_update=is_update,
            query_id=query_id,
            trust_score=opts.trust_score,
            value=value,
        )
        return message

    def read_record(self, user_address: Address | str) -> AttestationRecord:
        """Current on-chain record for user_address. Raises RecordReadError on any failure."""
        owner = parse_address(user_address)
        record_address = self.record_address(owner)
        try:
            data = UserRecordContract(record_address, self._chain).get_user_data()
        except AttestationError as e:
            raise RecordReadError(f"Failed to read attestation data for {owner.to_str()}: {e}") from e
        return AttestationRecord(
            owner=owner,
            commission_owner=data.commission_owner,
            trust_score=data.trust_score,
            expiration_date=data.expiration_date,
            attestation_contract_address=data.attestation_address,
            record_address=record_address,
        )

    def read_contract_data(self) -> AttestationContractData:
        try:
            return self.contract.get_attestation_data()
        except AttestationError as e:
            raise RecordReadError(f"Failed to read attestation contract data: {e}") from e

    def fetch_user_record_address(self, user_address: Address | str) -> Address:
        """Record address as reported by the contract itself."""
        owner = parse_address(user_address)
        try:
            return self.contract.get_user_record_address(owner)
        except AttestationError as e:
            raise RecordReadError(f"Failed to read record address for {owner.to_str()}: {e}") from e

    def read_record_balance(self, user_address: Address | str) -> int:
        record_address = self.record_address(user_address)
        try:
            return UserRecordContract(record_address, self._chain).get_balance()
        except AttestationError as e:
            raise RecordReadError(f"Failed to read record balance: {e}") from e
