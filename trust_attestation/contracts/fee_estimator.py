"""
Value to attach to create/update attestation messages.

total = contract base fee + gas allowance + minimum commission (+ storage reserve on CREATE).
CREATE deploys a new record contract, which needs the storage reserve; UPDATE targets an
already funded record and does not. Under-funding bounces on-chain and only shows up
as tracking exhaustion.
"""

from __future__ import annotations

from typing import Any

from trust_attestation.attest_logging import get_logger
from trust_attestation.core.exceptions import AttestationError, FeeEstimationError
from trust_attestation.models import FeeBreakdown

logger = get_logger(__name__)

NANO = 1_000_000_000

TON_DEFAULT_GAS = 50_000_000  # 0.05 TON
TON_MIN_COMMISSION = 10_000_000  # 0.01 TON
TON_MIN_JETTON_STORAGE = 1_000_000  # 0.001 TON


def to_nano(amount: str | int | float) -> int:
    """'0.05' -> 50000000. Strings are parsed exactly."""
    if isinstance(amount, int):
        return amount * NANO
    text = str(amount).strip()
    whole, _, frac = text.partition(".")
    if len(frac) > 9:
        raise ValueError(f"too many decimals in {text!r}")
    sign = -1 if whole.startswith("-") else 1
    whole = whole.lstrip("-") or "0"
    return sign * (int(whole) * NANO + int(frac.ljust(9, "0") or "0"))


class FeeEstimator:
    """Reads the base fee from the attestation contract and adds the fixed constants."""

    def __init__(
        self,
        contract: Any,
        *,
        gas_fee: int = TON_DEFAULT_GAS,
        commission: int = TON_MIN_COMMISSION,
        storage_reserve: int = TON_MIN_JETTON_STORAGE,
    ) -> None:
        self._contract = contract
        self.gas_fee = gas_fee
        self.commission = commission
        self.storage_reserve = storage_reserve

    def base_fee(self, is_update: bool) -> int:
        try:
            if is_update:
                return int(self._contract.get_update_attestation_fee())
            return int(self._contract.get_create_attestation_fee())
        except AttestationError as e:
            logger.warning("fee_base_fee_read_failed", is_update=is_update, error=str(e))
            raise FeeEstimationError(f"Failed to calculate transaction fee: {e}") from e

    def estimate(self, is_update: bool) -> FeeBreakdown:
        base = self.base_fee(is_update)
        fees = FeeBreakdown(
            base_fee=base,
            gas_fee=self.gas_fee,
            commission=self.commission,
            storage_fee=0 if is_update else self.storage_reserve,
        )
        logger.debug("fee_estimated", is_update=is_update, **fees.to_dict())
        return fees
