"""
Command line entry point.

Usage:
  trust-attestation derive-address <user>
  trust-attestation read-record <user>
  trust-attestation fee [--update]
  trust-attestation contract-data
  trust-attestation track <user> <score> [--interval SEC] [--attempts N]

Settings come from the environment / .env (see trust_attestation.config.env).
derive-address works offline; every other command calls the TON API.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from trust_attestation.attest_logging import get_logger
from trust_attestation.config.settings import SDKConfig
from trust_attestation.contracts.address_codec import derive_user_record_address
from trust_attestation.core.exceptions import AttestationError

logger = get_logger(__name__)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trust-attestation", description="TON trust attestation tools")
    parser.add_argument("--contract", help="attestation contract address (overrides env)")
    parser.add_argument("--network", choices=("mainnet", "testnet"), help="TON network (overrides env)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("derive-address", help="compute a user's record address offline")
    p.add_argument("user")

    p = sub.add_parser("read-record", help="read a user's on-chain attestation")
    p.add_argument("user")

    p = sub.add_parser("fee", help="estimate the value to attach")
    p.add_argument("--update", action="store_true", help="estimate for update_attestation")

    sub.add_parser("contract-data", help="read attestation contract state")

    p = sub.add_parser("track", help="poll until the user's score reaches SCORE")
    p.add_argument("user")
    p.add_argument("score", type=int)
    p.add_argument("--interval", type=float, default=None, help="seconds between attempts")
    p.add_argument("--attempts", type=int, default=None, help="maximum attempts")
    return parser


def _config(args: argparse.Namespace) -> SDKConfig:
    overrides: dict[str, Any] = {}
    if args.network:
        overrides["network"] = args.network
    if args.contract:
        overrides["contract_address"] = args.contract
    return SDKConfig(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = _config(args)
        if args.command == "derive-address":
            record = derive_user_record_address(config.contract, args.user)
            _print({
                "user": args.user,
                "record_address": record.to_str(),
                "raw": record.to_str(is_user_friendly=False),
            })
            return 0

        from trust_attestation.sdk import AttestationSDK

        with AttestationSDK(config) as sdk:
            if args.command == "read-record":
                _print(sdk.get_user_attestation_onchain(args.user).to_dict())
            elif args.command == "fee":
                _print(sdk.calculate_transaction_fee(args.update).to_dict())
            elif args.command == "contract-data":
                data = sdk.get_contract_data()
                _print({
                    "user_count": data.user_count,
                    "contract_owner": data.contract_owner.to_str() if data.contract_owner else None,
                    "commission_owner": data.commission_owner.to_str() if data.commission_owner else None,
                    "create_fee": data.create_fee,
                    "update_fee": data.update_fee,
                    "wallet_code_hash": data.wallet_code.hash.hex(),
                })
            elif args.command == "track":
                outcome = sdk.track_attestation_result(
                    args.user,
                    args.score,
                    poll_interval_sec=args.interval,
                    max_attempts=args.attempts,
                )
                _print({
                    "status": outcome.status,
                    "state": outcome.state.value,
                    "attempts": outcome.attempts,
                    "data": outcome.data.to_dict() if outcome.data else None,
                })
                return 0 if outcome.confirmed else 2
    except AttestationError as e:
        logger.error("cli_command_failed", command=args.command, error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
