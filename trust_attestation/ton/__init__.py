"""
Address parsing and get-method stack reading over pytoniq-core. Pure, no I/O.
"""

from trust_attestation.ton.address import is_valid_address, parse_address  # noqa: F401
from trust_attestation.ton.stack import TupleReader, load_cell  # noqa: F401

__all__ = [
    "TupleReader",
    "is_valid_address",
    "load_cell",
    "parse_address",
]
