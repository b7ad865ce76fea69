"""
Reader for get-method result stacks as returned by the TON API.

Items are JSON objects: {"type": "num", "num": "0x1dcd6500"}, {"type": "cell", "cell": "<hex boc>"},
{"type": "slice", "slice": "<hex boc>"}, {"type": "null"}, {"type": "tuple", "tuple": [...]}.
Reads are sequential, in the order the contract pushed the values. Anything malformed
raises BocError, so callers only ever see AttestationError subclasses.
"""

from __future__ import annotations

from typing import Any

from pytoniq_core import Address, Cell

from trust_attestation.core.exceptions import BocError


def load_cell(data: bytes | str) -> Cell:
    """Single root cell from BoC bytes or a hex string."""
    try:
        if isinstance(data, str):
            data = bytes.fromhex(data.strip())
        return Cell.one_from_boc(bytes(data))
    except Exception as e:
        # pytoniq_core raises bare Exception, IndexError and bitarray errors on bad input
        raise BocError(f"malformed BoC: {e}") from e


class TupleReader:
    def __init__(self, items: list[dict[str, Any]]) -> None:
        if items is not None and not isinstance(items, list):
            raise BocError(f"get-method stack must be a list, got {type(items).__name__}")
        self._items = list(items or [])
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._items) - self._pos

    def _pop(self) -> dict[str, Any]:
        if self._pos >= len(self._items):
            raise BocError("get-method stack exhausted")
        item = self._items[self._pos]
        self._pos += 1
        if not isinstance(item, dict):
            raise BocError(f"stack item must be an object, got {type(item).__name__}")
        return item

    def read_big_number(self) -> int:
        item = self._pop()
        if item.get("type") != "num":
            raise BocError(f"expected num on stack, got {item.get('type')}")
        try:
            return int(str(item.get("num")), 0)
        except (TypeError, ValueError) as e:
            raise BocError(f"invalid num value {item.get('num')!r}") from e

    def read_number(self) -> int:
        return self.read_big_number()

    def read_bool(self) -> bool:
        return self.read_big_number() != 0

    def read_cell(self) -> Cell:
        item = self._pop()
        kind = item.get("type")
        if kind not in ("cell", "slice"):
            raise BocError(f"expected cell on stack, got {kind}")
        return load_cell(item.get(kind) or "")

    def read_address_opt(self) -> Address | None:
        item = self._pop()
        kind = item.get("type")
        if kind == "null":
            return None
        if kind not in ("cell", "slice"):
            raise BocError(f"expected slice on stack, got {kind}")
        cell = load_cell(item.get(kind) or "")
        try:
            address = cell.begin_parse().load_address()
        except Exception as e:
            raise BocError(f"stack slice is not an address: {e}") from e
        if address is not None and not isinstance(address, Address):
            raise BocError(f"expected internal address on stack, got {address!r}")
        return address

    def read_address(self) -> Address:
        address = self.read_address_opt()
        if address is None:
            raise BocError("expected address on stack, got addr_none")
        return address
