"""Integer/octet-string conversions shared by the hashing and BBS layers."""
from __future__ import annotations

from ..errors import InvalidLengthError, InvalidParameterError

__all__ = ["i2osp", "os2ip", "strxor"]


def i2osp(value: int, length: int) -> bytes:
    """Encodes a non-negative integer as a big-endian string of `length` bytes.

    Raises:
        InvalidLengthError: If `length` is not positive.
        InvalidParameterError: If `value` does not fit in `length` bytes.
    """
    if length <= 0:
        raise InvalidLengthError(f"Length must be a positive integer (got {length}).")
    if value < 0 or value >= 1 << (8 * length):
        raise InvalidParameterError(f"Value {value} does not fit in {length} bytes.")
    return value.to_bytes(length, "big")


def os2ip(data: bytes) -> int:
    return int.from_bytes(data, "big")


def strxor(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise InvalidLengthError("strxor operands must have equal length.")
    return bytes(x ^ y for x, y in zip(a, b))
