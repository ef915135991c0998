"""Conversions between network (big-endian) byte order and integers."""

from __future__ import annotations

import sys


def _check_size(data: bytes, size: int) -> None:
    if len(data) != size:
        raise ValueError(f"expected {size} bytes, got {len(data)}")


def from_network_bytes(data: bytes, size: int, signed: bool = False) -> int:
    """Read an integer of ``size`` bytes stored in network byte order."""
    data = bytes(data)
    _check_size(data, size)
    return int.from_bytes(data, "big", signed=signed)


def to_network_bytes(value: int, size: int) -> bytes:
    """Write ``value`` as ``size`` bytes in network byte order.

    Negative values are written in two's complement.
    """
    try:
        return value.to_bytes(size, "big", signed=value < 0)
    except OverflowError as error:
        raise ValueError(f"{value} does not fit in {size} bytes") from error


def swap_bytes(value: int, size: int, signed: bool = False) -> int:
    """Convert an integer holding network-ordered bytes to its host value.

    ``value`` is taken as the host reading of ``size`` bytes laid out in
    network order; on a little-endian host this reverses the bytes, on a
    big-endian host it leaves the value as it is.
    """
    try:
        raw = value.to_bytes(size, sys.byteorder, signed=signed)
    except OverflowError as error:
        raise ValueError(f"{value} does not fit in {size} bytes") from error
    return int.from_bytes(raw, "big", signed=signed)