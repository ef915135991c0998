"""IPv4 addresses and subnet masks as used in DHCP messages."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass

from klevret.common.endians import from_network_bytes, to_network_bytes
from klevret.common.parsing import CharReader

IP_V4_ADDRESS_LENGTH = 4
IP_V4_SUBNET_MASK_LENGTH = 4

_MAX_UINT32 = 0xFFFFFFFF
_DIGITS = frozenset(string.digits)
_ALLOWED_MASK_OCTETS = frozenset({128, 192, 224, 240, 248, 252, 254, 255})


class L3AddressType(enum.Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"


def _read_octet(reader: CharReader) -> int:
    digits = []
    while reader.ch in _DIGITS:
        digits.append(reader.ch)
        reader.advance()
    octet = int("".join(digits)) if digits else 0
    if octet > 255:
        raise ValueError("octet must not exceed 255")
    return octet


def _take(data: bytes, length: int, what: str) -> bytes:
    chunk = bytes(data[:length])
    if len(chunk) < length:
        raise ValueError(f"not enough octets for {what}")
    return chunk


def _dotted(value: int) -> str:
    return ".".join(str(octet) for octet in to_network_bytes(value, 4))


def _check_range(value: int) -> None:
    if not 0 <= value <= _MAX_UINT32:
        raise ValueError(f"{value} is outside the 32-bit range")


@dataclass(frozen=True, order=True)
class IPv4Address:
    """An IPv4 address held as a 32-bit host-order integer."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_range(self.value)

    @classmethod
    def parse(cls, text: str) -> "IPv4Address":
        """Parse dotted-decimal notation."""
        reader = CharReader(text)
        octets = []
        for index in range(IP_V4_ADDRESS_LENGTH):
            octets.append(_read_octet(reader))
            if index < IP_V4_ADDRESS_LENGTH - 1 and reader.ch != ".":
                raise ValueError("IP address parse error: expected '.'")
            reader.advance()
        if not reader.at_end():
            raise ValueError(f"IP address parse error: unexpected character {reader.ch!r}")
        return cls(from_network_bytes(bytes(octets), IP_V4_ADDRESS_LENGTH))

    @classmethod
    def from_bytes(cls, data: bytes) -> "IPv4Address":
        """Build from the first four bytes of ``data`` in network order."""
        chunk = _take(data, IP_V4_ADDRESS_LENGTH, "an IP address")
        return cls(from_network_bytes(chunk, IP_V4_ADDRESS_LENGTH))

    def to_bytes(self) -> bytes:
        return to_network_bytes(self.value, IP_V4_ADDRESS_LENGTH)

    def next(self) -> "IPv4Address":
        """Return the following address, wrapping after 255.255.255.255."""
        return IPv4Address((self.value + 1) & _MAX_UINT32)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return _dotted(self.value)


@dataclass(frozen=True)
class IPv4SubnetMask:
    """An IPv4 subnet mask held as a 32-bit host-order integer."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_range(self.value)

    @classmethod
    def parse(cls, text: str) -> "IPv4SubnetMask":
        """Parse a dotted-decimal mask made of a contiguous run of one bits."""
        reader = CharReader(text)
        octets = []
        previous = 255
        for index in range(IP_V4_SUBNET_MASK_LENGTH):
            octet = _read_octet(reader)
            if octet not in _ALLOWED_MASK_OCTETS:
                raise ValueError("subnet mask parse error: octet value not allowed")
            if previous != 255:
                raise ValueError("subnet mask parse error: bits must be contiguous ones")
            previous = octet
            octets.append(octet)
            if index < IP_V4_SUBNET_MASK_LENGTH - 1:
                if reader.ch != ".":
                    raise ValueError("subnet mask parse error: expected '.'")
                reader.advance()
        if not reader.at_end():
            raise ValueError(f"subnet mask parse error: unexpected character {reader.ch!r}")
        return cls(from_network_bytes(bytes(octets), IP_V4_SUBNET_MASK_LENGTH))

    @classmethod
    def from_bytes(cls, data: bytes) -> "IPv4SubnetMask":
        """Build from the first four bytes of ``data`` in network order."""
        chunk = _take(data, IP_V4_SUBNET_MASK_LENGTH, "a subnet mask")
        return cls(from_network_bytes(chunk, IP_V4_SUBNET_MASK_LENGTH))

    @classmethod
    def from_prefix(cls, prefix: int) -> "IPv4SubnetMask":
        """Build the mask with ``prefix`` leading one bits."""
        if not 0 <= prefix <= 32:
            raise ValueError("invalid prefix, allowed values are [0..32]")
        return cls((_MAX_UINT32 << (32 - prefix)) & _MAX_UINT32)

    def to_prefix(self) -> int:
        """Count the one bits of the mask."""
        return bin(self.value).count("1")

    def to_bytes(self) -> bytes:
        return to_network_bytes(self.value, IP_V4_SUBNET_MASK_LENGTH)

    def __str__(self) -> str:
        return _dotted(self.value)