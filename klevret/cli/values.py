"""Values taken from command-line arguments of the console."""

from __future__ import annotations

import ipaddress
import string
from dataclasses import dataclass

from klevret.common.parsing import CharReader

_DIGITS = frozenset(string.digits)


def _read_number(reader: CharReader) -> int:
    if reader.ch not in _DIGITS:
        raise ValueError("number parse error: expected a digit")
    digits = []
    while reader.ch in _DIGITS:
        digits.append(reader.ch)
        reader.advance()
    return int("".join(digits))


def _read_octet(reader: CharReader) -> int:
    digits = []
    while reader.ch in _DIGITS:
        digits.append(reader.ch)
        reader.advance()
    octet = int("".join(digits)) if digits else 0
    if octet > 255:
        raise ValueError("octet must be in the range [0..255]")
    return octet


def _parse_prefix(text: str, limit: int) -> int:
    prefix = _read_number(CharReader(text))
    if prefix > limit:
        raise ValueError(f"prefix must be in the range [0..{limit}]")
    return prefix


@dataclass(frozen=True)
class IPv4Address:
    """An IPv4 address typed at the console."""

    octets: bytes = bytes(4)

    @classmethod
    def parse(cls, text: str) -> "IPv4Address":
        reader = CharReader(text)
        octets = []
        for index in range(4):
            octets.append(_read_octet(reader))
            if index != 3:
                reader.expect(".")
        return cls(bytes(octets))

    def __str__(self) -> str:
        return ".".join(str(octet) for octet in self.octets)


@dataclass(frozen=True)
class IPv6Address:
    """An IPv6 address typed at the console."""

    packed: bytes = bytes(16)

    @classmethod
    def parse(cls, text: str) -> "IPv6Address":
        return cls(ipaddress.IPv6Address(text).packed)

    def __str__(self) -> str:
        return ipaddress.IPv6Address(self.packed).compressed


@dataclass(frozen=True)
class IPv4SubnetMask:
    """An IPv4 subnet mask given as a prefix length."""

    prefix: int = 0

    @classmethod
    def parse(cls, text: str) -> "IPv4SubnetMask":
        return cls(_parse_prefix(text, 32))

    def __str__(self) -> str:
        return str(self.prefix)


@dataclass(frozen=True)
class IPv6SubnetMask:
    """An IPv6 subnet mask given as a prefix length."""

    prefix: int = 0

    @classmethod
    def parse(cls, text: str) -> "IPv6SubnetMask":
        return cls(_parse_prefix(text, 128))

    def __str__(self) -> str:
        return str(self.prefix)