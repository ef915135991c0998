"""DHCP messages: parsing from and encoding to wire format."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from klevret.common.endians import from_network_bytes, to_network_bytes
from klevret.dhcp.hardware_address import (
    DHCP_HARDWARE_ADDRESS_MAX_LENGTH,
    HardwareAddressType,
    MacAddress,
    hardware_address_length,
)
from klevret.dhcp.ip_address import IPv4Address
from klevret.dhcp.option import DhcpOption
from klevret.dhcp.option_spec import END_OPTION, PAD_OPTION

DHCP_MESSAGE_MIN_LENGTH = 236
MAGIC_COOKIE = bytes([99, 130, 83, 99])
SNAME_LENGTH = 64
FILE_LENGTH = 128

_CHADDR_OFFSET = 28
_SNAME_OFFSET = _CHADDR_OFFSET + DHCP_HARDWARE_ADDRESS_MAX_LENGTH
_FILE_OFFSET = _SNAME_OFFSET + SNAME_LENGTH
_OPTIONS_OFFSET = DHCP_MESSAGE_MIN_LENGTH + len(MAGIC_COOKIE)


class DhcpMessageType(enum.IntEnum):
    BOOTREQUEST = 1
    BOOTREPLY = 2


def _parse_options(data: bytes) -> List[DhcpOption]:
    options = []
    position = 0
    while position < len(data):
        code = data[position]
        position += 1
        if code == PAD_OPTION:
            continue
        if code == END_OPTION:
            break
        if position >= len(data):
            raise ValueError(f"option {code} has no length byte")
        length = data[position]
        position += 1
        payload = data[position:position + length]
        if len(payload) < length:
            raise ValueError(f"option {code} is truncated")
        options.append(DhcpOption(code, length, payload))
        position += length
    return options


def _fixed_field(value: bytes, length: int, name: str) -> bytes:
    if len(value) > length:
        raise ValueError(f"{name} is longer than {length} bytes")
    return bytes(value).ljust(length, b"\x00")


@dataclass
class DhcpMessage:
    """A DHCP message with its fixed header fields and options."""

    op: DhcpMessageType = DhcpMessageType.BOOTREQUEST
    htype: HardwareAddressType = HardwareAddressType.ETHERNET_10MB
    hlen: int = hardware_address_length(HardwareAddressType.ETHERNET_10MB)
    hops: int = 0
    xid: int = 0
    secs: int = 0
    flags: int = 0
    ciaddr: IPv4Address = field(default_factory=IPv4Address)
    yiaddr: IPv4Address = field(default_factory=IPv4Address)
    siaddr: IPv4Address = field(default_factory=IPv4Address)
    giaddr: IPv4Address = field(default_factory=IPv4Address)
    chaddr: Optional[MacAddress] = None
    sname: bytes = b""
    file: bytes = b""
    options: List[DhcpOption] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> "DhcpMessage":
        """Parse a message received from the network."""
        data = bytes(data)
        if len(data) < DHCP_MESSAGE_MIN_LENGTH:
            raise ValueError(f"minimum DHCP message length is {DHCP_MESSAGE_MIN_LENGTH}")
        if data[1] != HardwareAddressType.ETHERNET_10MB:
            raise ValueError("unsupported hardware address type")
        message = cls(
            op=DhcpMessageType(data[0]),
            htype=HardwareAddressType(data[1]),
            hlen=data[2],
            hops=data[3],
            xid=from_network_bytes(data[4:8], 4),
            secs=from_network_bytes(data[8:10], 2),
            flags=from_network_bytes(data[10:12], 2),
            ciaddr=IPv4Address.from_bytes(data[12:16]),
            yiaddr=IPv4Address.from_bytes(data[16:20]),
            siaddr=IPv4Address.from_bytes(data[20:24]),
            giaddr=IPv4Address.from_bytes(data[24:28]),
            chaddr=MacAddress.from_bytes(data[_CHADDR_OFFSET:_SNAME_OFFSET]),
            sname=data[_SNAME_OFFSET:_FILE_OFFSET],
            file=data[_FILE_OFFSET:DHCP_MESSAGE_MIN_LENGTH],
        )
        if len(data) < _OPTIONS_OFFSET:
            return message
        if data[DHCP_MESSAGE_MIN_LENGTH:_OPTIONS_OFFSET] != MAGIC_COOKIE:
            raise ValueError("wrong magic cookie")
        message.options = _parse_options(data[_OPTIONS_OFFSET:])
        return message

    def to_bytes(self) -> bytes:
        """Encode the message for sending."""
        if self.chaddr is None:
            raise ValueError("chaddr is not set")
        parts = [
            bytes([int(self.op), int(self.htype), self.hlen, self.hops]),
            to_network_bytes(self.xid, 4),
            to_network_bytes(self.secs, 2),
            to_network_bytes(self.flags, 2),
            self.ciaddr.to_bytes(),
            self.yiaddr.to_bytes(),
            self.siaddr.to_bytes(),
            self.giaddr.to_bytes(),
            self.chaddr.to_chaddr(),
            _fixed_field(self.sname, SNAME_LENGTH, "sname"),
            _fixed_field(self.file, FILE_LENGTH, "file"),
        ]
        if self.options:
            parts.append(MAGIC_COOKIE)
            parts.extend(option.to_bytes() for option in self.options)
            parts.append(bytes([END_OPTION]))
        return b"".join(parts)

    def find_option(self, code: int) -> Optional[DhcpOption]:
        """The first option with ``code``, or None."""
        return next((option for option in self.options if option.code == code), None)