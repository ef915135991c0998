"""Hardware (link-layer) addresses carried in DHCP messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class HardwareAddressType(enum.IntEnum):
    """Hardware types as assigned for ARP and DHCP ``htype``."""

    ETHERNET_10MB = 1
    EXPERIMENTAL_ETHERNET_3MB = 2
    AMATEUR_RADIO_AX_25 = 3
    PROTEON_PRONET_TOKEN_RING = 4
    CHAOS = 5
    IEEE_802_NETWORKS = 6
    ARCNET = 7
    HYPERCHANNEL = 8
    LANSTAR = 9
    AUTONET_SHORT_ADDRESS = 10
    LOCALTALK = 11
    LOCALNET_IBM_PCNET_OR_SYTEK_LOCALNET = 12
    ULTRA_LINK = 13
    SMDS = 14
    FRAME_RELAY = 15
    ATM = 16
    HDLC = 17
    FIBRE_CHANNEL = 18
    ATM_19 = 19
    SERIAL_LINE = 20
    ATM_21 = 21


def hardware_address_length(htype: HardwareAddressType) -> Optional[int]:
    """Address length in bytes for ``htype``, or None where it is not known."""
    if htype == HardwareAddressType.ETHERNET_10MB:
        return 6
    return None


DHCP_HARDWARE_ADDRESS_MAX_LENGTH = 16
MAC_ADDRESS_LENGTH = 6


@dataclass(frozen=True, order=True)
class MacAddress:
    """An Ethernet MAC address."""

    data: bytes = bytes(MAC_ADDRESS_LENGTH)

    address_length = MAC_ADDRESS_LENGTH

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != MAC_ADDRESS_LENGTH:
            raise ValueError(f"MAC address must be {MAC_ADDRESS_LENGTH} bytes")
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MacAddress":
        """Build from the first six bytes of ``data``."""
        chunk = bytes(data[:MAC_ADDRESS_LENGTH])
        if len(chunk) < MAC_ADDRESS_LENGTH:
            raise ValueError("MAC address is incomplete")
        return cls(chunk)

    def to_chaddr(self) -> bytes:
        """The address padded with zeros to the DHCP ``chaddr`` field size."""
        return self.data.ljust(DHCP_HARDWARE_ADDRESS_MAX_LENGTH, b"\x00")

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self.data)