"""A DHCP option decoded into typed values."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional

from klevret.common.endians import from_network_bytes, to_network_bytes
from klevret.dhcp.ip_address import IPv4Address, IPv4SubnetMask
from klevret.dhcp.option_spec import (
    END_OPTION,
    PAD_OPTION,
    VARIABLE_LENGTH,
    OptionDescription,
    PayloadType,
    describe_option,
)

_WHOLE_PAYLOAD_TYPES = frozenset(
    {PayloadType.VENDOR_SPECIFIC_FIELD, PayloadType.BYTE_ARRAY, PayloadType.STRING}
)


class DhcpOption:
    """One option of a DHCP message.

    ``values`` holds the decoded payload: addresses, masks, integers,
    flags or raw bytes, depending on the option's payload type.
    """

    def __init__(self, code: int, payload_length: Optional[int], payload: bytes) -> None:
        description = describe_option(code)
        if description.payload_length is VARIABLE_LENGTH:
            length = payload_length
        else:
            length = description.payload_length
            if payload_length != description.payload_length:
                raise ValueError(
                    f"option {code}: length {payload_length} differs from the standard "
                    f"length {description.payload_length}"
                )
        if description.payload_description.type is PayloadType.NONE:
            raise ValueError(f"option {code} cannot carry a value")
        self.description: OptionDescription = description
        self.payload_length: Optional[int] = length
        self.values: List[Any] = list(self._decode(bytes(payload)))

    @property
    def code(self) -> int:
        """The option code."""
        return self.description.code

    def _decode(self, payload: bytes) -> Iterator[Any]:
        payload_description = self.description.payload_description
        if not payload:
            return
        if payload_description.type in _WHOLE_PAYLOAD_TYPES:
            yield self._decode_whole(payload)
            return
        size = payload_description.element_size()
        if len(payload) % size:
            raise ValueError(
                f"option {self.code}: payload of {len(payload)} bytes is not a whole "
                f"number of {size}-byte elements"
            )
        for offset in range(0, len(payload), size):
            yield self._decode_element(payload[offset:offset + size])

    def _decode_whole(self, payload: bytes) -> bytes:
        if self.description.payload_description.type is PayloadType.BYTE_ARRAY:
            minimum = self.description.payload_description.min_len_in_elements
            if self.description.payload_length is VARIABLE_LENGTH:
                if len(payload) < minimum:
                    raise ValueError(f"option {self.code}: payload shorter than the minimum")
            elif len(payload) != self.description.payload_length:
                raise ValueError(
                    f"option {self.code}: expected length {self.description.payload_length}, "
                    f"got {len(payload)}"
                )
        return payload

    def _check_uint(self, value: int) -> int:
        if not self.description.payload_description.is_correct_uint(value):
            raise ValueError(f"option {self.code}: value {value} violates its constraints")
        return value

    def _decode_element(self, chunk: bytes) -> Any:
        payload_type = self.description.payload_description.type
        match payload_type:
            case PayloadType.IP_ADDRESS:
                return IPv4Address.from_bytes(chunk)
            case PayloadType.SUBNET_MASK:
                return IPv4SubnetMask.from_bytes(chunk)
            case PayloadType.IP_ADDRESS_WITH_SUBNET_MASK:
                return (IPv4Address.from_bytes(chunk[:4]), IPv4SubnetMask.from_bytes(chunk[4:]))
            case PayloadType.TWO_IP_ADDRESSES:
                return (IPv4Address.from_bytes(chunk[:4]), IPv4Address.from_bytes(chunk[4:]))
            case PayloadType.UINT_8 | PayloadType.UINT_ENUM:
                return self._check_uint(chunk[0])
            case PayloadType.UINT_16:
                return self._check_uint(from_network_bytes(chunk, 2))
            case PayloadType.UINT_32:
                return self._check_uint(from_network_bytes(chunk, 4))
            case PayloadType.INT_32:
                value = from_network_bytes(chunk, 4, signed=True)
                if not self.description.payload_description.is_correct_int(value):
                    raise ValueError(f"option {self.code}: value {value} violates its constraints")
                return value
            case PayloadType.FLAG:
                return bool(chunk[0])
        raise ValueError(f"payload type {payload_type.name} cannot be used in a list")

    def _encode(self, value: Any) -> bytes:
        payload_type = self.description.payload_description.type
        match payload_type:
            case PayloadType.IP_ADDRESS | PayloadType.SUBNET_MASK:
                return value.to_bytes()
            case PayloadType.IP_ADDRESS_WITH_SUBNET_MASK | PayloadType.TWO_IP_ADDRESSES:
                first, second = value
                return first.to_bytes() + second.to_bytes()
            case PayloadType.UINT_8 | PayloadType.UINT_ENUM | PayloadType.FLAG:
                return bytes([int(value)])
            case PayloadType.UINT_16:
                return to_network_bytes(value, 2)
            case PayloadType.UINT_32 | PayloadType.INT_32:
                return to_network_bytes(value, 4)
        return bytes(value)

    def to_bytes(self) -> bytes:
        """Encode as code, length and payload."""
        if self.code == PAD_OPTION:
            return bytes([PAD_OPTION])
        if self.code == END_OPTION:
            return bytes([END_OPTION])
        payload = b"".join(self._encode(value) for value in self.values)
        return bytes([self.code, self.payload_length]) + payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DhcpOption):
            return NotImplemented
        return (
            self.code == other.code
            and self.payload_length == other.payload_length
            and self.values == other.values
        )

    def __repr__(self) -> str:
        return f"DhcpOption(code={self.code}, payload_length={self.payload_length}, values={self.values!r})"