import pytest

from klevret.dhcp.ip_address import IPv4Address, IPv4SubnetMask
from klevret.dhcp.option import DhcpOption


def test_message_type_option():
    option = DhcpOption(53, 1, b"\x05")
    assert option.code == 53
    assert option.values == [5]
    assert option.to_bytes() == bytes([53, 1, 5])


def test_message_type_outside_enum_is_rejected():
    with pytest.raises(ValueError):
        DhcpOption(53, 1, b"\x09")


def test_subnet_mask_option():
    option = DhcpOption(1, 4, bytes([255, 255, 255, 0]))
    assert option.values == [IPv4SubnetMask.parse("255.255.255.0")]
    assert option.to_bytes() == bytes([1, 4, 255, 255, 255, 0])


def test_fixed_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        DhcpOption(1, 3, bytes([255, 255, 255]))


def test_unknown_code_is_rejected():
    with pytest.raises(ValueError):
        DhcpOption(200, 1, b"\x00")


def test_option_without_payload_cannot_be_built():
    with pytest.raises(ValueError):
        DhcpOption(0, 0, b"")


def test_router_list_round_trip():
    payload = bytes([172, 18, 1, 1, 172, 18, 1, 2])
    option = DhcpOption(3, 8, payload)
    assert option.values == [IPv4Address.parse("172.18.1.1"), IPv4Address.parse("172.18.1.2")]
    assert option.to_bytes() == bytes([3, 8]) + payload


def test_list_payload_must_hold_whole_elements():
    with pytest.raises(ValueError):
        DhcpOption(3, 5, bytes([172, 18, 1, 1, 7]))


def test_hostname_string():
    option = DhcpOption(12, 4, b"host")
    assert option.values == [b"host"]
    assert option.to_bytes() == bytes([12, 4]) + b"host"


def test_lease_time_round_trip():
    payload = (86400).to_bytes(4, "big")
    option = DhcpOption(51, 4, payload)
    assert option.values == [86400]
    assert option.to_bytes() == bytes([51, 4]) + payload


def test_signed_time_offset_round_trip():
    payload = bytes([0xFF, 0xFF, 0xFF, 0xF0])
    option = DhcpOption(2, 4, payload)
    assert option.values[0] < 0
    assert option.to_bytes() == bytes([2, 4]) + payload


def test_flag_option():
    option = DhcpOption(19, 1, b"\x01")
    assert option.values == [True]
    assert option.to_bytes() == bytes([19, 1, 1])


def test_ip_with_mask_pairs():
    payload = bytes([10, 0, 0, 0, 255, 0, 0, 0])
    option = DhcpOption(21, 8, payload)
    assert option.values == [(IPv4Address.parse("10.0.0.0"), IPv4SubnetMask.parse("255.0.0.0"))]
    assert option.to_bytes() == bytes([21, 8]) + payload


def test_two_ip_addresses_pairs():
    payload = bytes([10, 0, 0, 1, 10, 0, 0, 254])
    option = DhcpOption(33, 8, payload)
    assert option.values == [(IPv4Address.parse("10.0.0.1"), IPv4Address.parse("10.0.0.254"))]


def test_client_identifier_shorter_than_minimum():
    with pytest.raises(ValueError):
        DhcpOption(61, 1, b"\x01")


def test_parameter_request_list_keeps_bytes():
    option = DhcpOption(55, 3, bytes([1, 3, 6]))
    assert option.values == [bytes([1, 3, 6])]
    assert option.to_bytes() == bytes([55, 3, 1, 3, 6])


def test_max_message_size_below_minimum_is_rejected():
    with pytest.raises(ValueError):
        DhcpOption(57, 2, (500).to_bytes(2, "big"))


def test_equal_options_compare_equal():
    assert DhcpOption(53, 1, b"\x01") == DhcpOption(53, 1, b"\x01")
    assert not DhcpOption(53, 1, b"\x01") == DhcpOption(53, 1, b"\x02")