import pytest

from klevret.cli.values import IPv4Address, IPv4SubnetMask, IPv6Address, IPv6SubnetMask


@pytest.mark.parametrize("text", ["10.0.0.1", "192.168.1.20", "0.0.0.0"])
def test_ipv4_round_trip(text):
    assert str(IPv4Address.parse(text)) == text


def test_ipv4_octets():
    assert IPv4Address.parse("172.18.1.1").octets == bytes([172, 18, 1, 1])


@pytest.mark.parametrize("text", ["256.1.1.1", "1,2.3.4", "1.2.3"])
def test_ipv4_rejects_bad_text(text):
    with pytest.raises(ValueError):
        IPv4Address.parse(text)


def test_default_ipv4_is_zero():
    assert str(IPv4Address()) == "0.0.0.0"


def test_ipv6_round_trip():
    address = IPv6Address.parse("fe80::1")
    assert IPv6Address.parse(str(address)) == address
    assert len(address.packed) == 16


def test_ipv6_compressed_form():
    assert str(IPv6Address.parse("0:0:0:0:0:0:0:1")) == "::1"


def test_ipv6_rejects_bad_text():
    with pytest.raises(ValueError):
        IPv6Address.parse("not-an-address")


@pytest.mark.parametrize("prefix", [0, 24, 32])
def test_ipv4_mask_prefix(prefix):
    assert IPv4SubnetMask.parse(str(prefix)).prefix == prefix


@pytest.mark.parametrize("text", ["33", "x", ""])
def test_ipv4_mask_rejects_bad_text(text):
    with pytest.raises(ValueError):
        IPv4SubnetMask.parse(text)


def test_ipv6_mask_prefix_round_trip():
    mask = IPv6SubnetMask.parse("64")
    assert mask.prefix == 64
    assert IPv6SubnetMask.parse(str(mask)) == mask


def test_ipv6_mask_rejects_too_long():
    with pytest.raises(ValueError):
        IPv6SubnetMask.parse("129")