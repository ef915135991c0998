import pytest

from klevret.dhcp.ip_address import IPv4Address, IPv4SubnetMask


def test_postfix_increment():
    ip = IPv4Address.parse("192.168.1.1")
    ip = ip.next()
    assert str(ip) == "192.168.1.2"


def test_increment_carries_into_next_octet():
    assert IPv4Address.parse("10.0.0.255").next() == IPv4Address.parse("10.0.1.0")


def test_increment_wraps_at_top():
    assert IPv4Address.parse("255.255.255.255").next() == IPv4Address(0)


@pytest.mark.parametrize("text", ["192.168.1.20", "0.0.0.0", "172.18.1.1"])
def test_parse_str_round_trip(text):
    assert str(IPv4Address.parse(text)) == text


@pytest.mark.parametrize("text", ["256.0.0.1", "1.2.3", "1,2.3.4", "1.2.3.4.5"])
def test_parse_rejects_bad_text(text):
    with pytest.raises(ValueError):
        IPv4Address.parse(text)


def test_bytes_round_trip():
    ip = IPv4Address.parse("192.168.1.10")
    assert ip.to_bytes() == bytes([192, 168, 1, 10])
    assert IPv4Address.from_bytes(ip.to_bytes()) == ip


def test_from_bytes_uses_first_four_bytes():
    assert IPv4Address.from_bytes(bytes([10, 0, 0, 1, 99])) == IPv4Address.parse("10.0.0.1")


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        IPv4Address.from_bytes(b"\x01\x02\x03")


def test_ordering_follows_numeric_value():
    low = IPv4Address.parse("192.168.1.9")
    high = IPv4Address.parse("192.168.1.10")
    assert low < high
    assert sorted([high, low]) == [low, high]


def test_out_of_range_value_rejected():
    with pytest.raises(ValueError):
        IPv4Address(1 << 32)


@pytest.mark.parametrize("prefix", range(33))
def test_prefix_round_trip(prefix):
    assert IPv4SubnetMask.from_prefix(prefix).to_prefix() == prefix


def test_from_prefix_bytes():
    assert IPv4SubnetMask.from_prefix(24).to_bytes() == bytes([255, 255, 255, 0])


@pytest.mark.parametrize("prefix", [-1, 33])
def test_from_prefix_rejects_out_of_range(prefix):
    with pytest.raises(ValueError):
        IPv4SubnetMask.from_prefix(prefix)


def test_mask_parse_contiguous():
    mask = IPv4SubnetMask.parse("255.255.255.128")
    assert mask.to_prefix() == 25
    assert str(mask) == "255.255.255.128"


@pytest.mark.parametrize("text", ["255.128.255.255", "255.255.255.7", "255.255.255"])
def test_mask_parse_rejects_bad_text(text):
    with pytest.raises(ValueError):
        IPv4SubnetMask.parse(text)


def test_mask_bytes_round_trip():
    data = bytes([255, 255, 255, 0])
    mask = IPv4SubnetMask.from_bytes(data)
    assert mask.to_bytes() == data
    assert str(mask) == "255.255.255.0"


def test_mask_from_bytes_too_short():
    with pytest.raises(ValueError):
        IPv4SubnetMask.from_bytes(b"\xff\xff")