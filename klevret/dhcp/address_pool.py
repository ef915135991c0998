"""A pool of IPv4 addresses handed out to clients by MAC address."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Set

from klevret.dhcp.hardware_address import MacAddress
from klevret.dhcp.ip_address import IPv4Address
from klevret.dhcp.option import DhcpOption


def _address_range(start: IPv4Address, end: IPv4Address) -> Iterator[IPv4Address]:
    """Yield every address from ``start`` to ``end`` inclusive."""
    if end < start:
        raise ValueError(f"range end {end} lies before its start {start}")
    current = start
    while True:
        yield current
        if current == end:
            return
        current = current.next()


class AddressPool:
    """Addresses a DHCP server may lease, with reservations and leases."""

    def __init__(self, start_ip: IPv4Address, end_ip: IPv4Address) -> None:
        self._included: Set[IPv4Address] = set(_address_range(start_ip, end_ip))
        self._excluded: Set[IPv4Address] = set()
        self._reserved_by_ip: Dict[IPv4Address, MacAddress] = {}
        self._reserved_by_mac: Dict[MacAddress, IPv4Address] = {}
        self._taken_by_ip: Dict[IPv4Address, MacAddress] = {}
        self._taken_by_mac: Dict[MacAddress, IPv4Address] = {}
        self._cache: Dict[MacAddress, IPv4Address] = {}
        self._options: Dict[int, DhcpOption] = {}

    @property
    def options(self) -> Mapping[int, DhcpOption]:
        """The options set on the pool, by option code."""
        return MappingProxyType(self._options)

    def include_ip(self, ip: IPv4Address) -> None:
        self._included.add(ip)
        self._excluded.discard(ip)

    def exclude_ip(self, ip: IPv4Address) -> None:
        self._included.discard(ip)
        self._excluded.add(ip)

    def include_ip_range(self, ip_start: IPv4Address, ip_end: IPv4Address) -> None:
        for ip in _address_range(ip_start, ip_end):
            self.include_ip(ip)

    def exclude_ip_range(self, ip_start: IPv4Address, ip_end: IPv4Address) -> None:
        for ip in _address_range(ip_start, ip_end):
            self.exclude_ip(ip)

    def reserve_ip(self, ip: IPv4Address, mac: MacAddress) -> None:
        """Set ``ip`` aside for ``mac``."""
        if not self.is_included(ip):
            raise ValueError(f"cannot reserve {ip}: it is not in the pool")
        if self.is_ip_reserved(ip):
            raise ValueError(f"cannot reserve {ip}: it is already reserved")
        if self.is_ip_taken(ip):
            raise ValueError(f"cannot reserve {ip}: it is in use")
        self._reserved_by_ip[ip] = mac
        self._reserved_by_mac[mac] = ip

    def unreserve_ip(self, ip: IPv4Address) -> None:
        if not self.is_ip_reserved(ip):
            raise ValueError(f"cannot unreserve {ip}: it is not reserved")
        mac = self._reserved_by_ip.pop(ip)
        del self._reserved_by_mac[mac]

    def _is_free(self, ip: IPv4Address) -> bool:
        return self.is_included(ip) and not self.is_ip_reserved(ip) and not self.is_ip_taken(ip)

    def _take(self, ip: IPv4Address, mac: MacAddress) -> IPv4Address:
        previous = self._taken_by_mac.get(mac)
        if previous is not None and previous != ip:
            del self._taken_by_ip[previous]
        self._taken_by_mac[mac] = ip
        self._taken_by_ip[ip] = mac
        return ip

    def get_address(self, mac: MacAddress) -> IPv4Address:
        """Lease an address to ``mac``.

        A reserved address comes first, then the address the client already
        holds, then the one it held last if still free, and otherwise the
        lowest free address of the pool.
        """
        reserved = self._reserved_by_mac.get(mac)
        if reserved is not None:
            return self._take(reserved, mac)
        taken = self._taken_by_mac.get(mac)
        if taken is not None:
            return taken
        cached = self._cache.get(mac)
        if cached is not None and self._is_free(cached):
            return self._take(cached, mac)
        for ip in sorted(self._included):
            if self._is_free(ip):
                return self._take(ip, mac)
        raise RuntimeError("no free addresses to lease")

    def release_address(self, ip: IPv4Address) -> None:
        """End the lease of ``ip``, remembering it for the same client."""
        mac = self._taken_by_ip.pop(ip, None)
        if mac is None:
            raise ValueError(f"cannot release {ip}: it is not leased")
        del self._taken_by_mac[mac]
        self._cache[mac] = ip

    def is_ip_taken(self, ip: IPv4Address) -> bool:
        return ip in self._taken_by_ip

    def is_mac_taken(self, mac: MacAddress) -> bool:
        return mac in self._taken_by_mac

    def is_ip_reserved(self, ip: IPv4Address) -> bool:
        return ip in self._reserved_by_ip

    def is_mac_reserved(self, mac: MacAddress) -> bool:
        return mac in self._reserved_by_mac

    def is_included(self, ip: IPv4Address) -> bool:
        return ip in self._included

    def is_excluded(self, ip: IPv4Address) -> bool:
        return ip in self._excluded

    def set_option(self, option: DhcpOption) -> None:
        self._options[option.code] = option

    def remove_option(self, code: int) -> None:
        self._options.pop(code, None)