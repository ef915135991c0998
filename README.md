# klevret

A small network appliance toolkit. It holds:

- **DHCPv4 protocol pieces** (`klevret.dhcp`): IPv4 addresses and subnet
  masks, MAC addresses, DHCP option descriptions and decoded options, whole
  DHCP messages, an address pool that leases addresses by MAC address, and a
  TCP control endpoint (`ApiServer`) that prints what it receives.
- **klevret-core** (`klevret.core.server`): the routing core. It accepts JSON
  commands on `127.0.0.1:40236` and forwards those whose `component` is
  `dhcp` to port 40237.
- **klevret-cli** (`klevret.cli.shell`): an interactive console over a tree
  of known commands. Commands that configure a component are sent to the core
  as JSON.
- **Shared helpers** (`klevret.common`): byte-order conversion, a character
  reader for small parsers, `Defer`, and a threaded `TcpListener` that queues
  what its clients send.

No third-party libraries are needed.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

Start the core and the console, each in its own terminal:

```
klevret-core
klevret-cli
```

`klevret-core` takes `--port` to listen on a port other than 40236.
`klevret-cli` needs an interactive terminal. It prints the command tree, then
the prompt `klevret> `. Type a command and press Enter to run it, or press
Tab to list what may follow what has been typed so far. The known commands
are:

```
version
ip show
ip address show
ip address <IPv4Address>
dhcp pool create <IPv4Address> <IPv4Address>
```

`version` prints the version, `ip show` and `ip address show` print
`empty command`, and the other two send a request to the core. Stop either
program with Ctrl-C.

The DHCP control endpoint has no command of its own; start it from Python:

```python
from klevret.dhcp.api_server import ApiServer

server = ApiServer.instance().serve()   # listens on 127.0.0.1:40237
...
server.shutdown()
server.server_close()
```

`ApiServer.instance().start()` serves on the same port in the calling thread
until interrupted.

## Using the library

Addresses and the address pool:

```python
from klevret.dhcp.ip_address import IPv4Address, IPv4SubnetMask
from klevret.dhcp.hardware_address import MacAddress
from klevret.dhcp.address_pool import AddressPool

pool = AddressPool(IPv4Address.parse("192.168.1.10"), IPv4Address.parse("192.168.1.20"))

mac = MacAddress.from_bytes(bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01]))
lease = pool.get_address(mac)
print(lease)                                                # 192.168.1.10
pool.release_address(lease)

print(IPv4SubnetMask.from_prefix(24))                       # 255.255.255.0
print(IPv4SubnetMask.from_bytes(b"\xff\xff\xff\x00").to_prefix())  # 24
```

`AddressPool` also supports including and excluding addresses and ranges,
reserving an address for a MAC address, and holding pool options.

Building and decoding DHCP messages:

```python
from klevret.dhcp.message import DhcpMessage, DhcpMessageType
from klevret.dhcp.option import DhcpOption

message = DhcpMessage(
    op=DhcpMessageType.BOOTREPLY,
    chaddr=mac,
    yiaddr=lease,
    options=[DhcpOption(53, 1, bytes([2]))],
)
data = message.to_bytes()

decoded = DhcpMessage.from_bytes(data)
print(decoded.find_option(53).values)                       # [2]
```

Byte-order helpers:

```python
from klevret.common.endians import from_network_bytes, to_network_bytes

from_network_bytes(b"\xab\x11", 2)     # 0xAB11
to_network_bytes(86400, 4)             # b"\x00\x01Q\x80"
```

## What it does not do

The package has no DHCP server program: nothing here binds UDP port 67,
answers DISCOVER or REQUEST messages, or lists the host's network interfaces.
The message, option and pool classes are the pieces such a server would use.
The control endpoint on port 40237 only prints the requests it receives; it
does not act on them.