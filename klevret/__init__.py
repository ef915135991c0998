"""Network appliance toolkit: DHCPv4 protocol pieces, a command-routing core and a console."""

__version__ = "0.1.0"