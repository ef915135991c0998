"""DHCPv4 pieces: addresses, options, messages, the address pool and the control endpoint."""