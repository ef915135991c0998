"""Routing core that forwards JSON commands to the components."""