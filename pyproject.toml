[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "klevret"
version = "0.1.0"
description = "Network appliance toolkit: DHCPv4 message handling and address pools, a command-routing core and an interactive console"
requires-python = ">=3.10"
keywords = ["dhcp", "networking", "ipv4", "cli", "console"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
klevret-core = "klevret.core.server:main"
klevret-cli = "klevret.cli.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["klevret"]

[tool.pytest.ini_options]
addopts = "-ra"
