"""Console commands: patterns, matching of typed words and the command tree."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from klevret.cli.handlers import (
    KlevretComponent,
    blank,
    cmd_dhcp_pool_create,
    cmd_ip_address_ipv4,
    cmd_version,
)
from klevret.common.parsing import CharReader

CommandHandler = Callable[[List[Any]], None]

_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_ALNUM = _LETTERS | _DIGITS


class CommandElementType(enum.Enum):
    NONE = "none"
    FIXED_WORD = "fixed_word"
    STRING = "string"
    NAME = "name"
    IP_V4_ADDRESS = "ipv4_address"
    IP_V4_SUBNET_MASK = "ipv4_subnet_mask"
    IP_V6_ADDRESS = "ipv6_address"
    IP_V6_SUBNET_MASK = "ipv6_subnet_mask"


_PLACEHOLDERS = {
    CommandElementType.IP_V4_ADDRESS: "<IPv4 address>",
    CommandElementType.IP_V4_SUBNET_MASK: "<subnet mask (IPv4)>",
    CommandElementType.IP_V6_ADDRESS: "<IPv6 address>",
    CommandElementType.IP_V6_SUBNET_MASK: "<subnet mask (IPv6)>",
    CommandElementType.NAME: "<name>",
    CommandElementType.STRING: "<string>",
}

_VARIABLE_ELEMENTS = {
    "string": CommandElementType.STRING,
    "name": CommandElementType.NAME,
    "IPv4Address": CommandElementType.IP_V4_ADDRESS,
    "IPv4SubnetMask": CommandElementType.IP_V4_SUBNET_MASK,
    "IPv6Address": CommandElementType.IP_V6_ADDRESS,
    "IPv6SubnetMask": CommandElementType.IP_V6_SUBNET_MASK,
}


@dataclass
class CommandElement:
    """One word of a command, or the handler at the end of a tree path."""

    type: CommandElementType = CommandElementType.NONE
    fixed_value: str = ""
    handler: Optional[CommandHandler] = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.type is CommandElementType.FIXED_WORD:
            return self.fixed_value
        return _PLACEHOLDERS.get(self.type, "<UNKNOWN>")


class Language(enum.Enum):
    RUSSIAN = "ru"
    ENGLISH = "en"


@dataclass(frozen=True)
class CommandDescription:
    language: Language
    pattern_description: str
    description: str


def parse_string(text: str) -> bool:
    """Tell whether ``text`` starts with a quoted run of letters."""
    reader = CharReader(text)
    if reader.ch != '"':
        return False
    reader.advance()
    while reader.ch in _LETTERS:
        reader.advance()
    return reader.ch == '"'


def _parse_number(reader: CharReader) -> int:
    if reader.ch not in _DIGITS:
        raise ValueError("number parse error: digit expected")
    digits = []
    while reader.ch in _DIGITS:
        digits.append(reader.ch)
        reader.advance()
    return int("".join(digits))


def parse_ipv4_address(text: str) -> bool:
    """Tell whether ``text`` is a dotted-decimal IPv4 address."""
    reader = CharReader(text)
    try:
        for index in range(4):
            if _parse_number(reader) > 255:
                return False
            if index < 3:
                reader.expect(".")
    except ValueError:
        return False
    return reader.at_end()


def parse_ipv4_subnet_mask(text: str) -> bool:
    """Tell whether ``text`` starts with a prefix length in [0..32]."""
    try:
        mask = _parse_number(CharReader(text))
    except ValueError:
        return False
    return 0 <= mask <= 32


def check_command_element(text: str, element: CommandElement) -> bool:
    """Tell whether the typed word ``text`` fits ``element``."""
    kind = element.type
    if kind is CommandElementType.NONE:
        return False
    if kind is CommandElementType.FIXED_WORD:
        return element.fixed_value == text
    if kind is CommandElementType.STRING:
        return parse_string(text)
    if kind is CommandElementType.IP_V4_ADDRESS:
        return parse_ipv4_address(text)
    if kind is CommandElementType.IP_V4_SUBNET_MASK:
        return parse_ipv4_subnet_mask(text)
    # names and IPv6 values are accepted as typed
    return True


class Command:
    """A command pattern such as ``ip address <IPv4Address>`` with its handler."""

    def __init__(
        self,
        component: KlevretComponent,
        pattern: str,
        descriptions: Sequence[CommandDescription],
        handler: CommandHandler,
    ) -> None:
        self.component = component
        self.descriptions: List[CommandDescription] = list(descriptions)
        self.handler = handler
        self.elements: List[CommandElement] = []
        reader = CharReader(pattern)
        while not reader.at_end():
            reader.skip_whitespace()
            self._parse_element(reader)

    def _parse_element(self, reader: CharReader) -> None:
        if reader.ch in _LETTERS:
            self._parse_fixed_word(reader)
        elif reader.ch == "<":
            self._parse_variable_element(reader)
        else:
            raise ValueError("command pattern parse error: expected a word or <element>")

    def _parse_fixed_word(self, reader: CharReader) -> None:
        word = []
        while reader.ch in _LETTERS:
            word.append(reader.ch)
            reader.advance()
        self.elements.append(CommandElement(CommandElementType.FIXED_WORD, "".join(word)))

    def _parse_variable_element(self, reader: CharReader) -> None:
        reader.expect("<")
        name = []
        while reader.ch in _ALNUM:
            name.append(reader.ch)
            reader.advance()
        variable = "".join(name)
        if not variable:
            raise ValueError("command pattern parse error: variable element cannot be empty <>")
        kind = _VARIABLE_ELEMENTS.get(variable)
        if kind is None:
            raise ValueError(f"command pattern parse error: unknown variable element <{variable}>")
        self.elements.append(CommandElement(kind, ""))
        if reader.ch != ">":
            raise ValueError("command pattern parse error: expected >")
        reader.advance()


@dataclass
class CommandTree:
    """A node of the tree of all commands, one word per level."""

    command_element: CommandElement = field(default_factory=CommandElement)
    children: List["CommandTree"] = field(default_factory=list)


_ALL_COMMANDS = (
    Command(
        KlevretComponent.CLI,
        "version",
        [
            CommandDescription(Language.RUSSIAN, "version", "показать версию ПО Клеврет"),
            CommandDescription(Language.ENGLISH, "version", "show Klevret software version"),
        ],
        cmd_version,
    ),
    Command(KlevretComponent.DHCP, "ip show", [], blank),
    Command(KlevretComponent.DHCP, "ip address show", [], blank),
    Command(KlevretComponent.DHCP, "ip address <IPv4Address>", [], cmd_ip_address_ipv4),
    Command(
        KlevretComponent.DHCP,
        "dhcp pool create <IPv4Address> <IPv4Address>",
        [],
        cmd_dhcp_pool_create,
    ),
)


def get_all_commands() -> List[Command]:
    return list(_ALL_COMMANDS)


def add_command_to_tree(tree: CommandTree, command: Command) -> None:
    """Add the path of ``command`` to ``tree``, ending in a handler leaf."""
    node = tree
    for element in command.elements:
        child = next((c for c in node.children if c.command_element == element), None)
        if child is None:
            child = CommandTree(element)
            node.children.append(child)
        node = child
    node.children.append(CommandTree(CommandElement(handler=command.handler)))


def create_command_tree() -> CommandTree:
    tree = CommandTree()
    for command in get_all_commands():
        add_command_to_tree(tree, command)
    return tree