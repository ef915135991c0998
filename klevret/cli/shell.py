"""The interactive console shell."""

from __future__ import annotations

import argparse
import enum
import re
import sys
from typing import Any, List, Optional, Sequence, Tuple

from klevret.cli import values
from klevret.cli.command import (
    CommandElementType,
    CommandTree,
    check_command_element,
    create_command_tree,
)
from klevret.cli.console import Color, Console

TITLE = "klevret> "

_CONVERTERS = {
    CommandElementType.IP_V4_ADDRESS: values.IPv4Address.parse,
    CommandElementType.IP_V6_ADDRESS: values.IPv6Address.parse,
    CommandElementType.IP_V4_SUBNET_MASK: values.IPv4SubnetMask.parse,
    CommandElementType.IP_V6_SUBNET_MASK: values.IPv6SubnetMask.parse,
}


class EscSequence(enum.Enum):
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    UNKNOWN = "unknown"


def to_esc_sequence(ch_1: int, ch_2: int) -> EscSequence:
    """Classify the two keys that follow ESC."""
    if ch_1 == 91 and ch_2 == 68:
        return EscSequence.ARROW_LEFT
    if ch_1 == 91 and ch_2 == 67:
        return EscSequence.ARROW_RIGHT
    return EscSequence.UNKNOWN


def format_tree(root: CommandTree, depth: int = 0) -> str:
    """The command tree as text, one word per line indented by ``--``."""
    lines = []
    for node in root.children:
        if node.command_element.handler is None:
            lines.append("--" * depth + str(node.command_element) + "\n")
        lines.append(format_tree(node, depth + 1))
    return "".join(lines)


def analyze_command(command: str, root: CommandTree) -> Tuple[CommandTree, List[Any]]:
    """Follow the typed words down the tree.

    Returns the node reached and the values of the words matched, in order.
    Words that match nothing are skipped.
    """
    matched: List[Any] = []
    current = root
    for part in re.split(" +", command):
        for child in current.children:
            if check_command_element(part, child.command_element):
                current = child
                convert = _CONVERTERS.get(child.command_element.type)
                matched.append(convert(part) if convert else part)
                break
    return current, matched


def print_title(console: Console) -> None:
    old_color = console.current_text_color
    console.change_text_color(Color.GREEN)
    console.write(TITLE)
    console.change_text_color(old_color)


class _Shell:
    def __init__(self, console: Console, root: CommandTree) -> None:
        self.console = console
        self.root = root

    def on_key(self, key: int) -> None:
        console = self.console
        if key == Console.TAB:
            self._show_hints()
        elif key == Console.ENTER:
            self._run()
        elif key == Console.BACKSPACE:
            self._backspace()
        elif key == Console.ESC:
            sequence = to_esc_sequence(console.getkey(), console.getkey())
            if sequence is EscSequence.ARROW_LEFT:
                self._move_cursor(-1)
            elif sequence is EscSequence.ARROW_RIGHT:
                self._move_cursor(1)
        else:
            console.current_command_input += chr(key)
            console.current_command_input_cursor_pos += 1

    def _show_hints(self) -> None:
        console = self.console
        console.move_cursor_left(1)
        console.clear_line()
        console.write("\n")
        node, _ = analyze_command(console.current_command_input, self.root)
        for child in node.children:
            console.write(str(child.command_element) + "\n")
        console.write("\r")
        print_title(console)
        console.write(console.current_command_input)

    def _run(self) -> None:
        console = self.console
        console.move_cursor_left(2)
        console.clear_line()
        console.write("\n")
        node, matched = analyze_command(console.current_command_input, self.root)
        if len(node.children) == 1 and node.children[0].command_element.handler is not None:
            try:
                node.children[0].command_element.handler(matched)
            except (ValueError, OSError) as error:
                console.write(f"error: {error}\n")
        console.current_command_input = ""
        console.current_command_input_cursor_pos = 0
        print_title(console)

    def _backspace(self) -> None:
        console = self.console
        pos = console.current_command_input_cursor_pos
        console.move_cursor_left(pos + 2)
        console.clear_line()
        if pos != 0:
            text = console.current_command_input
            console.current_command_input = text[: pos - 1] + text[pos:]
            console.write(console.current_command_input)
            console.current_command_input_cursor_pos -= 1
        console.move_cursor_left(
            len(console.current_command_input) - console.current_command_input_cursor_pos
        )

    def _move_cursor(self, step: int) -> None:
        console = self.console
        console.move_cursor_left(console.current_command_input_cursor_pos + 4)
        console.clear_line()
        console.write(console.current_command_input)
        new_pos = console.current_command_input_cursor_pos + step
        if 0 <= new_pos <= len(console.current_command_input):
            console.current_command_input_cursor_pos = new_pos
        console.move_cursor_left(
            len(console.current_command_input) - console.current_command_input_cursor_pos
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive console until interrupted."""
    argparse.ArgumentParser(prog="klevret-cli", description="Klevret console").parse_args(argv)
    if not sys.stdin.isatty():
        print("klevret-cli needs an interactive terminal", file=sys.stderr)
        return 1
    console = Console.instance()
    root = create_command_tree()
    shell = _Shell(console, root)
    console.write(format_tree(root))
    print_title(console)
    try:
        while True:
            key = console.getkey()
            if key != -1:
                shell.on_key(key)
    except KeyboardInterrupt:
        console.write("\n")
    return 0