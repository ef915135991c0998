"""A character reader for small hand-written parsers."""

from __future__ import annotations

_WHITESPACE = frozenset(" \t\n\v\f\r")


class CharReader:
    """Hands out the text one character at a time through ``ch``.

    Once the text is used up ``ch`` stays at :attr:`EOT`.
    """

    EOT = "\x03"

    def __init__(self, text: str) -> None:
        self._chars = iter(text)
        self.ch = self.EOT
        self.advance()

    def advance(self) -> None:
        """Move to the next character."""
        self.ch = next(self._chars, self.EOT)

    def skip_whitespace(self) -> None:
        """Move past any whitespace at the current position."""
        while self.ch in _WHITESPACE:
            self.advance()

    def at_end(self) -> bool:
        """Tell whether the text is used up."""
        return self.ch == self.EOT

    def expect(self, char: str) -> None:
        """Consume ``char`` or raise ValueError if something else is there."""
        if self.ch != char:
            raise ValueError(f"expected {char!r}, got {self.ch!r}")
        self.advance()