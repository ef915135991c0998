"""Terminal input and output for the interactive console."""

from __future__ import annotations

import enum
import os
import sys
import threading
import time
from typing import Optional, TextIO

try:
    import fcntl
    import termios
except ImportError:  # not a POSIX terminal
    fcntl = None  # type: ignore[assignment]
    termios = None  # type: ignore[assignment]

_IFLAG, _OFLAG, _LFLAG, _CC = 0, 1, 3, 6


class Color(enum.IntEnum):
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    PURPLE = 5
    DARK_GREEN = 6
    WHITE = 7


class Console:
    """Writes to the terminal with ANSI control sequences and reads single keys."""

    BACKSPACE = 127
    TAB = 9
    ENTER = 13
    ESC = 27
    SPACE = 0x20
    CSI = "\033["

    _instance: Optional["Console"] = None
    _lock = threading.Lock()

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.current_command_input = ""
        self.current_command_input_cursor_pos = 0
        self.current_text_color = Color.WHITE

    @classmethod
    def instance(cls) -> "Console":
        """The shared console on standard output."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def getkey(self) -> int:
        """Read one key from the terminal without waiting; -1 if none is ready."""
        if termios is None or fcntl is None:
            return -1
        try:
            fd = sys.stdin.fileno()
        except (AttributeError, ValueError, OSError):
            return -1
        try:
            old_attrs = termios.tcgetattr(fd)
        except termios.error:
            return -1
        new_attrs = list(old_attrs)
        new_attrs[_CC] = list(old_attrs[_CC])
        new_attrs[_IFLAG] = 0
        new_attrs[_OFLAG] = 0
        new_attrs[_LFLAG] &= ~termios.ICANON
        new_attrs[_CC][termios.VMIN] = 1
        new_attrs[_CC][termios.VTIME] = 1
        old_flags = fcntl.fcntl(fd, fcntl.F_GETFL)
        try:
            fcntl.fcntl(fd, fcntl.F_SETFL, old_flags | os.O_NONBLOCK)
            termios.tcsetattr(fd, termios.TCSANOW, new_attrs)
            time.sleep(0.001)
            try:
                data = os.read(fd, 1)
            except OSError:
                return -1
            return data[0] if data else -1
        finally:
            termios.tcsetattr(fd, termios.TCSANOW, old_attrs)
            fcntl.fcntl(fd, fcntl.F_SETFL, old_flags)

    def move_cursor_left(self, number: int) -> None:
        if number == 0:
            return
        self.write(f"{self.CSI}{number}D")

    def move_cursor_right(self, number: int) -> None:
        if number == 0:
            return
        self.write(f"{self.CSI}{number}C")

    def clear_line(self) -> None:
        """Erase from the cursor to the end of the line."""
        self.write(f"{self.CSI}K")

    def write(self, text: str) -> None:
        if not text:
            return
        self._stream.write(text)
        self._stream.flush()

    def change_text_color(self, color: Color) -> None:
        self.current_text_color = color
        self.write(f"{self.CSI}3{int(color)}m")