"""Run a callback when a block is left."""

from __future__ import annotations

from types import TracebackType
from typing import Callable, Optional, Type


class Defer:
    """Context manager that calls ``callback`` on exit, however the block ends."""

    def __init__(self, callback: Callable[[], object]) -> None:
        self._callback = callback

    def __enter__(self) -> "Defer":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        self._callback()
        return False