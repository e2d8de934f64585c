"""Terminal output: colored messages to stderr."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO


class Colors:
    """ANSI escape codes."""

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RESET = "\033[0m"


def use_color(stream: TextIO) -> bool:
    """Color only interactive terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Reporter:
    """Writes hook messages to a stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None, color: Optional[bool] = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.color = use_color(self.stream) if color is None else color

    def _paint(self, text: str, code: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{Colors.RESET}"

    def write(self, text: str = "") -> None:
        """Write text as-is, adding a newline if it has none."""
        if text and not text.endswith("\n"):
            text += "\n"
        self.stream.write(text or "\n")
        self.stream.flush()

    def info(self, msg: str) -> None:
        self.write(msg)

    def success(self, msg: str) -> None:
        self.write(self._paint(msg, Colors.GREEN))

    def warn(self, msg: str) -> None:
        self.write(self._paint(msg, Colors.YELLOW))

    def error(self, msg: str) -> None:
        self.write(self._paint(msg, Colors.RED))

    def forward(self, data: bytes) -> None:
        """Pass through output captured from an external tool."""
        if data:
            self.write(data.decode("utf-8", errors="replace"))
