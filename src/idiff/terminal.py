from __future__ import annotations

import os
import sys
from typing import TextIO

COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
}
RESET = "\033[0m"


def use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("IDIFF_NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def paint(text: str, color: str, stream: TextIO) -> str:
    if not use_color(stream):
        return text
    return f"{COLORS[color]}{text}{RESET}"


def echo(text: str, color: str | None = None, *, err: bool = False) -> None:
    stream = sys.stderr if err else sys.stdout
    if color is not None:
        text = paint(text, color, stream)
    print(text, file=stream)
