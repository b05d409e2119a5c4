"""Common utility functions for the project."""

import sys
from enum import Enum
from typing import (
    Any,
    TextIO,
)

_RESET = "\033[0m"


class AnsiColors(Enum):
    """
    ANSI color codes for terminal output.
    """

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[33m"
    BLUE = "\033[94m"


def colored_print(text: str, color: AnsiColors, *args: Any, **kwargs: Any) -> None:
    """
    Print text in color.

    Colors are only emitted when the target stream is a terminal, so redirected output
    (log files, captured stderr) stays plain.

    Args:
        text: The text to print
        color: The color to use (AnsiColors enum)
        args: Additional positional arguments for print
        kwargs: Additional keyword arguments for print (``file`` selects the stream)
    """
    stream: TextIO = kwargs.get("file") or sys.stdout
    if stream.isatty():
        text = f"{color.value}{text}{_RESET}"
    print(text, *args, **kwargs)
