"""Color mode resolution for terminal output."""

from __future__ import annotations

import os
from enum import StrEnum
from typing import IO


class ColorMode(StrEnum):
    """Value of the ``--color`` flag."""

    ALWAYS = "always"
    NEVER = "never"
    AUTO = "auto"


def resolve_color(mode: ColorMode | str, stream: IO[str]) -> bool:
    """Decide whether ANSI escapes should be written to *stream*.

    ``always`` and ``never`` are unconditional. ``auto`` is off when
    NO_COLOR is set to a non-empty value and otherwise follows whether
    *stream* is a terminal.
    """
    mode = ColorMode(mode)
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
