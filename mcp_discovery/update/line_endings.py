# mcp_discovery/update/line_endings.py
from __future__ import annotations

from typing import List, Optional

LF = "\n"
CRLF = "\r\n"


def split_lines(content: str) -> List[str]:
    """Splits on "\\n", dropping a trailing "\\r" from each line.

    A final line ending does not produce an extra empty line, so
    "a\\nb\\n" and "a\\nb" both give ["a", "b"]. Other characters that
    str.splitlines() treats as breaks (\\v, \\f, \\x1c, \\u2028 ...) are
    kept as ordinary text.
    """
    if not content:
        return []
    lines = content.split(LF)
    if content.endswith(LF):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def line_ending(content: str, line_number: Optional[int] = None) -> str:
    """Returns the ending that follows `line_number` (1-based, default 1)."""
    target = max((line_number or 1) - 1, 0)

    pos = 0
    for _ in range(target):
        nl = content.find(LF, pos)
        if nl == -1:
            return LF
        pos = nl + 1

    nl = content.find(LF, pos)
    if nl == -1:
        return LF
    if nl > pos and content[nl - 1] == "\r":
        return CRLF
    return LF


def ends_with_line_ending(content: str) -> bool:
    return content.endswith(LF)
