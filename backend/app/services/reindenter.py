"""
Line-based re-indentation of generated test scripts.

The depth counter is driven only by the first and last characters of each
trimmed line. It is independent of the bracket balancer and can disagree with
it on malformed input.
"""

from __future__ import annotations

import logging
from typing import List

from .line_rules import split_lines

logger = logging.getLogger(__name__)

DEFAULT_INDENT_UNIT = "  "

_DEDENT_PREFIXES = ("}", "])", "});")
_INDENT_SUFFIXES = ("{", "(", "[")


def reindent(code: str, indent_unit: str = DEFAULT_INDENT_UNIT) -> str:
    """
    Recompute indentation from a running depth counter.

    A line starting with a closer is dedented before it is written; a line
    ending with an opener indents the lines after it. A line such as
    `}) => {` therefore does both, independently.
    """
    if not code:
        return ""

    lines, newline = split_lines(code)
    depth = 0
    formatted: List[str] = []

    for line in lines:
        trimmed = line.strip()

        if trimmed.startswith(_DEDENT_PREFIXES):
            depth = max(0, depth - 1)

        formatted.append(indent_unit * depth + trimmed if trimmed else "")

        if trimmed.endswith(_INDENT_SUFFIXES):
            depth += 1

    if depth:
        logger.debug(f"Reindented {len(lines)} lines, {depth} levels still open at the end")
    return newline.join(formatted)
