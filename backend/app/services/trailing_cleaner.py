"""
Trailing garbage cleanup for generated Cypress files.

Generated files are expected to end with the canonical `});` that closes the
outer describe() call. Model output and template splicing often leave stray
closers after it (`});)`, `}); );`, `});\\n}`); this module trims them.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

CANONICAL_CLOSER = "});"

# Stray `);` after a `});` unit (a `;` followed by `)` is never valid JavaScript)
_STRAY_CALL_CLOSE_RE = re.compile(r"\}\);\s*\);")
# Stray `}` ending the text right after a `});` unit
_STRAY_TRAILING_BRACE_RE = re.compile(r"\}\);\s*\}\Z")
# Stray `)` after a `});` unit, including the `});)` suffix
_STRAY_PAREN_RE = re.compile(r"\}\);\s*\)")

_DEBRIS_TAIL_RE = re.compile(r"[\s)}\];]*")


def clean_trailing_garbage(code: str, aggressive: bool = False) -> str:
    """
    Remove redundant closer sequences at the end of generated code.

    Args:
        code: Text to clean (trailing whitespace is always trimmed)
        aggressive: For complete files only: cut everything after the last `});`
            when that tail is nothing but whitespace and closing punctuation

    Returns:
        The cleaned text
    """
    clean = code.rstrip()

    if aggressive:
        clean = _truncate_after_last_closer(clean)

    # Each substitution can expose a pattern for an earlier one; repeat until stable.
    previous = None
    while clean != previous:
        previous = clean
        clean = _substitute(_STRAY_CALL_CLOSE_RE, clean, "stray ');'")
        if clean.count("}") > clean.count("{"):
            clean = _substitute(_STRAY_TRAILING_BRACE_RE, clean, "stray trailing '}'")
        clean = _substitute(_STRAY_PAREN_RE, clean, "stray ')'")

    return clean


def _substitute(pattern: re.Pattern, code: str, label: str) -> str:
    cleaned, count = pattern.subn(CANONICAL_CLOSER, code)
    if count:
        logger.debug(f"🧹 Removed {count} {label} after '{CANONICAL_CLOSER}'")
    return cleaned


def _truncate_after_last_closer(code: str) -> str:
    last_closer = code.rfind(CANONICAL_CLOSER)
    if last_closer == -1:
        return code

    end = last_closer + len(CANONICAL_CLOSER)
    tail = code[end:]
    if not tail or not _DEBRIS_TAIL_RE.fullmatch(tail):
        return code

    head = code[:end]
    # Closers the head still needs are not debris.
    for opener, closer in (("(", ")"), ("{", "}"), ("[", "]")):
        if closer in tail and head.count(opener) > head.count(closer):
            logger.debug(f"Kept tail {tail!r}: the code before it still needs '{closer}'")
            return code

    logger.debug(f"🧹 Truncated {len(tail)} chars of debris after the last '{CANONICAL_CLOSER}'")
    return head
