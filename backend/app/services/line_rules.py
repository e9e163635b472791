"""
Line-local heuristics for generated test scripts.

Both passes look at one trimmed line at a time, with no knowledge of brace
depth or string state. A multi-line template literal containing text that
looks like `const x = 1` is treated like code.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from ..models.code_repair import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(r"^(const|let|var|await)\s+")
_EMPTY_DECLARATION_RE = re.compile(r"^(const|let|var)\s*;")
_COMMENT_PREFIXES = ("//", "/*", "*")
# Already terminated, or continued on the next line
_LINE_END_CHARS = ";,{})(["


def split_lines(code: str) -> Tuple[List[str], str]:
    """Split on the text's own line break (\\r\\n when present, else \\n)."""
    newline = "\r\n" if "\r\n" in code else "\n"
    return code.split(newline), newline


def normalize_punctuation(code: str) -> Tuple[str, List[Diagnostic]]:
    """
    Append missing `;` to import and declaration lines.

    Returns:
        Tuple of (corrected code, warnings naming each changed line)
    """
    warnings: List[Diagnostic] = []
    lines, newline = split_lines(code)
    fixed_lines: List[str] = []

    for line_no, line in enumerate(lines, start=1):
        trimmed = line.strip()

        if not trimmed or trimmed.startswith(_COMMENT_PREFIXES) or trimmed[-1] in _LINE_END_CHARS:
            fixed_lines.append(line)
            continue

        if trimmed.startswith("import ") and "from" in trimmed:
            fixed_lines.append(line + ";")
            warnings.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    rule_id="CV3001",
                    message=f"Added missing semicolon at line {line_no} (import)",
                    line=line_no,
                )
            )
        elif _DECLARATION_RE.match(trimmed):
            fixed_lines.append(line + ";")
            warnings.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    rule_id="CV3002",
                    message=f"Added missing semicolon at line {line_no}",
                    line=line_no,
                )
            )
        else:
            fixed_lines.append(line)

    if warnings:
        logger.debug(f"Added {len(warnings)} missing semicolons")
    return newline.join(fixed_lines), warnings


def check_basic_syntax(code: str) -> Tuple[List[Diagnostic], List[Diagnostic]]:
    """
    Flag suspicious lines without changing them.

    Returns:
        Tuple of (errors, warnings)
    """
    errors: List[Diagnostic] = []
    warnings: List[Diagnostic] = []
    lines, _ = split_lines(code)

    for line_no, line in enumerate(lines, start=1):
        trimmed = line.strip()

        if trimmed.startswith("import ") and "from" not in trimmed:
            warnings.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    rule_id="CV4001",
                    message=f'Possibly malformed import at line {line_no}: missing "from"?',
                    line=line_no,
                )
            )

        if _EMPTY_DECLARATION_RE.match(trimmed):
            errors.append(
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    rule_id="CV4002",
                    message=f"Empty declaration at line {line_no}",
                    line=line_no,
                )
            )

        if ";;" in trimmed:
            warnings.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    rule_id="CV4003",
                    message=f"Double semicolon at line {line_no}",
                    line=line_no,
                )
            )

    return errors, warnings
