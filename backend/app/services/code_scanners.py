"""
Character-level scanners for generated test scripts.

Two independent left-to-right scans:
- the bracket balancer drops orphaned closers, reports mismatched pairs and,
  for complete files, appends the closers that are still missing;
- the string-literal scanner only reports a string that never closes.

Neither scan knows about comments or regular expression literals, so a quote
or bracket inside a comment is counted like any other character.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.code_repair import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)

PAIRS: Dict[str, str] = {"(": ")", "{": "}", "[": "]"}
CLOSERS: Dict[str, str] = {closer: opener for opener, closer in PAIRS.items()}
QUOTES = ('"', "'", "`")

_KIND_NAMES = {"(": "parentheses", "{": "braces", "[": "brackets"}


@dataclass
class DelimiterCounts:
    """Opens and closes kept in the corrected text, keyed by opener kind."""

    opens: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(PAIRS, 0))
    closes: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(PAIRS, 0))

    def deficit(self, opener: str) -> int:
        return max(0, self.opens[opener] - self.closes[opener])


@dataclass(frozen=True)
class BalanceResult:
    code: str
    errors: List[Diagnostic]
    warnings: List[Diagnostic]


def balance_brackets(code: str, partial: bool = False) -> BalanceResult:
    """
    Balance ( { [ delimiters in a single pass.

    The corrected text is built into a new buffer, so dropping an orphaned
    closer never shifts the index of the character scanned next.

    Args:
        code: Text to scan
        partial: True for fragments that may legitimately end with open blocks

    Returns:
        BalanceResult with the corrected text and the diagnostics of this pass
    """
    errors: List[Diagnostic] = []
    warnings: List[Diagnostic] = []
    output: List[str] = []
    stack: List[str] = []
    counts = DelimiterCounts()
    line = 1

    for position, char in enumerate(code):
        if char == "\n":
            line += 1

        if char in PAIRS:
            stack.append(char)
            counts.opens[char] += 1
        elif char in CLOSERS:
            if not stack:
                warnings.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.WARNING,
                        rule_id="CV1001",
                        message=f"Closing '{char}' without an opening delimiter at position {position} - removed",
                        line=line,
                        position=position,
                    )
                )
                continue

            opener = stack.pop()
            counts.closes[CLOSERS[char]] += 1
            if PAIRS[opener] != char:
                errors.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        rule_id="CV1002",
                        message=f"Mismatched pair: opened '{opener}' but closed with '{char}' at position {position}",
                        line=line,
                        position=position,
                    )
                )

        output.append(char)

    fixed = "".join(output)

    if not partial:
        fixed = _close_open_delimiters(fixed, stack, counts, warnings)
    elif counts.deficit("{"):
        warnings.append(
            Diagnostic(
                severity=DiagnosticSeverity.INFO,
                rule_id="CV1004",
                message="Open blocks ({) are not closed - expected for a code fragment",
            )
        )

    return BalanceResult(code=fixed, errors=errors, warnings=warnings)


def _close_open_delimiters(
    code: str,
    stack: List[str],
    counts: DelimiterCounts,
    warnings: List[Diagnostic],
) -> str:
    """Append the closers a complete file is missing, innermost first."""
    remaining = {opener: counts.deficit(opener) for opener in PAIRS}
    added = dict(remaining)
    if not any(remaining.values()):
        return code

    parts: List[str] = []
    ends_with_block = code.rstrip().endswith("}")

    for index in range(len(stack) - 1, -1, -1):
        opener = stack[index]
        if not remaining[opener]:
            continue
        remaining[opener] -= 1

        if opener == "{":
            parts.append("\n}")
            ends_with_block = True
            continue

        # Only a call at statement level takes a `;`: foo(bar(() => {})) and [f(() => {})] must not.
        enclosing = stack[index - 1] if index else None
        if opener == "(" and ends_with_block and enclosing in (None, "{"):
            # Call wrapping a block, e.g. describe('...', () => { ... });
            parts.append(");")
        else:
            parts.append(PAIRS[opener])
        ends_with_block = False

    # After a mismatch the stack and the counts disagree; close the rest per kind.
    for opener, missing in remaining.items():
        if missing:
            parts.append(("\n" if opener == "{" else "") + PAIRS[opener] * missing)

    for opener, count in added.items():
        if count:
            warnings.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    rule_id="CV1003",
                    message=f"Added {count} missing closing {_KIND_NAMES[opener]} '{PAIRS[opener]}'",
                )
            )

    return code + "".join(parts)


def scan_strings(code: str) -> List[Diagnostic]:
    """
    Report a string literal that is still open at the end of the text.

    Only the quote kind that opened the string can close it; the other two
    kinds are literal content. Escaped characters never toggle state.
    """
    in_string = False
    quote_char: Optional[str] = None
    escaped = False
    opened_at: Optional[int] = None
    opened_line: Optional[int] = None
    line = 1

    for position, char in enumerate(code):
        if char == "\n":
            line += 1

        if escaped:
            escaped = False
            continue

        if char == "\\":
            escaped = True
            continue

        if char in QUOTES and not in_string:
            in_string = True
            quote_char = char
            opened_at = position
            opened_line = line
        elif in_string and char == quote_char:
            in_string = False
            quote_char = None

    if not in_string:
        return []

    logger.debug(f"Unterminated {quote_char} string opened at position {opened_at}")
    return [
        Diagnostic(
            severity=DiagnosticSeverity.ERROR,
            rule_id="CV2001",
            message=f"Unterminated string literal (opened with {quote_char})",
            line=opened_line,
            position=opened_at,
        )
    ]
