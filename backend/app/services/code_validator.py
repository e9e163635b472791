"""
Code validator: structural repair of generated Cypress test files.

Runs the repair passes in a fixed order and aggregates their diagnostics:

    normalize whitespace -> trailing cleanup -> bracket balance ->
    punctuation -> string scan -> sanity check -> aggressive cleanup

The engine is best-effort: diagnostics never block a result. Only an
unexpected failure inside a pass is reported as a single error, and in that
case the caller gets its original input back untouched.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..config import config
from ..models.code_repair import Diagnostic, DiagnosticSeverity, RepairResult
from .code_scanners import balance_brackets, scan_strings
from .line_rules import check_basic_syntax, normalize_punctuation
from .reindenter import reindent
from .trailing_cleaner import clean_trailing_garbage

logger = logging.getLogger(__name__)

_TRAILING_SPACE_RE = re.compile(r"[ \t]+(?=\r?$)", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"(?:\r?\n){3,}")


def normalize_whitespace(code: str) -> str:
    """Strip trailing spaces per line, keep at most one blank line in a row, trim the end."""
    normalized = _TRAILING_SPACE_RE.sub("", code)
    newline = "\r\n" if "\r\n" in normalized else "\n"
    normalized = _BLANK_RUN_RE.sub(newline * 2, normalized)
    return normalized.rstrip()


class CodeValidatorService:
    """Validate and repair generated test code. Holds no state between calls."""

    def validate_and_fix(self, code: Optional[str], partial: bool = False) -> RepairResult:
        """
        Run the full repair pipeline.

        Args:
            code: Script text to repair
            partial: True for fragments (e.g. a preliminary block still open);
                fragments never get closers appended or aggressive cleanup

        Returns:
            RepairResult; has_changes compares against the whitespace-normalized input
        """
        if code is None or code == "":
            return RepairResult(is_valid=True, fixed_code="")

        errors: List[Diagnostic] = []
        warnings: List[Diagnostic] = []

        try:
            if not isinstance(code, str):
                raise TypeError(f"expected str, got {type(code).__name__}")

            baseline = normalize_whitespace(code)
            fixed = clean_trailing_garbage(baseline)

            balanced = balance_brackets(fixed, partial)
            fixed = balanced.code
            errors.extend(balanced.errors)
            warnings.extend(balanced.warnings)

            fixed, punctuation_warnings = normalize_punctuation(fixed)
            warnings.extend(punctuation_warnings)

            errors.extend(scan_strings(fixed))

            syntax_errors, syntax_warnings = check_basic_syntax(fixed)
            errors.extend(syntax_errors)
            warnings.extend(syntax_warnings)

            # A complete file must end cleanly after its outermost closer
            if not partial:
                fixed = clean_trailing_garbage(fixed, aggressive=True)

        except Exception as e:
            logger.error(f"❌ Code validation failed: {e}", exc_info=True)
            return RepairResult(
                is_valid=False,
                fixed_code=code,
                errors=[
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        rule_id="CV9001",
                        message=f"Error during validation: {e}",
                    )
                ],
            )

        has_changes = fixed != baseline
        logger.info(
            f"🔧 Code validated ({'fragment' if partial else 'complete'}): "
            f"{len(errors)} errors, {len(warnings)} warnings, changed={has_changes}"
        )

        return RepairResult(
            is_valid=not errors,
            fixed_code=fixed,
            errors=errors,
            warnings=warnings,
            has_changes=has_changes,
        )

    def format_code(self, code: Optional[str], indent_unit: Optional[str] = None) -> str:
        """Re-indent code with the configured indent unit."""
        if not code:
            return ""
        return reindent(code, indent_unit or config.get_indent_unit())


def repair(text: Optional[str], partial: bool = False) -> RepairResult:
    """Repair `text` with a fresh, stateless validator."""
    return CodeValidatorService().validate_and_fix(text, partial)


__all__ = ["CodeValidatorService", "normalize_whitespace", "reindent", "repair"]
