"""
Code repair models (structural fixes applied to generated test scripts).

These models are part of the API surface between the repair engine and its
callers (the validate endpoint and the test-suite generator).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class DiagnosticSeverity(str, Enum):
    """Severity level for repair findings."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Diagnostic(BaseModel):
    """A single finding reported by one of the repair passes."""

    severity: DiagnosticSeverity
    message: str

    # Stable machine-readable identity (CV1xxx brackets, CV2xxx strings, ...)
    rule_id: Optional[str] = None

    # 1-based line number / 0-based character offset in the text the pass saw
    line: Optional[int] = None
    position: Optional[int] = None


class RepairResult(BaseModel):
    """Outcome of one run of the repair pipeline."""

    is_valid: bool = True
    # Repaired text; on an internal failure, the input exactly as it was given
    fixed_code: Any = ""
    errors: List[Diagnostic] = Field(default_factory=list)
    warnings: List[Diagnostic] = Field(default_factory=list)
    has_changes: bool = False
