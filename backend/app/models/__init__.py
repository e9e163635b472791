"""Data models for the TestForge backend."""

from .code_repair import Diagnostic, DiagnosticSeverity, RepairResult
from .test_suite import GherkinCase, SuiteGenerationRequest, SuiteGenerationResult

__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "RepairResult",
    "GherkinCase",
    "SuiteGenerationRequest",
    "SuiteGenerationResult",
]
