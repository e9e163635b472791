"""Services for the TestForge backend."""

from .code_validator import CodeValidatorService, repair
from .reindenter import reindent
from .suite_generator import SuiteGeneratorService

__all__ = [
    "CodeValidatorService",
    "SuiteGeneratorService",
    "repair",
    "reindent",
]
