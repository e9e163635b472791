"""
Suite generator: assemble one Cypress spec file from Gherkin test cases.

The assembled text is run through the code validator (complete-file mode) and
the formatter before it is written, so model output and spliced preliminary
code reach disk structurally balanced.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from ..config import config
from ..models.test_suite import GherkinCase, SuiteGenerationRequest, SuiteGenerationResult
from .code_validator import CodeValidatorService

logger = logging.getLogger(__name__)

SPEC_SUFFIX = ".cy.js"
PRELIMINARY_CODE_FILE = "preliminary-code.txt"

_SUITE_BLOCK_RE = re.compile(r"(describe|context)\s*\(")
_BEFORE_HOOK = "  before(() => {\n    cy.loginViaAPI();\n    cy.enterProject();\n  });"


class SuiteGeneratorService:
    """Build, repair and persist Cypress spec files."""

    def __init__(
        self,
        output_root: Optional[str] = None,
        sessions_dir: Optional[str] = None,
        pages_dir: Optional[str] = None,
        indent_unit: Optional[str] = None,
    ):
        self.output_root = Path(output_root or config.get_output_root())
        self.sessions_dir = Path(sessions_dir or config.get_sessions_dir())
        self.pages_dir = pages_dir if pages_dir is not None else config.get_pages_dir()
        self.indent_unit = indent_unit or config.get_indent_unit()
        self.validator = CodeValidatorService()

    def generate_test_suite(self, request: SuiteGenerationRequest) -> SuiteGenerationResult:
        """
        Generate, repair and write one spec file.

        Raises:
            ValueError: If suite name, test cases or file name are missing
            OSError: If the spec file cannot be written
        """
        if not request.suite_name or not request.test_cases:
            raise ValueError("Missing parameters: suite_name and a non-empty test_cases list are required")
        if not request.file_name:
            raise ValueError("Missing parameter: file_name is required")

        preliminary_code = request.preliminary_code
        if (not preliminary_code or not preliminary_code.strip()) and request.session_id:
            preliminary_code = self.load_preliminary_code(request.session_id)

        logger.info(f"📝 Generating test suite: {request.suite_name}")
        logger.info(f"   Test cases: {len(request.test_cases)}")
        logger.info(f"   Preliminary code: {len(preliminary_code) if preliminary_code else 0} chars")

        content = self.build_test_file_content(request.suite_name, request.test_cases, preliminary_code or "")

        repair = self.validator.validate_and_fix(content, partial=False)
        if repair.has_changes:
            content = repair.fixed_code
        for error in repair.errors:
            logger.warning(f"⚠️ Generated suite still has a structural error: {error.message}")

        content = self.validator.format_code(content, self.indent_unit) + "\n"

        file_name = request.file_name if request.file_name.endswith(SPEC_SUFFIX) else f"{request.file_name}{SPEC_SUFFIX}"
        target_dir = self.output_root / request.output_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        file_path = target_dir / file_name
        file_path.write_text(content, encoding="utf-8")

        logger.info(f"✅ Test suite written to {file_path}")

        return SuiteGenerationResult(
            file_path=str(file_path),
            relative_path=str(Path(request.output_dir) / file_name),
            test_cases_count=len(request.test_cases),
            content=content,
            repair=repair,
        )

    def load_preliminary_code(self, session_id: str) -> Optional[str]:
        """Read the preliminary code saved for a session, if any."""
        if Path(session_id).name != session_id:
            logger.warning(f"⚠️ Ignoring suspicious session id: {session_id!r}")
            return None

        code_path = self.sessions_dir / session_id / PRELIMINARY_CODE_FILE
        try:
            saved_code = code_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.info(f"No saved preliminary code for session {session_id}: {e}")
            return None

        if not saved_code.strip():
            return None

        logger.info(f"✅ Recovered saved preliminary code ({len(saved_code)} chars)")
        return saved_code

    def build_test_file_content(
        self,
        suite_name: str,
        test_cases: List[GherkinCase],
        preliminary_code: str = "",
    ) -> str:
        """Assemble the raw (unrepaired) spec file text."""
        test_blocks = "\n\n".join(
            self.generate_it_block(test_case, index) for index, test_case in enumerate(test_cases)
        )
        clean_preliminary = preliminary_code.strip()

        if clean_preliminary and _SUITE_BLOCK_RE.search(clean_preliminary):
            if clean_preliminary.count("{") > clean_preliminary.count("}"):
                # The validator closes the describe block afterwards
                logger.info("🧠 Open describe block in preliminary code, appending tests")
                return f"{clean_preliminary}\n\n{test_blocks}\n"

            last_brace = clean_preliminary.rfind("}")
            if last_brace > -1:
                logger.info("🧠 Closed describe block in preliminary code, injecting tests before its end")
                before_closing = clean_preliminary[:last_brace]
                after_closing = clean_preliminary[last_brace:]
                return f"{before_closing}\n\n{test_blocks}\n{after_closing}"

        header = clean_preliminary or self.generate_imports(test_cases)
        parts = [header] if header else []
        parts.append(f"describe('{escape_string(suite_name)}', () => {{\n{_BEFORE_HOOK}\n\n{test_blocks}\n}});\n")
        return "\n\n".join(parts)

    def generate_imports(self, test_cases: List[GherkinCase]) -> str:
        """One import line per distinct page object, in first-seen order."""
        if not self.pages_dir:
            return ""

        pages_dir = self.pages_dir.replace("\\", "/").rstrip("/")
        page_objects = dict.fromkeys(name for tc in test_cases for name in tc.page_objects)
        return "\n".join(f"import {name} from '{pages_dir}/{name}.js';" for name in page_objects)

    def generate_it_block(self, test_case: GherkinCase, index: int) -> str:
        test_number = test_case.id or index + 1
        sections = []
        for label, gherkin, code in (
            ("Given", test_case.given, test_case.given_code),
            ("When", test_case.when, test_case.when_code),
            ("Then", test_case.then, test_case.then_code),
        ):
            body = code if code and code.strip() else convert_gherkin_to_code(gherkin, label.lower())
            sections.append(f"    // {label}: {escape_string(gherkin)}\n{indent_code(body, 4)}")

        body = "\n\n".join(sections)
        return f"  it('Test Case #{test_number}', () => {{\n{body}\n  }});"


def convert_gherkin_to_code(gherkin_text: Optional[str], section: str) -> str:
    """Placeholder comments for a section that has no Cypress code yet."""
    if not gherkin_text or not gherkin_text.strip():
        return f"// PENDING: no steps for the {section} section"

    steps = [line.strip() for line in gherkin_text.splitlines() if line.strip()]
    lines = [f"// {section.upper()} - PENDING: write the Cypress steps"]
    for number, step in enumerate(steps, start=1):
        lines.append(f"// {number}. {escape_string(step)}")
    return "\n".join(lines)


def indent_code(code: str, spaces: int) -> str:
    if not code:
        return ""
    indent = " " * spaces
    return "\n".join(f"{indent}{line}" for line in code.split("\n"))


def escape_string(text: Optional[str]) -> str:
    """Escape text for a single-quoted literal (also keeps quotes in comments balanced)."""
    if not text:
        return ""
    escaped = text.replace("\\", "\\\\")
    for quote in ("'", '"', "`"):
        escaped = escaped.replace(quote, f"\\{quote}")
    return escaped.replace("\r\n", "\\n").replace("\n", "\\n")
