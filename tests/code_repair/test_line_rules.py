"""Tests for the punctuation normalizer and the basic syntax checker."""

from __future__ import annotations

from backend.app.services.line_rules import check_basic_syntax, normalize_punctuation


def test_import_line_gets_semicolon():
    code, warnings = normalize_punctuation("import LoginPage from '../pages/LoginPage'")

    assert code == "import LoginPage from '../pages/LoginPage';"
    assert len(warnings) == 1
    assert warnings[0].rule_id == "CV3001"
    assert warnings[0].line == 1


def test_declarations_get_semicolons_and_other_lines_do_not():
    code, warnings = normalize_punctuation("const a = 1\nlet b = 2\ncy.visit('/')\nawait promise")

    assert code == "const a = 1;\nlet b = 2;\ncy.visit('/')\nawait promise;"
    assert [w.line for w in warnings] == [1, 2, 4]


def test_terminated_continued_and_comment_lines_are_skipped():
    code = "// const a = 1\nconst b = {\n  x: 1,\n};\nconst c = [\n  1\n];\nconst d = foo(\n  2\n);\n"

    fixed, warnings = normalize_punctuation(code)

    assert fixed == code
    assert warnings == []


def test_crlf_line_breaks_are_preserved():
    code, warnings = normalize_punctuation("const a = 1\r\nconst b = 2;")

    assert code == "const a = 1;\r\nconst b = 2;"
    assert len(warnings) == 1


def test_import_without_from_is_flagged():
    errors, warnings = check_basic_syntax("import 'cypress-xpath';\nimport")

    assert errors == []
    assert len(warnings) == 1
    assert warnings[0].rule_id == "CV4001"


def test_empty_declaration_is_an_error():
    errors, warnings = check_basic_syntax("const;\nlet ;")

    assert [e.rule_id for e in errors] == ["CV4002", "CV4002"]
    assert [e.line for e in errors] == [1, 2]
    assert warnings == []


def test_double_semicolon_is_a_warning():
    errors, warnings = check_basic_syntax("cy.visit('/');;")

    assert errors == []
    assert [w.rule_id for w in warnings] == ["CV4003"]
