"""Tests for the string-literal scanner (diagnostic only, never edits text)."""

from __future__ import annotations

from backend.app.services.code_scanners import scan_strings


def test_unterminated_single_quote_names_the_quote():
    errors = scan_strings("const x = 'abc")

    assert len(errors) == 1
    assert errors[0].rule_id == "CV2001"
    assert "'" in errors[0].message
    assert errors[0].position == 10


def test_escaped_quote_does_not_close_the_string():
    assert scan_strings("const x = 'it\\'s ok';") == []


def test_other_quote_kinds_are_content_inside_a_string():
    assert scan_strings('const s = "it\'s";') == []
    assert scan_strings("const t = `a ${'b'} \"c\"`;") == []


def test_unterminated_backtick_is_reported():
    errors = scan_strings("const t = `abc;")

    assert len(errors) == 1
    assert "`" in errors[0].message


def test_reports_line_where_string_opened():
    errors = scan_strings('const a = 1;\nconst b = "x;\nconst c = 2;')

    assert len(errors) == 1
    assert errors[0].line == 2


def test_trailing_backslash_escapes_closing_quote():
    errors = scan_strings("const x = 'abc\\';")

    assert len(errors) == 1
