"""Tests for the line-based reindenter."""

from __future__ import annotations

from backend.app.services.reindenter import reindent


SUITE = "describe('a', () => {\nit('b', () => {\ncy.visit('/');\n});\n});"


def test_nested_suite_is_indented_by_depth():
    assert reindent(SUITE) == (
        "describe('a', () => {\n"
        "  it('b', () => {\n"
        "    cy.visit('/');\n"
        "  });\n"
        "});"
    )


def test_line_that_closes_and_opens_dedents_then_indents():
    assert reindent("a({\n}) => {\nb();\n}") == "a({\n}) => {\n  b();\n}"


def test_depth_never_goes_negative():
    assert reindent("}\n}\nx();") == "}\n}\nx();"


def test_blank_lines_are_emitted_empty():
    assert reindent("a {\n   \nb();\n}") == "a {\n\n  b();\n}"


def test_custom_indent_unit():
    assert reindent("a {\nb();\n}", indent_unit="\t") == "a {\n\tb();\n}"


def test_reindent_is_a_fixed_point():
    messy = "describe('a', () => {\n      it('b', () => {\n cy.get('x')\n.click();\n    });\n\n});"

    once = reindent(messy)

    assert reindent(once) == once


def test_empty_input():
    assert reindent("") == ""
