"""
Tests for trailing garbage cleanup.

Non-aggressive mode collapses stray closers after a `});` unit; aggressive mode
(complete files only) cuts debris after the last `});`.
"""

from __future__ import annotations

import logging

import pytest

from backend.app.services.trailing_cleaner import clean_trailing_garbage


def test_trailing_whitespace_is_always_trimmed():
    assert clean_trailing_garbage("foo();   \n\n") == "foo();"


@pytest.mark.parametrize(
    "code",
    [
        "describe('a', () => {\n});)",
        "describe('a', () => {\n}); );",
        "describe('a', () => {\n});\n)",
    ],
)
def test_stray_closers_after_canonical_closer_are_removed(code):
    assert clean_trailing_garbage(code) == "describe('a', () => {\n});"


def test_stray_trailing_brace_is_removed_when_braces_are_in_excess():
    assert clean_trailing_garbage("a(() => {\n});\n}") == "a(() => {\n});"


def test_needed_trailing_brace_is_kept():
    code = "function f() {\n  g(() => {\n  });\n}"

    assert clean_trailing_garbage(code) == code
    assert clean_trailing_garbage(code, aggressive=True) == code


def test_nested_suite_is_not_touched():
    code = "describe('a', () => {\n  it('b', () => {\n  });\n});"

    assert clean_trailing_garbage(code) == code
    assert clean_trailing_garbage(code, aggressive=True) == code


def test_aggressive_mode_truncates_debris_after_last_closer():
    code = "describe('a', () => {\n});\n;"

    assert clean_trailing_garbage(code) == code
    assert clean_trailing_garbage(code, aggressive=True) == "describe('a', () => {\n});"


def test_aggressive_mode_keeps_real_statements_after_last_closer():
    code = "describe('a', () => {\n});\nexport default x;"

    assert clean_trailing_garbage(code, aggressive=True) == code


def test_text_without_canonical_closer_is_unchanged():
    assert clean_trailing_garbage("const a = 1;", aggressive=True) == "const a = 1;"


def test_applied_cleanups_are_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="backend.app.services.trailing_cleaner")

    assert clean_trailing_garbage("describe('s', () => {});)") == "describe('s', () => {});"
    assert clean_trailing_garbage("describe('s', () => {}); ;", aggressive=True) == "describe('s', () => {});"

    messages = [record.getMessage() for record in caplog.records]
    assert any("stray ')'" in message for message in messages)
    assert any("Truncated" in message for message in messages)
