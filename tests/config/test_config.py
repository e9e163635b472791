"""Tests for configuration priority: ENV > config.json > defaults."""

from __future__ import annotations

import json

from backend.app.config import Config, DEFAULT_INDENT_UNIT, DEFAULT_OUTPUT_ROOT


def test_defaults_when_no_file(tmp_path, monkeypatch):
    for var in ("INDENT_UNIT", "OUTPUT_ROOT", "PAGES_DIR"):
        monkeypatch.delenv(var, raising=False)

    cfg = Config(config_file=tmp_path / "missing.json")

    assert cfg.get_indent_unit() == DEFAULT_INDENT_UNIT
    assert cfg.get_output_root() == DEFAULT_OUTPUT_ROOT
    assert cfg.get_pages_dir() is None


def test_file_values_and_env_override(tmp_path, monkeypatch):
    monkeypatch.delenv("PAGES_DIR", raising=False)
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps({"formatting": {"indent_unit": "    "}, "paths": {"output_root": "out", "pages_dir": "cypress/pages"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("OUTPUT_ROOT", "/tmp/from-env")
    monkeypatch.setenv("INDENT_UNIT", "\\t")

    cfg = Config(config_file=config_file)

    assert cfg.get_output_root() == "/tmp/from-env"
    assert cfg.get_indent_unit() == "\t"
    assert cfg.get_pages_dir() == "cypress/pages"


def test_invalid_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("INDENT_UNIT", raising=False)
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding="utf-8")

    cfg = Config(config_file=config_file)

    assert cfg.get_indent_unit() == DEFAULT_INDENT_UNIT
