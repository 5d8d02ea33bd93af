"""Unit tests for utility functions (apimod.utils)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from apimod.utils import (
    console,
    dump_json,
    load_json,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)


class TestJsonIO:
    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"modules": []}', encoding="utf-8")
        assert load_json(path) == {"modules": []}

    @pytest.mark.unit
    def test_load_json_list(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_json(path) == [1, 2]

    @pytest.mark.unit
    def test_load_json_invalid(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    @pytest.mark.unit
    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_dump_json_pretty(self):
        assert dump_json({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}\n'

    @pytest.mark.unit
    def test_dump_json_keeps_unicode(self):
        assert "café" in dump_json({"name": "café"})


class TestRichOutput:
    @pytest.mark.unit
    def test_messages_render(self):
        with console.capture() as capture:
            print_step("Creating module: user")
            print_success("Module created")
            print_warning("Dry run")
            print_error("Error: boom")
        out = capture.get()
        assert "→ Creating module: user" in out
        assert "✔ Module created" in out
        assert "Dry run" in out
        assert "Error: boom" in out

    @pytest.mark.unit
    def test_summary_table(self):
        with console.capture() as capture:
            print_summary_table(
                [{"Module": "admin/user", "Route": "/admin/users"}], title="Modules"
            )
        out = capture.get()
        assert "Modules" in out
        assert "admin/user" in out
        assert "/admin/users" in out

    @pytest.mark.unit
    def test_empty_summary_table(self):
        with console.capture() as capture:
            print_summary_table([], title="Modules (0)")
        assert "(none)" in capture.get()
