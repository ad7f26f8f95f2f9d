"""Tests for utils module"""

import shutil

import pytest

from settingsgen.utils import atomic_write_text, mask, parse_json_list


class TestMask:
    def test_mask_long_string(self):
        assert mask("hunter2hunter2") == "hu***r2"

    def test_mask_custom_keep_chars(self):
        assert mask("my_secret_password", keep_chars=3) == "my_***ord"

    def test_mask_none_and_empty(self):
        assert mask(None) == "***"
        assert mask("") == "***"

    def test_mask_short_string(self):
        assert mask("abc") == "***"
        assert mask("abcdef", keep_chars=3) == "***"


class TestParseJsonList:
    def test_array(self):
        assert parse_json_list('["a", 1]') == ["a", 1]

    def test_not_an_array(self):
        assert parse_json_list('{"a": 1}') is None
        assert parse_json_list('"a"') is None

    def test_invalid_json(self):
        assert parse_json_list("[a") is None
        assert parse_json_list("") is None


def test_atomic_write_text_replaces_content(tmp_path):
    path = tmp_path / "record.json"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
    assert list(tmp_path.iterdir()) == [path]


def test_atomic_write_text_removes_temp_file_on_failure(tmp_path, monkeypatch):
    path = tmp_path / "record.json"
    path.write_text("old", encoding="utf-8")

    def failing_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(shutil, "move", failing_move)

    with pytest.raises(OSError, match="disk full"):
        atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "old"
    assert list(tmp_path.iterdir()) == [path]


def test_atomic_write_text_uses_unique_temp_files(tmp_path, monkeypatch):
    path = tmp_path / "record.json"
    temp_names = []

    def recording_move(src, dst):
        temp_names.append(src)
        return real_move(src, dst)

    real_move = shutil.move
    monkeypatch.setattr(shutil, "move", recording_move)

    atomic_write_text(path, "one")
    atomic_write_text(path, "two")

    assert len(set(temp_names)) == 2
    assert path.read_text(encoding="utf-8") == "two"
