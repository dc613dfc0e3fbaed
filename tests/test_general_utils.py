# tests/test_general_utils.py
"""End-to-end tests for general utils (load_config, log) with cache/env overrides."""

from __future__ import annotations

import json
import os
from importlib import import_module

import pytest

LC = import_module("design_token_compiler.pipeline.general.utils.load_config")
LOG = import_module("design_token_compiler.pipeline.general.utils.log")

DataDirNotFound = LC.DataDirNotFound
ConfigFileNotFound = LC.ConfigFileNotFound
ConfigParseError = LC.ConfigParseError
ConfigTypeError = LC.ConfigTypeError
load_config = LC.load_config
clear_config_cache = LC.clear_config_cache


# ---------- Fixtures ----------
@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """Provide an isolated data/ dir and point loader via DATA_DIR."""
    data = tmp_path / "data"
    data.mkdir()
    monkeypatch.setenv("DATA_DIR", str(data))
    clear_config_cache()
    return data


@pytest.fixture(autouse=True)
def _reset_env_and_cache(monkeypatch):
    """Reset debug topics and config cache between tests."""
    monkeypatch.delenv("DTC_DEBUG_TOPICS", raising=False)
    clear_config_cache()
    LOG.reload_topics()
    yield
    monkeypatch.delenv("DTC_DEBUG_TOPICS", raising=False)
    LOG.reload_topics()


# ---------- load_config tests ----------
def test_load_config_cache_hit_until_file_changes(tmp_data_dir):
    p = tmp_data_dir / "known_formats.json"
    p.write_text(json.dumps(["css/variables", "swift/tokens"]), encoding="utf-8")

    out1 = load_config("known_formats")
    assert load_config("known_formats") is out1  # cached

    p.write_text(json.dumps(["changed"]), encoding="utf-8")
    os.utime(p, (p.stat().st_atime, p.stat().st_mtime + 5))
    assert load_config("known_formats") == ["changed"]


def test_load_config_validated_dict_and_errors(tmp_data_dir):
    conf = tmp_data_dir / "settings.json"
    conf.write_text(json.dumps({"alpha": 1}), encoding="utf-8")
    calls = []

    def validator(d: dict) -> tuple:
        calls.append(d)
        return tuple(sorted(d.items()))

    out = load_config("settings", mode="validated_dict", validator=validator)
    assert out == (("alpha", 1),)
    assert load_config("settings", mode="validated_dict", validator=validator) is out
    assert len(calls) == 1

    class SettingsError(ValueError):
        pass

    def failing(d: dict) -> dict:
        raise SettingsError("nope")

    with pytest.raises(SettingsError):
        load_config("settings", mode="validated_dict", validator=failing)

    conf2 = tmp_data_dir / "oops.json"
    conf2.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")
    with pytest.raises(ConfigTypeError):
        load_config("oops", mode="validated_dict")

    with pytest.raises(ValueError):
        load_config("settings", mode="raw", validator=validator)

    with pytest.raises(ConfigFileNotFound):
        load_config("does_not_exist", mode="raw")


def test_load_config_invalid_json(tmp_data_dir):
    (tmp_data_dir / "broken.json").write_text('{"a": 1,}', encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config("broken", mode="raw")


def test_load_config_refuses_escape_from_data_dir(tmp_data_dir):
    outside = tmp_data_dir.parent / "secret.json"
    outside.write_text(json.dumps({"x": 1}), encoding="utf-8")
    with pytest.raises(ConfigFileNotFound):
        load_config("../secret", mode="raw")


def test_explicit_base_dir_beats_env(tmp_data_dir, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    (other / "cfg.json").write_text(json.dumps({"from": "other"}), encoding="utf-8")
    (tmp_data_dir / "cfg.json").write_text(json.dumps({"from": "env"}), encoding="utf-8")

    assert load_config("cfg") == {"from": "env"}
    assert load_config("cfg", base_dir=other) == {"from": "other"}


# ---------- log.debug tests ----------
def test_log_debug_silent_without_topics(capsys):
    LOG.debug("nobody listens", topic="build")
    assert capsys.readouterr().err == ""


def test_log_debug_respects_topics_env(monkeypatch, capsys):
    monkeypatch.setenv("DTC_DEBUG_TOPICS", "resolve")
    LOG.reload_topics()

    LOG.debug("hello on resolve", topic="resolve")
    LOG.debug("should be silent", topic="build")

    captured = capsys.readouterr()
    assert "hello on resolve" in captured.err
    assert "[resolve][DEBUG]" in captured.err
    assert "should be silent" not in captured.err


def test_log_debug_all_topics(monkeypatch, capsys):
    monkeypatch.setenv("DTC_DEBUG_TOPICS", "all")
    LOG.reload_topics()

    LOG.debug("m1", topic="foo")
    LOG.debug("m2", topic="bar", level="info")

    captured = capsys.readouterr()
    assert "m1" in captured.err and "m2" in captured.err
    assert "[bar][INFO]" in captured.err
