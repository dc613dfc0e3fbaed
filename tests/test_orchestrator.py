# tests/test_orchestrator.py
"""End-to-end build planner tests: config validation, per-platform isolation, atomic writes."""

from __future__ import annotations

import json
import os

import pytest

from design_token_compiler.pipeline.general.utils.load_config import ConfigParseError, clear_config_cache
from design_token_compiler.pipeline.orchestrator import (
    BuildConfigError,
    BuildError,
    build_all_platforms,
    load_build_config,
    parse_build_config,
    render_all_platforms,
)

TS = "2024-01-01T00:00:00.000Z"


def _write(path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def token_root(tmp_path):
    _write(
        tmp_path / "tokens" / "color.json",
        {
            "color": {
                "base": {"green": {"value": "#16b087", "type": "color"}},
                "brand": {"value": "{color.base.green}", "type": "color"},
            }
        },
    )
    _write(
        tmp_path / "tokens" / "size.json",
        {
            "spacing": {"sm": {"value": 8, "type": "dimension"}},
            "typography": {"font_size": {"body": {"value": 16, "type": "dimension"}}},
        },
    )
    _write(
        tmp_path / "tokens" / "tv.json",
        {"typography": {"font_size": {"body": {"value": 24, "type": "dimension"}}}},
    )
    return tmp_path


def _config(**overrides) -> dict:
    raw = {
        "title": "Acme Tokens",
        "source": ["tokens/color.json", "tokens/size.json"],
        "platforms": {
            "web-css": {
                "transforms": ["name/kebab", "size/px"],
                "build_path": "out/web/",
                "files": [
                    {"destination": "tokens.css", "format": "css/variables", "options": {"output_references": True}}
                ],
            },
            "roku": {
                "transforms": ["name/pascal", "size/number", "color/rokuHex"],
                "build_path": "out/roku/",
                "files": [{"destination": "Tokens.brs", "format": "brightscript/tokens"}],
            },
            "android-dimens": {
                "transforms": ["name/snake", "size/sp", "size/dp"],
                "build_path": "out/android/",
                "files": [
                    {
                        "destination": "dimens.xml",
                        "format": "android/resources",
                        "filter": "is_dimension",
                        "options": {"resource_type": "dimen"},
                    }
                ],
            },
            "web-tv-js": {
                "transforms": ["name/camel", "size/number"],
                "build_path": "out/web-tv/",
                "source": ["tokens/color.json", "tokens/size.json", "tokens/tv.json"],
                "files": [{"destination": "tokens.js", "format": "javascript/es6"}],
            },
        },
    }
    raw.update(overrides)
    return raw


# ---------- config ----------
def test_parse_build_config_defaults():
    config = parse_build_config(_config())
    assert [p.name for p in config.platforms] == ["web-css", "roku", "android-dimens", "web-tv-js"]
    assert config.options["title"] == "Acme Tokens"
    assert config.options["namespace"] == "DesignTokens"
    tv = config.platform("web-tv-js")
    assert config.sources_for(tv)[-1] == "tokens/tv.json"
    assert config.sources_for(config.platform("roku")) == ("tokens/color.json", "tokens/size.json")


@pytest.mark.parametrize(
    "path, value",
    [
        (("web-css", "transforms"), ["name/kebab", "size/rem"]),
        (("web-css", "files"), [{"destination": "x.css", "format": "css/modules"}]),
        (("web-css", "files"), [{"destination": "x.css", "format": "css/variables", "filter": "is_shadow"}]),
        (("web-css", "files"), []),
    ],
)
def test_parse_build_config_rejects_unknown_names(path, value):
    raw = _config()
    raw["platforms"][path[0]][path[1]] = value
    with pytest.raises(BuildConfigError):
        parse_build_config(raw)


def test_parse_build_config_requires_sources():
    with pytest.raises(BuildConfigError):
        parse_build_config(_config(source=[]))


def test_load_build_config_from_file(tmp_path):
    cfg = tmp_path / "conf" / "platforms.json"
    _write(cfg, _config())
    config = load_build_config(cfg)
    assert len(config.platforms) == 4

    _write(tmp_path / "conf" / "broken.json", _config(platforms={}))
    with pytest.raises(BuildConfigError):
        load_build_config(tmp_path / "conf" / "broken.json")

    (tmp_path / "conf" / "bad.json").write_text("{", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_build_config(tmp_path / "conf" / "bad.json")


def test_bundled_platform_config(monkeypatch):
    monkeypatch.delenv("DATA_DIR", raising=False)
    monkeypatch.delenv("DTC_DATA_DIR", raising=False)
    clear_config_cache()
    config = load_build_config()
    assert {p.name for p in config.platforms} == {
        "react-native",
        "web-css",
        "web-scss",
        "roku",
        "tvos",
        "android-colors",
        "android-dimens",
        "xbox",
        "web-tv-css",
        "web-tv-js",
    }
    assert config.platform("android-dimens").transforms == ("name/snake", "size/sp", "size/dp")
    assert config.sources_for(config.platform("web-tv-css"))[-1] == "tokens/typography/tv.json"


# ---------- build ----------
def test_build_all_platforms_writes_every_file(token_root):
    config = parse_build_config(_config())
    files = build_all_platforms(config, root=token_root, timestamp=TS)

    assert len(files) == 4
    for f in files:
        assert f.path.is_file()
        assert f.path.read_text(encoding="utf-8") == f.content

    css = (token_root / "out/web/tokens.css").read_text(encoding="utf-8")
    assert css.startswith("/**\n * Acme Tokens - CSS\n")
    assert "  --color-brand: var(--color-base-green);" in css
    assert "  --spacing-sm: 8px;" in css

    brs = (token_root / "out/roku/Tokens.brs").read_text(encoding="utf-8")
    assert '        ColorBaseGreen: "0x16B087FF"' in brs
    assert "        SpacingSm: 8" in brs

    dimens = (token_root / "out/android/dimens.xml").read_text(encoding="utf-8")
    assert '<dimen name="spacing_sm">8dp</dimen>' in dimens
    assert '<dimen name="typography_font_size_body">16sp</dimen>' in dimens
    assert "color" not in dimens


def test_platforms_do_not_share_transformed_tokens(token_root):
    config = parse_build_config(_config())
    files = {f.platform: f.content for f in render_all_platforms(config, root=token_root, timestamp=TS)}
    assert "--spacing-sm: 8px;" in files["web-css"]
    assert "SpacingSm: 8\n" in files["roku"]
    assert "export const typographyFontSizeBody = 24;" in files["web-tv-js"]


def test_only_selected_platforms(token_root):
    config = parse_build_config(_config())
    files = build_all_platforms(config, root=token_root, only=["roku"], timestamp=TS)
    assert [f.platform for f in files] == ["roku"]
    assert not (token_root / "out" / "web").exists()

    with pytest.raises(BuildConfigError):
        build_all_platforms(config, root=token_root, only=["ios"])


def test_rendering_is_byte_identical_for_same_timestamp(token_root):
    config = parse_build_config(_config())
    first = render_all_platforms(config, root=token_root, timestamp=TS)
    second = render_all_platforms(config, root=token_root, timestamp=TS)
    assert [f.content for f in first] == [f.content for f in second]


def test_cycle_fails_build_and_writes_nothing(token_root):
    _write(
        token_root / "tokens" / "size.json",
        {"a": {"value": "{b}", "type": "number"}, "b": {"value": "{a}", "type": "number"}},
    )
    config = parse_build_config(_config())
    with pytest.raises(BuildError) as ei:
        build_all_platforms(config, root=token_root, timestamp=TS)
    assert ei.value.platform == "web-css"
    assert not (token_root / "out").exists()


def test_bad_color_fails_the_platform_that_converts_it(token_root):
    _write(
        token_root / "tokens" / "color.json",
        {"color": {"none": {"value": "transparent", "type": "color"}}},
    )
    config = parse_build_config(_config())
    with pytest.raises(BuildError) as ei:
        build_all_platforms(config, root=token_root, timestamp=TS)
    assert ei.value.platform == "roku"
    assert not (token_root / "out").exists()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda raw: raw.update(options=["title"]),
        lambda raw: raw["platforms"]["roku"].update(options="DesignTokens"),
        lambda raw: raw["platforms"]["web-css"]["files"][0].update(options=[["output_references", True]]),
    ],
)
def test_non_object_options_are_config_errors(mutate):
    raw = _config()
    mutate(raw)
    with pytest.raises(BuildConfigError, match="'options' must be an object"):
        parse_build_config(raw)


def test_load_build_config_caches_until_file_changes(tmp_path):
    cfg = tmp_path / "platforms.json"
    _write(cfg, _config())
    first = load_build_config(cfg)
    assert load_build_config(cfg) is first

    raw = _config(title="Renamed")
    cfg.write_text(json.dumps(raw), encoding="utf-8")
    os.utime(cfg, (cfg.stat().st_atime, cfg.stat().st_mtime + 5))
    assert load_build_config(cfg).options["title"] == "Renamed"
