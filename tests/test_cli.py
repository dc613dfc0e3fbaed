# tests/test_cli.py
"""`design-tokens` sub-commands: printed summaries and exit codes."""

from __future__ import annotations

import json

import pytest

from design_token_compiler.cli import main


def _write(path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(
        tmp_path / "tokens" / "base.json",
        {
            "color": {"primary": {"value": "#16b087", "type": "color"}},
            "spacing": {"sm": {"value": 8, "type": "dimension"}},
        },
    )
    _write(
        tmp_path / "platforms.json",
        {
            "source": ["tokens/base.json"],
            "platforms": {
                "android-colors": {
                    "transforms": ["name/snake", "color/argb"],
                    "build_path": "build/android/",
                    "files": [{"destination": "colors.xml", "format": "android/colors", "filter": "is_color"}],
                }
            },
        },
    )
    return tmp_path


def test_build_writes_outputs(project, capsys):
    code = main(["build", "--config", str(project / "platforms.json"), "--root", str(project)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Build complete" in out
    xml = (project / "build" / "android" / "colors.xml").read_text(encoding="utf-8")
    assert '<color name="color_primary">#FF16B087</color>' in xml
    assert "spacing" not in xml


def test_build_failure_returns_1_without_output(project, capsys):
    _write(project / "tokens" / "base.json", {"a": {"value": "{b}"}, "b": {"value": "{a}"}})
    code = main(["build", "--config", str(project / "platforms.json"), "--root", str(project)])
    assert code == 1
    assert "❌ Error" in capsys.readouterr().err
    assert not (project / "build").exists()


def test_build_unknown_platform(project, capsys):
    code = main(
        ["build", "--config", str(project / "platforms.json"), "--root", str(project), "--platform", "ios"]
    )
    assert code == 1
    assert "ios" in capsys.readouterr().err


def test_check_breaking_without_baseline(project, capsys):
    assert main(["check-breaking"]) == 0
    assert "No baseline directory found" in capsys.readouterr().out


def test_check_breaking_detects_removal(project, capsys):
    _write(
        project / "tokens-baseline" / "base.json",
        {
            "color": {"primary": {"value": "#16b087", "type": "color"}},
            "spacing": {"sm": {"value": 8, "type": "dimension"}, "md": {"value": 16, "type": "dimension"}},
        },
    )
    assert main(["check-breaking"]) == 1
    out = capsys.readouterr().out
    assert "   - spacing.md" in out
    assert "BREAKING CHANGES DETECTED" in out


def test_check_breaking_malformed_json_is_fatal(project, capsys):
    (project / "tokens-baseline").mkdir()
    (project / "tokens-baseline" / "x.json").write_text("{", encoding="utf-8")
    assert main(["check-breaking", "tokens-baseline"]) == 1
    assert "❌ Error" in capsys.readouterr().err


def test_validate_naming(project, capsys):
    assert main(["validate-naming"]) == 0
    assert "All token names follow conventions!" in capsys.readouterr().out

    _write(project / "tokens" / "bad.json", {"primaryColor": {"value": "#fff", "type": "color"}})
    assert main(["validate-naming", "--tokens", "tokens"]) == 1
    out = capsys.readouterr().out
    assert '"primary_color"' in out
    assert "Naming conventions:" in out


def test_validate_format(project, capsys):
    assert main(["validate-format"]) == 0
    assert "All tokens are valid!" in capsys.readouterr().out

    _write(project / "tokens" / "bad.json", {"x": {"value": "transparent", "type": "color"}})
    assert main(["validate-format"]) == 1
    assert 'invalid color value "transparent"' in capsys.readouterr().out


def test_validate_without_token_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["validate-format"]) == 0
    assert "No token files found" in capsys.readouterr().out


def test_subcommand_required():
    with pytest.raises(SystemExit):
        main([])


def test_build_rejects_non_object_options(project, capsys):
    _write(
        project / "platforms.json",
        {
            "source": ["tokens/base.json"],
            "options": "dark",
            "platforms": {
                "web-css": {"transforms": ["name/kebab"], "files": [{"destination": "t.css", "format": "css/variables"}]}
            },
        },
    )
    code = main(["build", "--config", str(project / "platforms.json"), "--root", str(project)])
    assert code == 1
    assert "'options' must be an object" in capsys.readouterr().err
