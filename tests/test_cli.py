from __future__ import annotations

import json
from pathlib import Path

import pytest

from colortool.cli import main


def test_colorspaces_lists_bundled_names(capsys) -> None:
    assert main(["colorspaces"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "info: Colorspaces:"
    assert "info:     sRGB" in out
    assert "info:     ACEScg" in out


def test_colorspaces_verbose_shows_descriptions(capsys) -> None:
    assert main(["colorspaces", "-v"]) == 0
    out = capsys.readouterr().out
    assert "info:     sRGB - IEC 61966-2-1 sRGB" in out


def test_illuminants_json(capsys) -> None:
    assert main(["illuminants", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["D65"]["whitepoint"] == [0.3127, 0.329]


def test_transform_report(capsys) -> None:
    assert main(["transform", "sRGB", "Rec2020"]) == 0
    out = capsys.readouterr().out
    assert "info: input colorspace: sRGB" in out
    assert "info: whitepoint adaptation: Bradford" in out
    assert "info: input to output transformation" in out
    assert "info:     0.627404, 0.329283, 0.043313" in out


def test_transform_json_with_method_and_precision(capsys) -> None:
    code = main(["transform", "ACES2065-1", "ARRIWideGamut3", "--adaptation-method", "CAT02", "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["adaptation_method"] == "CAT02"
    assert len(payload["transform"]) == 3


def test_transform_precision_flag(capsys) -> None:
    assert main(["transform", "sRGB", "Rec2020", "--precision", "2"]) == 0
    out = capsys.readouterr().out
    assert "info:     0.41, 0.36, 0.18" in out


def test_adapt_report(capsys) -> None:
    assert main(["adapt", "D65", "D50", "--adaptation-method", "vonkries"]) == 0
    out = capsys.readouterr().out
    assert "info: input illuminant: D65" in out
    assert "info: whitepoint adaptation: VonKries" in out


def test_unknown_colorspace_exits_with_error(capsys) -> None:
    assert main(["transform", "sRGB", "Nope"]) == 1
    err = capsys.readouterr().err
    assert "error: unknown colorspace: Nope" in err


def test_none_adaptation_method_is_rejected(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["transform", "sRGB", "Rec2020", "--adaptation-method", "none"])
    assert exc_info.value.code == 2
    assert "could not parse adaptation method" in capsys.readouterr().err


def test_broken_table_reports_config_error(tmp_path: Path, capsys) -> None:
    table = tmp_path / "colorspaces.json"
    table.write_text(json.dumps({"Broken": {"whitepoint": {"x": 0.3127, "y": 0.329}}}), encoding="utf-8")
    assert main(["transform", "Broken", "Broken", "--colorspaces-file", str(table)]) == 1
    assert "missing required value primaries.R.x" in capsys.readouterr().err


def test_config_file_sets_default_method(tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "colortool.yaml"
    cfg.write_text("adaptation_method: xyzscaling\nprecision: 3\n", encoding="utf-8")
    assert main(["adapt", "D65", "D50", "--config", str(cfg)]) == 0
    out = capsys.readouterr().out
    assert "info: whitepoint adaptation: XYZScaling" in out
    assert "info:     whitepoint: 0.313, 0.329" in out
