"""Tests for the molblog command line."""

import json
from pathlib import Path

import pytest

from molblog.cli import main


def test_depict(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    out = tmp_path / "ethanol.png"

    assert main(["depict", "CCO", "-o", str(out), "--size", "120", "80"]) == 0
    assert out.exists()
    assert "Wrote" in capsys.readouterr().out


def test_depict_svg_changes_suffix(tmp_path: Path) -> None:
    assert main(["depict", "CCO", "-o", str(tmp_path / "ethanol.png"), "--svg"]) == 0
    assert (tmp_path / "ethanol.svg").exists()


def test_depict_invalid_identifier(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["depict", "C1CC", "-o", str(tmp_path / "x.png")]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_convert(catalog_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    dst = tmp_path / "out.sdf"

    assert main(["convert", str(catalog_csv), str(dst)]) == 0
    assert dst.exists()
    assert "Converted 2 molecules" in capsys.readouterr().out


def test_convert_missing_input(tmp_path: Path) -> None:
    assert main(["convert", str(tmp_path / "nope.csv"), str(tmp_path / "out.sdf")]) == 1


def test_table(catalog_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    md = tmp_path / "table.md"
    db = tmp_path / "table.db"

    code = main([
        "table", str(catalog_csv),
        "--image-dir", str(tmp_path / "img"),
        "--markdown", str(md),
        "--db", str(db),
    ])

    assert code == 0
    assert "![Aspirin]" in md.read_text(encoding="utf-8")
    assert db.exists()
    assert "Rendered 2/3 molecules" in capsys.readouterr().out


def test_build(catalog_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = main(["build", str(catalog_csv), "--post", "tables", "--root", str(tmp_path), "--no-sdf"])

    assert code == 0
    assert (tmp_path / "content" / "post" / "tables" / "molecules.md").exists()
    assert not (tmp_path / "content" / "post" / "tables" / "molecules.sdf").exists()
    assert "failed:   1" in capsys.readouterr().out


def test_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        main([])


def test_parse_prints_json_report(capsys: pytest.CaptureFixture) -> None:
    assert main(["parse", "OCC"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["decision"] == "accepted"
    assert report["canonical_smiles"] == "CCO"

    assert main(["parse", "C1CC"]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["decision"] == "rejected"
    assert report["reasons"]


def test_table_on_stdout_is_not_mixed_with_log(
    catalog_csv: Path, tmp_path: Path, capsys: pytest.CaptureFixture
) -> None:
    assert main(["table", str(catalog_csv), "--image-dir", str(tmp_path / "img")]) == 0

    captured = capsys.readouterr()
    assert captured.out.startswith("| image | name | smiles | category |")
    assert "WARNING" not in captured.out
    assert "Rendered" not in captured.out
    assert "WARNING" in captured.err
    assert "Rendered 2/3 molecules" in captured.err


def test_table_legend_flag(catalog_csv: Path, tmp_path: Path) -> None:
    base = ["table", str(catalog_csv), "--svg", "--markdown", str(tmp_path / "t.md")]

    assert main(base + ["--image-dir", str(tmp_path / "plain")]) == 0
    assert main(base + ["--image-dir", str(tmp_path / "legend"), "--legend"]) == 0

    plain = (tmp_path / "plain" / "aspirin.svg").read_text(encoding="utf-8")
    legend = (tmp_path / "legend" / "aspirin.svg").read_text(encoding="utf-8")
    assert plain != legend
