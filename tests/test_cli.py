"""Tests for the command-line interface."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from typer.testing import CliRunner

from libcompare.cli import _write_reports, app
from libcompare.models import ComparisonBundle, ScoredTrack, TrackRecord

runner = CliRunner()


def test_compare_writes_csv_reports(catalog_files, tmp_path: Path) -> None:
    reference, local = catalog_files
    out_dir = tmp_path / "reports"

    result = runner.invoke(app, ["compare", str(reference), str(local), "--output", str(out_dir), "--format", "csv"])

    assert result.exit_code == 0, result.output
    assert "Comparison summary" in result.output
    comparison = (out_dir / "music_comparison.csv").read_text(encoding="utf-8-sig")
    assert comparison.startswith("--- Common Songs ---\n")
    assert '"Shape of You (feat. Ed Sheeran)","Ed Sheeran",""' in comparison
    assert '"Paranoid Android","Radiohead","OK Computer"' in comparison
    reference_only = (out_dir / "reference_only_songs.csv").read_text(encoding="utf-8-sig")
    assert reference_only == 'Title,Artist,Album\n"Hoppípolla","Sigur Rós",""\n'
    assert (out_dir / "local_only_songs.csv").exists()
    assert not (out_dir / "best_effort_missing.csv").exists()


def test_compare_both_formats_with_scores(catalog_files, tmp_path: Path) -> None:
    reference, local = catalog_files
    out_dir = tmp_path / "reports"

    result = runner.invoke(
        app,
        ["compare", str(reference), str(local), "--output", str(out_dir), "--format", "both", "--scored", "--quiet"],
    )

    assert result.exit_code == 0, result.output
    for name in ("music_comparison", "reference_only_songs", "local_only_songs", "best_effort_missing"):
        assert (out_dir / f"{name}.csv").exists()
        assert (out_dir / f"{name}.xml").exists()
    scored = ET.fromstring((out_dir / "best_effort_missing.xml").read_bytes())
    assert [s.findtext("title") for s in scored] == ["Hoppípolla"]
    assert scored.find("song/matchScore") is not None


def test_write_reports_adds_scored_report_only_when_given(tmp_path: Path) -> None:
    missing = TrackRecord("Hoppípolla", "Sigur Rós")
    bundle = ComparisonBundle(common=[], reference_only=[missing], local_only=[])

    plain = _write_reports(bundle, None, "xml", tmp_path / "plain")
    scored = _write_reports(bundle, [ScoredTrack(missing, 0.5)], "xml", tmp_path / "scored")

    assert [p.name for p in plain] == ["music_comparison.xml", "reference_only_songs.xml", "local_only_songs.xml"]
    assert scored[-1].name == "best_effort_missing.xml"
    root = ET.fromstring(scored[-1].read_bytes())
    assert root.findtext("song/matchScore") == "0.5"


def test_compare_against_music_folder(catalog_files, tmp_path: Path) -> None:
    reference, _ = catalog_files
    folder = tmp_path / "music"
    folder.mkdir()
    (folder / "Hey Jude.flac").touch()
    out_dir = tmp_path / "reports"

    result = runner.invoke(app, ["compare", str(reference), str(folder), "--output", str(out_dir), "--format", "csv"])

    assert result.exit_code == 0, result.output
    local_only = (out_dir / "local_only_songs.csv").read_text(encoding="utf-8-sig")
    assert '"Hey Jude","",""' in local_only


def test_compare_rejects_unknown_format(catalog_files, tmp_path: Path) -> None:
    reference, local = catalog_files
    result = runner.invoke(app, ["compare", str(reference), str(local), "--format", "pdf"])
    assert result.exit_code == 2


def test_compare_reports_malformed_input(catalog_files, tmp_path: Path) -> None:
    _, local = catalog_files
    broken = tmp_path / "broken.xml"
    broken.write_text("<tracks><track>", encoding="utf-8")

    result = runner.invoke(app, ["compare", str(broken), str(local), "--output", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "broken.xml" in result.output
    assert not (tmp_path / "out").exists()


def test_scan_lists_titles(tmp_path: Path) -> None:
    (tmp_path / "song1.mp3").touch()
    (tmp_path / "song2.wav").touch()

    result = runner.invoke(app, ["scan", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "song1" in result.output
    assert "Scanned 2 song(s)" in result.output


def test_scan_rejects_missing_folder(tmp_path: Path) -> None:
    result = runner.invoke(app, ["scan", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_config_show() -> None:
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "EXPORT_FORMAT" in result.output
