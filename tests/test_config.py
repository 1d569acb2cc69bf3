"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

from libcompare import config as config_module


def test_defaults_under_pytest(monkeypatch) -> None:
    for env_name in config_module.ENV_MAP.values():
        monkeypatch.delenv(env_name, raising=False)
    cfg = config_module.load_config()
    assert cfg["EXPORT_FORMAT"] == "csv"
    assert cfg["LOG_LEVEL"] == "WARNING"
    assert cfg["OTHER_SECTION_LABEL"] == "Local Only Songs"
    assert isinstance(cfg["OUTPUT_DIR"], Path)


def test_env_overrides_are_coerced(monkeypatch) -> None:
    monkeypatch.setenv("LIBCOMPARE_OUTPUT_DIR", "~/reports")
    monkeypatch.setenv("LIBCOMPARE_EXPORT_FORMAT", " XML ")
    monkeypatch.setenv("LIBCOMPARE_LOG_LEVEL", "debug")
    monkeypatch.setenv("LIBCOMPARE_OTHER_SECTION_LABEL", "Reference Only Songs")
    cfg = config_module.load_config()
    assert cfg["OUTPUT_DIR"] == Path.home() / "reports"
    assert cfg["EXPORT_FORMAT"] == "xml"
    assert cfg["LOG_LEVEL"] == "DEBUG"
    assert cfg["OTHER_SECTION_LABEL"] == "Reference Only Songs"


def test_invalid_env_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("LIBCOMPARE_EXPORT_FORMAT", "pdf")
    monkeypatch.setenv("LIBCOMPARE_LOG_LEVEL", "chatty")
    monkeypatch.setenv("LIBCOMPARE_OTHER_SECTION_LABEL", "   ")
    cfg = config_module.load_config()
    assert cfg["EXPORT_FORMAT"] == "csv"
    assert cfg["LOG_LEVEL"] == "WARNING"
    assert cfg["OTHER_SECTION_LABEL"] == "Local Only Songs"


def test_threshold_is_not_configurable() -> None:
    assert "THRESHOLD" not in " ".join(config_module.DEFAULTS)


def test_save_config_round_trip(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.json")
    path = config_module.save_config({"EXPORT_FORMAT": "both", "OUTPUT_DIR": Path("/tmp/x"), "EXTRA": 1})
    assert path == tmp_path / "config.json"
    assert '"EXPORT_FORMAT": "both"' in path.read_text(encoding="utf-8")
    assert "EXTRA" not in path.read_text(encoding="utf-8")
