from __future__ import annotations

from pathlib import Path

import pytest

from ggdeck.io.config import PrepSettings
from ggdeck.io.errors import IoConfigError

_ENV_KEYS = [
    "GGDECK_REGION",
    "GGDECK_PARAMETER",
    "GGDECK_TARGET_STIMULUS",
    "GGDECK_OUT_DIR",
    "GGDECK_COMPRESSION",
    "GGDECK_WRITE_MANIFEST",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_ggdeck_toml(tmp: Path, content: str) -> Path:
    p = tmp / "ggdeck.toml"
    p.write_text(content)
    return p


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_ggdeck_toml(
        tmp_path,
        """
        [prep]
        region = "LGN"
        parameter = "motion_energy"
        compression = "lz4"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("GGDECK_REGION", "SC")
    monkeypatch.setenv("GGDECK_COMPRESSION", "snappy")

    s = PrepSettings.load()

    assert s.region == "SC"  # env override
    assert s.parameter == "motion_energy"  # from TOML
    assert s.compression == "snappy"  # env override


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.ggdeck.prep]
        target_stimulus = "grating"
        write_manifest = false
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = PrepSettings.load()

    assert s.target_stimulus == "grating"
    assert s.write_manifest is False


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = PrepSettings.load()

    assert (s.region, s.parameter, s.target_stimulus) == ("SC", "flynet", "ring_expand")
    assert s.out_dir == "out"
    assert s.compression == "zstd"
    assert s.default_output_path() == Path("out") / "summary_SC_flynet.parquet"


def test_invalid_values_are_ignored_or_rejected(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("GGDECK_COMPRESSION", "gzip")  # unsupported; ignored

    assert PrepSettings.load().compression == "zstd"

    with pytest.raises(IoConfigError):
        PrepSettings(compression="gzip")  # type: ignore[arg-type]
    with pytest.raises(IoConfigError):
        PrepSettings(region=" ")


def test_explicit_missing_config_path_raises(tmp_path: Path) -> None:
    with pytest.raises(IoConfigError):
        PrepSettings.from_toml(tmp_path / "missing.toml")
