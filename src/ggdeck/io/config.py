"""
Configuration for the example-data preparer.

Defines PrepSettings, a frozen dataclass carrying the filter selection and the
artifact output options. Defaults are sourced from ggdeck.core.constants (the single
source of truth).

Precedence
- environment (GGDECK_*) > TOML (ggdeck.toml or [tool.ggdeck.prep] in pyproject.toml) > defaults.

Import DAG discipline
- Depends only on stdlib, ggdeck.core.constants, and ggdeck.io.errors.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from ggdeck.core.constants import COMPRESSION as CORE_COMPRESSION
from ggdeck.core.constants import DEFAULT_PARAMETER, DEFAULT_REGION, DEFAULT_TARGET_STIMULUS

from .errors import IoConfigError

Compression = Literal["zstd", "lz4", "snappy"]

_COMPRESSIONS = ("zstd", "lz4", "snappy")


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class PrepSettings:
    """
    Runtime settings for the example-data preparer.

    Attributes:
        region (str): Region filter value (default "SC").
        parameter (str): Parameter filter value (default "flynet").
        target_stimulus (str): Stimulus marking the target condition group
            (default "ring_expand").
        out_dir (str): Directory used for the default artifact path.
        compression (Literal["zstd","lz4","snappy"]): Parquet codec for artifacts.
        write_manifest (bool): Write <artifact>.manifest.json next to the artifact.

    Raises:
        IoConfigError: If the codec is unsupported or a filter value is empty.

    Examples:
        >>> from ggdeck.io import PrepSettings
        >>> PrepSettings(region="LGN").region
        'LGN'
    """

    region: str = DEFAULT_REGION
    parameter: str = DEFAULT_PARAMETER
    target_stimulus: str = DEFAULT_TARGET_STIMULUS
    out_dir: str = "out"
    compression: Compression = CORE_COMPRESSION  # type: ignore[assignment]
    write_manifest: bool = True

    def __post_init__(self) -> None:
        if self.compression not in _COMPRESSIONS:
            raise IoConfigError(
                f"unsupported compression {self.compression!r} (expected one of {_COMPRESSIONS})"
            )
        for name in ("region", "parameter", "target_stimulus"):
            if not str(getattr(self, name)).strip():
                raise IoConfigError(f"{name} must be a non-empty string")

    def default_output_path(self) -> Path:
        """Artifact path derived from the filter selection, e.g. out/summary_SC_flynet.parquet."""
        return Path(self.out_dir) / f"summary_{self.region}_{self.parameter}.parquet"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: PrepSettings, cfg: dict[str, Any] | None) -> PrepSettings:
        """Apply a loose config mapping onto PrepSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for key in ("region", "parameter", "target_stimulus", "out_dir"):
            val = cfg.get(key)
            if isinstance(val, str) and val.strip():
                s = replace(s, **{key: val.strip()})

        if "compression" in cfg and isinstance(cfg["compression"], str):
            comp = cfg["compression"].strip().lower()
            if comp in _COMPRESSIONS:
                s = replace(s, compression=comp)  # type: ignore[arg-type]

        if "write_manifest" in cfg:
            s = replace(s, write_manifest=_bool(cfg["write_manifest"]))

        return s

    @classmethod
    def from_env(cls, base: PrepSettings | None = None, prefix: str = "GGDECK_") -> PrepSettings:
        """
        Build PrepSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - GGDECK_REGION
            - GGDECK_PARAMETER
            - GGDECK_TARGET_STIMULUS
            - GGDECK_OUT_DIR
            - GGDECK_COMPRESSION ("zstd" | "lz4" | "snappy")
            - GGDECK_WRITE_MANIFEST (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in (
            "region",
            "parameter",
            "target_stimulus",
            "out_dir",
            "compression",
            "write_manifest",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> PrepSettings:
        """
        Build PrepSettings from a TOML file.

        Search order when `path` is None:
            1) ./ggdeck.toml (with either a [prep] table or top-level keys)
            2) ./pyproject.toml under [tool.ggdeck.prep]

        Returns defaults if no file is present.

        Raises:
            IoConfigError: If an explicitly given path does not exist or is not valid TOML.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            explicit = Path(path)
            if not explicit.exists():
                raise IoConfigError(f"config file not found: {explicit}")
            cand.append(explicit)
        else:
            cand.append(Path.cwd() / "ggdeck.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise IoConfigError(f"invalid TOML in {p}: {exc}") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("ggdeck", {}).get("prep", {}) if isinstance(tool, dict) else None
            elif isinstance(data.get("prep"), dict):
                cfg = data["prep"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> PrepSettings:
        """
        Load PrepSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search ggdeck.toml then pyproject.toml.
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
