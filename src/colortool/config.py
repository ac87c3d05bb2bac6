from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from colortool.color.adaptation import AdaptationMethod
from colortool.errors import ConfigError
from colortool.registry import DEFAULT_COLORSPACES_PATH, DEFAULT_ILLUMINANTS_PATH


@dataclass(frozen=True)
class ToolConfig:
    colorspaces_path: Path = DEFAULT_COLORSPACES_PATH
    illuminants_path: Path = DEFAULT_ILLUMINANTS_PATH
    adaptation_method: AdaptationMethod = AdaptationMethod.BRADFORD
    precision: int = 6
    verbose: bool = False
    log_level: str = "WARNING"
    log_file: Path | None = None


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _as_precision(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"precision must be an integer, got {value!r}")
    try:
        precision = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"precision must be an integer, got {value!r}") from exc
    if not 0 <= precision <= 17:
        raise ConfigError(f"precision must be between 0 and 17, got {precision}")
    return precision


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def load_config(path: str | Path | None = None) -> ToolConfig:
    """Load tool settings from an optional YAML file, falling back to defaults."""

    if path is None:
        return ToolConfig()

    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"could not open config file: {cfg_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse config file: {cfg_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"config file must contain a mapping: {cfg_path}")

    base = cfg_path.parent
    tables_raw = raw.get("tables", {}) or {}

    try:
        method = AdaptationMethod.parse(raw.get("adaptation_method", AdaptationMethod.BRADFORD.value))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    return ToolConfig(
        colorspaces_path=_expand_path(tables_raw.get("colorspaces"), base) or DEFAULT_COLORSPACES_PATH,
        illuminants_path=_expand_path(tables_raw.get("illuminants"), base) or DEFAULT_ILLUMINANTS_PATH,
        adaptation_method=method,
        precision=_as_precision(raw.get("precision", 6)),
        verbose=_as_bool(raw.get("verbose", False), "verbose"),
        log_level=str(raw.get("log_level", "WARNING")),
        log_file=_expand_path(raw.get("log_file"), base),
    )
