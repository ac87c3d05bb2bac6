from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
from pathlib import Path
from typing import Any, Callable

from colortool.color.chromaticity import ChromaticityPoint
from colortool.errors import ConfigError, NotFoundError


logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_COLORSPACES_PATH = RESOURCES_DIR / "colorspaces.json"
DEFAULT_ILLUMINANTS_PATH = RESOURCES_DIR / "illuminants.json"


@dataclass(frozen=True)
class ColorSpace:
    name: str
    red: ChromaticityPoint
    green: ChromaticityPoint
    blue: ChromaticityPoint
    whitepoint: ChromaticityPoint
    description: str | None = None
    transfer: str | None = None


@dataclass(frozen=True)
class Illuminant:
    name: str
    whitepoint: ChromaticityPoint
    description: str | None = None


class Registry:
    """Read-only lookup of named color spaces and illuminants."""

    def __init__(self, colorspaces: dict[str, ColorSpace], illuminants: dict[str, Illuminant]) -> None:
        self._colorspaces = dict(colorspaces)
        self._illuminants = dict(illuminants)

    def colorspace_names(self) -> list[str]:
        return sorted(self._colorspaces)

    def illuminant_names(self) -> list[str]:
        return sorted(self._illuminants)

    def colorspace(self, name: str) -> ColorSpace:
        try:
            return self._colorspaces[name]
        except KeyError:
            raise NotFoundError("colorspace", name) from None

    def illuminant(self, name: str) -> Illuminant:
        try:
            return self._illuminants[name]
        except KeyError:
            raise NotFoundError("illuminant", name) from None


YAML_SUFFIXES = {".yaml", ".yml"}


def _unique_pairs(path: Path) -> Callable[[list[tuple[str, Any]]], dict[str, Any]]:
    def hook(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in pairs:
            if key in out:
                raise ConfigError(f"duplicate key {key!r} in table file: {path}")
            out[key] = value
        return out

    return hook


def _find_duplicate_yaml_key(node: Any) -> str | None:
    import yaml  # type: ignore

    if isinstance(node, yaml.MappingNode):
        seen: set[str] = set()
        for key_node, value_node in node.value:
            key = str(key_node.value)
            if key in seen:
                return key
            seen.add(key)
            dup = _find_duplicate_yaml_key(value_node)
            if dup is not None:
                return dup
    elif isinstance(node, yaml.SequenceNode):
        for item in node.value:
            dup = _find_duplicate_yaml_key(item)
            if dup is not None:
                return dup
    return None


def _read_yaml_table(path: Path, text: str) -> Any:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for YAML tables. Install with: pip install PyYAML") from exc

    try:
        dup = _find_duplicate_yaml_key(yaml.compose(text, Loader=yaml.SafeLoader))
        if dup is not None:
            raise ConfigError(f"duplicate key {dup!r} in table file: {path}")
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse table file: {path}: {exc}") from exc


def _read_table(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not open table file: {path}: {exc}") from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        raw = _read_yaml_table(path, text)
    else:
        try:
            raw = json.loads(text, object_pairs_hook=_unique_pairs(path))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"could not parse table file: {path}: {exc}") from exc

    if not isinstance(raw, dict) or not raw:
        raise ConfigError(f"table file must contain a non-empty mapping of names: {path}")
    return raw


def _lookup(data: dict[str, Any], dotted: str, where: str) -> Any:
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            raise ConfigError(f"missing required value {dotted} in {where}")
        node = node[part]
    return node


def _require_float(data: dict[str, Any], dotted: str, where: str) -> float:
    value = _lookup(data, dotted, where)
    if isinstance(value, bool):
        raise ConfigError(f"invalid value for {dotted} in {where}: {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value for {dotted} in {where}: {value!r}") from exc
    if not math.isfinite(result):
        raise ConfigError(f"non-finite value for {dotted} in {where}: {value!r}")
    return result


def _point(data: dict[str, Any], prefix: str, where: str) -> ChromaticityPoint:
    return ChromaticityPoint(
        x=_require_float(data, f"{prefix}.x", where),
        y=_require_float(data, f"{prefix}.y", where),
    )


def _optional_text(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string in {where}")
    return value


def _parse_colorspace(name: str, data: Any) -> ColorSpace:
    where = f"colorspace {name!r}"
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be a mapping")
    return ColorSpace(
        name=name,
        red=_point(data, "primaries.R", where),
        green=_point(data, "primaries.G", where),
        blue=_point(data, "primaries.B", where),
        whitepoint=_point(data, "whitepoint", where),
        description=_optional_text(data, "description", where),
        transfer=_optional_text(data, "transfer", where),
    )


def _parse_illuminant(name: str, data: Any) -> Illuminant:
    where = f"illuminant {name!r}"
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be a mapping")
    return Illuminant(
        name=name,
        whitepoint=_point(data, "whitepoint", where),
        description=_optional_text(data, "description", where),
    )


def load_colorspaces(path: str | Path = DEFAULT_COLORSPACES_PATH) -> dict[str, ColorSpace]:
    table_path = Path(path).expanduser().resolve()
    raw = _read_table(table_path)
    spaces = {str(name): _parse_colorspace(str(name), data) for name, data in raw.items()}
    logger.info("loaded %d colorspaces from %s", len(spaces), table_path)
    return spaces


def load_illuminants(path: str | Path = DEFAULT_ILLUMINANTS_PATH) -> dict[str, Illuminant]:
    table_path = Path(path).expanduser().resolve()
    raw = _read_table(table_path)
    illuminants = {str(name): _parse_illuminant(str(name), data) for name, data in raw.items()}
    logger.info("loaded %d illuminants from %s", len(illuminants), table_path)
    return illuminants


def load_registry(
    colorspaces_path: str | Path = DEFAULT_COLORSPACES_PATH,
    illuminants_path: str | Path = DEFAULT_ILLUMINANTS_PATH,
) -> Registry:
    return Registry(load_colorspaces(colorspaces_path), load_illuminants(illuminants_path))
