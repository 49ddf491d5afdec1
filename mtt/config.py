"""Configuration loading for mtt (.mtt.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .constants import DEFAULT_BANNER, DEFAULT_COLLECTION_MARKERS

CONFIG_FILENAME = ".mtt.yml"


class ConfigError(RuntimeError):
    """Raised when configuration or the directories it names are unusable."""


@dataclass
class ConvertConfig:
    """Represents the settings defined in .mtt.yml, with CLI overrides applied."""

    root: Path
    working_directory: Path
    convert_directory: Path
    auto_generated_tag: bool = True
    banner: str = DEFAULT_BANNER
    strip_suffix: Optional[str] = "Resource"
    match_stripped_suffix: bool = False
    source_extensions: List[str] = field(default_factory=list)
    target_extension: str = ".ts"
    map_dates: bool = True
    collection_markers: List[str] = field(
        default_factory=lambda: list(DEFAULT_COLLECTION_MARKERS)
    )
    type_overrides: Dict[str, str] = field(default_factory=dict)
    indent: str = "\t"
    strict: bool = False
    clean_convert_directory: bool = True
    create_working_directory: bool = True
    templates_dir: Optional[Path] = None

    @classmethod
    def for_directories(
        cls, working_directory: Path, convert_directory: Path, **overrides: Any
    ) -> "ConvertConfig":
        """Build a config for explicit directories without reading any file."""
        working = Path(working_directory).expanduser().resolve()
        convert = Path(convert_directory).expanduser().resolve()
        return cls(
            root=Path.cwd().resolve(),
            working_directory=working,
            convert_directory=convert,
            **overrides,
        )


def load_config(config_path: Path) -> ConvertConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ConvertConfig(root=root, working_directory=root, convert_directory=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = ConvertConfig(root=root, working_directory=root, convert_directory=root)

    working = _as_str(data.get("working_directory"))
    convert = _as_str(data.get("convert_directory"))
    templates_dir = _as_str(data.get("templates_dir"))

    extensions = data.get("source_extensions")
    markers = data.get("collection_markers")

    return ConvertConfig(
        root=root,
        working_directory=_resolve_dir(root, working),
        convert_directory=_resolve_dir(root, convert),
        auto_generated_tag=_with_default(
            _as_bool(data.get("auto_generated_tag")), defaults.auto_generated_tag
        ),
        banner=_as_str(data.get("banner")) or defaults.banner,
        strip_suffix=_as_str(data.get("strip_suffix"))
        if "strip_suffix" in data
        else defaults.strip_suffix,
        match_stripped_suffix=_with_default(
            _as_bool(data.get("match_stripped_suffix")), defaults.match_stripped_suffix
        ),
        source_extensions=[_normalise_extension(item) for item in _as_str_list(extensions)]
        if extensions is not None
        else defaults.source_extensions,
        target_extension=_normalise_extension(
            _as_str(data.get("target_extension")) or defaults.target_extension
        ),
        map_dates=_with_default(_as_bool(data.get("map_dates")), defaults.map_dates),
        collection_markers=_as_str_list(markers)
        if markers is not None
        else defaults.collection_markers,
        type_overrides=_as_str_dict(data.get("type_overrides")),
        indent=_as_str(data.get("indent")) or defaults.indent,
        strict=_with_default(_as_bool(data.get("strict")), defaults.strict),
        clean_convert_directory=_with_default(
            _as_bool(data.get("clean_convert_directory")), defaults.clean_convert_directory
        ),
        create_working_directory=_with_default(
            _as_bool(data.get("create_working_directory")),
            defaults.create_working_directory,
        ),
        templates_dir=root / templates_dir if templates_dir else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _resolve_dir(root: Path, value: Optional[str]) -> Path:
    if not value:
        return root
    return (root / Path(value).expanduser()).resolve()


def _normalise_extension(value: str) -> str:
    value = value.strip()
    if value and not value.startswith("."):
        return f".{value}"
    return value


def _with_default(value: Optional[bool], default: bool) -> bool:
    return default if value is None else value


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


def _as_str_dict(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, (str, int, float)) and not isinstance(item, bool)
    }


__all__ = ["CONFIG_FILENAME", "ConfigError", "ConvertConfig", "load_config"]
