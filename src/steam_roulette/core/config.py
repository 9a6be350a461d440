"""User configuration loaded from ~/.steam-roulette/config.toml.

The file is optional. Loaded once at the CLI entry point and stored in
RouletteContext.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR_NAME = ".steam-roulette"
CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True)
class RouletteConfig:
    """Immutable user configuration.

    steam_dir overrides the detected Steam data directory, library_folders are
    scanned in addition to the ones Steam declares, and excluded_names are
    never picked.
    """

    steam_dir: Path | None = None
    library_folders: tuple[Path, ...] = ()
    excluded_names: frozenset[str] = frozenset()


def default_config_path(home: Path) -> Path:
    return home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _string_list(data: dict, key: str, config_path: Path) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' must be a list of strings in {config_path}")
    return value


def load_config(config_path: Path) -> RouletteConfig:
    """Load user config, falling back to defaults if the file doesn't exist.

    Args:
        config_path: Path to config.toml

    Returns:
        RouletteConfig with loaded values

    Raises:
        ValueError: If the file is not valid TOML or a field has the wrong type
    """
    if not config_path.exists():
        return RouletteConfig()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    steam_dir = data.get("steam_dir")
    if steam_dir is not None and not isinstance(steam_dir, str):
        raise ValueError(f"'steam_dir' must be a string in {config_path}")

    return RouletteConfig(
        steam_dir=Path(steam_dir).expanduser() if steam_dir else None,
        library_folders=tuple(
            Path(folder).expanduser()
            for folder in _string_list(data, "library_folders", config_path)
        ),
        excluded_names=frozenset(_string_list(data, "excluded_names", config_path)),
    )
