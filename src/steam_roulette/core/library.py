"""Discovery of installed games across Steam library folders.

A library root is a directory containing a ``steamapps`` folder. The default
root comes from the Steam installation; ``steamapps/libraryfolders.vdf`` in the
default root declares any others. Each library's ``steamapps`` folder holds one
``appmanifest_<appid>.acf`` file per installed app.

Failures are isolated: an unreadable or malformed manifest or library folder
produces a warning on the returned catalog and the scan continues with the rest.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any

import vdf

from steam_roulette.core.exclusions import is_excluded
from steam_roulette.core.types import GameCatalog, GameEntry, LibraryFolders

logger = logging.getLogger(__name__)

STEAMAPPS_DIR = "steamapps"
LIBRARY_FOLDERS_FILE = "libraryfolders.vdf"
MANIFEST_PREFIX = "appmanifest"


def steamapps_dir(root: Path) -> Path:
    return root / STEAMAPPS_DIR


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _lower_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Lower-case every key of a parsed KeyValues tree.

    Steam is inconsistent about key case (``appid`` / ``appID``,
    ``libraryfolders`` / ``LibraryFolders``).
    """
    return {
        key.lower(): _lower_keys(value) if isinstance(value, dict) else value
        for key, value in data.items()
    }


def _load_keyvalues(text: str) -> dict[str, Any]:
    """Parse KeyValues text into nested dicts with lower-cased keys.

    Raises:
        SyntaxError: If the text is not valid KeyValues
        ValueError: If the text is not valid KeyValues
    """
    return _lower_keys(vdf.loads(text))


def _iter_pairs(data: dict[str, Any]) -> Iterator[tuple[str, str]]:
    """Yield every string key/value pair in document order, depth first."""
    for key, value in data.items():
        if isinstance(value, dict):
            yield from _iter_pairs(value)
        else:
            yield key, value


def parse_library_folders(text: str) -> list[Path]:
    """Extract library root paths from libraryfolders.vdf content.

    Libraries are the numerically keyed children of the top-level block (or
    of the top level itself when the file has no outer block), in either of
    two layouts:

    - legacy: ``"1"  "/mnt/games"``
    - current: ``"1" { "path" "/mnt/games" ... }``

    Numeric keys nested deeper (the per-library ``"apps"`` block maps app ids
    to sizes) are not library roots.

    Raises:
        SyntaxError: If the text is not valid KeyValues
        ValueError: If the text is not valid KeyValues
    """
    data = _load_keyvalues(text)
    entries: list[Any] = []
    for key, value in data.items():
        if key.isdigit():
            entries.append(value)
        elif isinstance(value, dict):
            entries.extend(child for child_key, child in value.items() if child_key.isdigit())

    roots: list[Path] = []
    for entry in entries:
        path = entry.get("path") if isinstance(entry, dict) else entry
        if isinstance(path, str) and path:
            roots.append(Path(path))
    return roots


def resolve_library_roots(apps_dir: Path) -> LibraryFolders:
    """Read the extra library roots declared next to the default manifests.

    Args:
        apps_dir: The default library's ``steamapps`` directory

    Returns:
        LibraryFolders with the declared roots. A missing file means no extra
        roots; an unreadable or malformed one also yields no roots, with a
        warning.
    """
    vdf_path = apps_dir / LIBRARY_FOLDERS_FILE
    if not vdf_path.exists():
        logger.debug("No %s in %s, using default library only", LIBRARY_FOLDERS_FILE, apps_dir)
        return LibraryFolders()

    try:
        text = _read_text(vdf_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Failed to read %s: %s", vdf_path, e)
        return LibraryFolders(warnings=(f"Could not read {vdf_path}: {e}",))

    try:
        roots = tuple(parse_library_folders(text))
    except (SyntaxError, ValueError) as e:
        logger.debug("Failed to parse %s: %s", vdf_path, e)
        return LibraryFolders(warnings=(f"Could not parse {vdf_path}: {e}",))

    logger.debug("Library folders declared in %s: %s", vdf_path, [str(r) for r in roots])
    return LibraryFolders(roots=roots)


def parse_manifest(text: str) -> GameEntry:
    """Extract the display name and app id from appmanifest content.

    Any key containing "name" sets the name and any key containing "appid"
    sets the id; when either appears more than once the last one in the file
    wins. Missing fields are left empty and filtered out later.

    Raises:
        SyntaxError: If the text is not valid KeyValues
        ValueError: If the text is not valid KeyValues
    """
    name = ""
    app_id = ""
    for key, value in _iter_pairs(_load_keyvalues(text)):
        if "name" in key:
            name = value.strip()
        if "appid" in key:
            app_id = value.strip()
    return GameEntry(name=name, app_id=app_id)


def list_manifest_files(apps_dir: Path) -> list[Path]:
    """List appmanifest files in a ``steamapps`` directory, sorted by name.

    Raises:
        OSError: If the directory cannot be listed
    """
    return sorted(
        entry
        for entry in apps_dir.iterdir()
        if entry.name.startswith(MANIFEST_PREFIX) and entry.is_file()
    )


def scan_library_root(root: Path) -> GameCatalog:
    """Parse every appmanifest file under ``root/steamapps``.

    Entries are returned unfiltered, including ones with empty fields.
    """
    apps_dir = steamapps_dir(root)
    try:
        manifest_files = list_manifest_files(apps_dir)
    except OSError as e:
        logger.debug("Failed to list %s: %s", apps_dir, e)
        return GameCatalog(warnings=(f"Could not read library folder {apps_dir}: {e}",))

    games: list[GameEntry] = []
    warnings: list[str] = []
    for manifest_path in manifest_files:
        try:
            text = _read_text(manifest_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable manifest %s: %s", manifest_path, e)
            warnings.append(f"Skipped unreadable manifest {manifest_path}: {e}")
            continue
        try:
            entry = parse_manifest(text)
        except (SyntaxError, ValueError) as e:
            logger.debug("Skipping malformed manifest %s: %s", manifest_path, e)
            warnings.append(f"Skipped malformed manifest {manifest_path}: {e}")
            continue
        logger.debug("Parsed %s: name=%r appid=%r", manifest_path.name, entry.name, entry.app_id)
        games.append(entry)

    return GameCatalog(games=tuple(games), warnings=tuple(warnings))


def unique_roots(roots: Iterable[Path]) -> tuple[list[Path], list[str]]:
    """Drop roots that point at the same directory, keeping first occurrences.

    Returns:
        The distinct roots, and a warning for every root whose path could not
        be expanded or resolved (for example a symlink loop)
    """
    seen: set[Path] = set()
    result: list[Path] = []
    warnings: list[str] = []
    for root in roots:
        try:
            key = root.expanduser().resolve()
        except (OSError, RuntimeError) as e:
            logger.debug("Failed to resolve %s: %s", root, e)
            warnings.append(f"Could not resolve library folder {root}: {e}")
            continue
        if key in seen:
            continue
        seen.add(key)
        result.append(root)
    return result, warnings


def build_catalog(roots: Sequence[Path], extra_excluded: Iterable[str] = ()) -> GameCatalog:
    """Scan every library root and keep only launchable games.

    Args:
        roots: Library roots to scan; duplicates are scanned once
        extra_excluded: Additional exact display names to exclude

    Returns:
        GameCatalog of entries with a non-blank app id and a name that passes
        the exclusion rules, plus warnings from every root
    """
    excluded = frozenset(extra_excluded)
    distinct, resolve_warnings = unique_roots(roots)
    catalog = GameCatalog(warnings=tuple(resolve_warnings))
    for root in distinct:
        catalog = catalog.merge(scan_library_root(root))

    games = tuple(
        game
        for game in catalog.games
        if game.app_id.strip() and not is_excluded(game.name, excluded)
    )
    logger.debug("Catalog: %d launchable of %d found", len(games), len(catalog.games))
    return GameCatalog(games=games, warnings=catalog.warnings)


def discover_catalog(
    default_root: Path,
    configured_roots: Sequence[Path] = (),
    extra_excluded: Iterable[str] = (),
) -> GameCatalog:
    """Find every launchable game reachable from the default Steam library.

    Scans the default root, every root declared in its libraryfolders.vdf and
    any roots from user config, in that order.
    """
    folders = resolve_library_roots(steamapps_dir(default_root))
    roots = [default_root, *folders.roots, *configured_roots]
    catalog = build_catalog(roots, extra_excluded)
    return GameCatalog(games=catalog.games, warnings=folders.warnings + catalog.warnings)
