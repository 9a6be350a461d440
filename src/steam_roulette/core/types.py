"""Data types shared by library discovery and game selection."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GameEntry:
    """An installed app as recorded by its appmanifest file.

    app_id is passed verbatim into the launch URL and is never validated.
    """

    name: str
    app_id: str


@dataclass(frozen=True)
class LibraryFolders:
    """Extra library roots declared in libraryfolders.vdf."""

    roots: tuple[Path, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class GameCatalog:
    """Games found across library roots, plus messages for anything skipped.

    A scan never aborts on a single bad file or folder; it records a warning
    and keeps going, so the catalog may be partial.
    """

    games: tuple[GameEntry, ...] = ()
    warnings: tuple[str, ...] = ()

    def merge(self, other: "GameCatalog") -> "GameCatalog":
        return GameCatalog(
            games=self.games + other.games,
            warnings=self.warnings + other.warnings,
        )
