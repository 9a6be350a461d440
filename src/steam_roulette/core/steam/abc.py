"""Steam client platform interface.

Each operating system installs and launches Steam differently. SteamPlatform
hides those differences behind one interface; the concrete class for the
running OS is chosen once at startup (see ``select_platform``).
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path


class InstallKind(Enum):
    """How the Steam client is installed on this machine."""

    NATIVE = "native"
    SANDBOXED = "sandboxed"
    NOT_FOUND = "not_found"


class SteamPlatform(ABC):
    """Abstract interface for locating and launching the Steam client.

    Real implementations probe the filesystem, PATH and package managers.
    Fake implementations return canned answers for tests.
    """

    @abstractmethod
    def detect(self) -> InstallKind:
        """Determine how Steam is installed.

        A native install takes precedence over a sandboxed one.

        Returns:
            The detected InstallKind, NOT_FOUND if Steam is not installed
        """
        ...

    @abstractmethod
    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        """Get the Steam data directory for an install kind.

        Args:
            kind: InstallKind returned by detect()
            home: The user's home directory

        Returns:
            Path to the directory holding ``steamapps``, or None if no
            candidate directory exists
        """
        ...

    @abstractmethod
    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        """Build the command line that asks Steam to run an app.

        Args:
            kind: InstallKind returned by detect()
            app_id: Steam app id, used verbatim

        Raises:
            ValueError: If kind cannot launch anything (NOT_FOUND)
        """
        ...

    @abstractmethod
    def launch(self, kind: InstallKind, app_id: str) -> None:
        """Start the app through Steam without waiting for it.

        Args:
            kind: InstallKind returned by detect()
            app_id: Steam app id, used verbatim

        Raises:
            RuntimeError: If the launcher process cannot be started
        """
        ...
