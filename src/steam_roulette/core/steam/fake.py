"""Fake Steam platform for testing.

FakeSteamPlatform is an in-memory implementation that returns configured
answers and records launch() calls without starting any process.
"""

from pathlib import Path

from steam_roulette.core.selection import rungame_url
from steam_roulette.core.steam.abc import InstallKind, SteamPlatform


class FakeSteamPlatform(SteamPlatform):
    """In-memory fake implementation of Steam platform operations.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.

    Examples:
        # Native Steam with its data directory in a temp folder
        >>> platform = FakeSteamPlatform(kind=InstallKind.NATIVE, root=tmp_path / "Steam")
        >>> platform.launch(InstallKind.NATIVE, "70")
        >>> assert platform.launch_calls == [(InstallKind.NATIVE, "70")]

        # Steam not installed
        >>> platform = FakeSteamPlatform(kind=InstallKind.NOT_FOUND)

        # Launcher that fails to spawn
        >>> platform = FakeSteamPlatform(launch_error="No such file or directory: 'steam'")
    """

    def __init__(
        self,
        *,
        kind: InstallKind = InstallKind.NATIVE,
        root: Path | None = None,
        launch_error: str | None = None,
    ) -> None:
        """Initialize fake with a predetermined installation.

        Args:
            kind: InstallKind to return from detect()
            root: Path to return from default_root(), or None if no data
                directory should be found
            launch_error: If set, launch() raises RuntimeError with this message
        """
        self._kind = kind
        self._root = root
        self._launch_error = launch_error
        self._launch_calls: list[tuple[InstallKind, str]] = []

    @property
    def launch_calls(self) -> list[tuple[InstallKind, str]]:
        """Get the list of launch() calls that were made.

        Returns list of (kind, app_id) tuples.

        This property is for test assertions only.
        """
        return self._launch_calls.copy()

    def detect(self) -> InstallKind:
        return self._kind

    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        return self._root

    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        return ["steam", rungame_url(app_id)]

    def launch(self, kind: InstallKind, app_id: str) -> None:
        self._launch_calls.append((kind, app_id))
        if self._launch_error is not None:
            raise RuntimeError(self._launch_error)
