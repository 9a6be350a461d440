"""No-op wrapper for Steam platform operations."""

from pathlib import Path

from steam_roulette.core.steam.abc import InstallKind, SteamPlatform


class DryRunSteamPlatform(SteamPlatform):
    """Wrapper that never launches anything.

    Detection and path lookups are delegated to the wrapped implementation so
    a dry run still discovers and selects games exactly like a real run.

    Usage:
        real_platform = LinuxSteamPlatform()
        noop_platform = DryRunSteamPlatform(real_platform)

        # No-op instead of spawning steam
        noop_platform.launch(InstallKind.NATIVE, "70")
    """

    def __init__(self, wrapped: SteamPlatform) -> None:
        """Create a dry-run wrapper around a SteamPlatform implementation.

        Args:
            wrapped: The SteamPlatform implementation to wrap
        """
        self._wrapped = wrapped

    @property
    def wrapped(self) -> SteamPlatform:
        return self._wrapped

    # Read-only operations: delegate to wrapped implementation

    def detect(self) -> InstallKind:
        return self._wrapped.detect()

    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        return self._wrapped.default_root(kind, home)

    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        return self._wrapped.launch_command(kind, app_id)

    # Launching: no-op

    def launch(self, kind: InstallKind, app_id: str) -> None:
        """No-op for launching in dry-run mode."""
        pass
