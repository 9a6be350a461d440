"""Real Steam platform implementations for Linux, Windows and macOS."""

import logging
import shutil
import sys
from pathlib import Path

from steam_roulette.core.selection import rungame_url
from steam_roulette.core.steam.abc import InstallKind, SteamPlatform
from steam_roulette.core.subprocess import run_subprocess_with_context, spawn_detached

logger = logging.getLogger(__name__)

STEAM_EXECUTABLE = "steam"

FLATPAK_EXECUTABLE = "flatpak"
FLATPAK_STEAM_ID = "com.valvesoftware.Steam"
FLATPAK_STEAM_DATA = Path(".var/app/com.valvesoftware.Steam/data/Steam")

# Checked in order; the first existing directory wins.
LINUX_STEAM_DIRS = (
    Path(".local/share/Steam"),
    Path(".local/share/steam"),
    Path(".steam/steam"),
)

WINDOWS_STEAM_DIR = Path(r"C:\Program Files (x86)\Steam")
WINDOWS_STEAM_EXE = WINDOWS_STEAM_DIR / "steam.exe"

MACOS_STEAM_DIR = Path("Library/Application Support/Steam")


def _first_existing_dir(home: Path, candidates: tuple[Path, ...]) -> Path | None:
    for candidate in candidates:
        path = home / candidate
        if path.exists() and path.is_dir():
            return path
    return None


def _require_native(kind: InstallKind) -> None:
    if kind is not InstallKind.NATIVE:
        raise ValueError(f"Cannot launch Steam for install kind: {kind.value}")


class LinuxSteamPlatform(SteamPlatform):
    """Steam on Linux, installed natively or as a Flatpak."""

    def has_native_steam(self) -> bool:
        return shutil.which(STEAM_EXECUTABLE) is not None

    def has_flatpak_steam(self) -> bool:
        """Check whether Flatpak lists the Steam app as installed.

        A missing flatpak binary or a failing ``flatpak list`` counts as
        not installed.
        """
        if shutil.which(FLATPAK_EXECUTABLE) is None:
            return False
        try:
            result = run_subprocess_with_context(
                [FLATPAK_EXECUTABLE, "list", "--app"],
                operation_context="list installed Flatpak apps",
            )
        except RuntimeError as e:
            logger.debug("Flatpak probe failed: %s", e)
            return False
        return any(FLATPAK_STEAM_ID in line for line in result.stdout.splitlines())

    def detect(self) -> InstallKind:
        if self.has_native_steam():
            logger.debug("Found native Steam on PATH")
            return InstallKind.NATIVE
        if self.has_flatpak_steam():
            logger.debug("Found Flatpak Steam")
            return InstallKind.SANDBOXED
        return InstallKind.NOT_FOUND

    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        if kind is InstallKind.NATIVE:
            return _first_existing_dir(home, LINUX_STEAM_DIRS)
        if kind is InstallKind.SANDBOXED:
            return home / FLATPAK_STEAM_DATA
        return None

    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        url = rungame_url(app_id)
        if kind is InstallKind.SANDBOXED:
            return [FLATPAK_EXECUTABLE, "run", FLATPAK_STEAM_ID, url]
        _require_native(kind)
        return [STEAM_EXECUTABLE, url]

    def launch(self, kind: InstallKind, app_id: str) -> None:
        spawn_detached(self.launch_command(kind, app_id), f"launch Steam app {app_id}")


class WindowsSteamPlatform(SteamPlatform):
    """Steam on Windows, installed in the default Program Files location."""

    def detect(self) -> InstallKind:
        if WINDOWS_STEAM_EXE.is_file():
            return InstallKind.NATIVE
        return InstallKind.NOT_FOUND

    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        if kind is InstallKind.NATIVE and WINDOWS_STEAM_DIR.is_dir():
            return WINDOWS_STEAM_DIR
        return None

    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        _require_native(kind)
        return [str(WINDOWS_STEAM_EXE), rungame_url(app_id)]

    def launch(self, kind: InstallKind, app_id: str) -> None:
        spawn_detached(self.launch_command(kind, app_id), f"launch Steam app {app_id}")


class MacSteamPlatform(SteamPlatform):
    """Steam on macOS."""

    def detect(self) -> InstallKind:
        if shutil.which(STEAM_EXECUTABLE) is not None:
            return InstallKind.NATIVE
        return InstallKind.NOT_FOUND

    def default_root(self, kind: InstallKind, home: Path) -> Path | None:
        if kind is not InstallKind.NATIVE:
            return None
        return _first_existing_dir(home, (MACOS_STEAM_DIR,))

    def launch_command(self, kind: InstallKind, app_id: str) -> list[str]:
        _require_native(kind)
        return [STEAM_EXECUTABLE, rungame_url(app_id)]

    def launch(self, kind: InstallKind, app_id: str) -> None:
        spawn_detached(self.launch_command(kind, app_id), f"launch Steam app {app_id}")


def select_platform(platform: str | None = None) -> SteamPlatform:
    """Pick the SteamPlatform for an OS identifier.

    Args:
        platform: A ``sys.platform`` value; defaults to the running OS

    Raises:
        ValueError: If the OS is not supported
    """
    name = sys.platform if platform is None else platform
    if name.startswith("linux"):
        return LinuxSteamPlatform()
    if name in ("win32", "cygwin"):
        return WindowsSteamPlatform()
    if name == "darwin":
        return MacSteamPlatform()
    raise ValueError(f"Unsupported platform: {name}")
