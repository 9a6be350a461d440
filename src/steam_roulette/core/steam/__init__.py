from steam_roulette.core.steam.abc import InstallKind, SteamPlatform
from steam_roulette.core.steam.dry_run import DryRunSteamPlatform
from steam_roulette.core.steam.real import (
    LinuxSteamPlatform,
    MacSteamPlatform,
    WindowsSteamPlatform,
    select_platform,
)

__all__ = [
    "DryRunSteamPlatform",
    "InstallKind",
    "LinuxSteamPlatform",
    "MacSteamPlatform",
    "SteamPlatform",
    "WindowsSteamPlatform",
    "select_platform",
]
