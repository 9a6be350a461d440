"""Application context with dependency injection."""

import random
from dataclasses import dataclass, replace
from pathlib import Path

from steam_roulette.core.config import RouletteConfig, default_config_path, load_config
from steam_roulette.core.steam.abc import SteamPlatform
from steam_roulette.core.steam.dry_run import DryRunSteamPlatform
from steam_roulette.core.steam.real import select_platform


@dataclass(frozen=True)
class RouletteContext:
    """Immutable context holding all dependencies for a run.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    platform: SteamPlatform
    rng: random.Random
    home: Path
    config: RouletteConfig
    dry_run: bool

    def with_dry_run(self) -> "RouletteContext":
        """Return a copy whose platform never launches anything."""
        if self.dry_run:
            return self
        return replace(self, platform=DryRunSteamPlatform(self.platform), dry_run=True)

    @staticmethod
    def for_test(
        platform: SteamPlatform | None = None,
        rng: random.Random | None = None,
        home: Path | None = None,
        config: RouletteConfig | None = None,
        dry_run: bool = False,
    ) -> "RouletteContext":
        """Create test context with optional pre-configured dependencies.

        Args:
            platform: Optional SteamPlatform. If None, creates a FakeSteamPlatform
                with a native install and no data directory.
            rng: Optional random generator. If None, uses Random(0).
            home: Optional home directory. If None, uses Path("/test/home").
            config: Optional RouletteConfig. If None, uses defaults.
            dry_run: Whether to enable dry-run mode (default False).

        Returns:
            RouletteContext configured with provided values and test defaults
        """
        from steam_roulette.core.steam.fake import FakeSteamPlatform

        if platform is None:
            platform = FakeSteamPlatform()
        if dry_run:
            platform = DryRunSteamPlatform(platform)

        return RouletteContext(
            platform=platform,
            rng=rng if rng is not None else random.Random(0),
            home=home if home is not None else Path("/test/home"),
            config=config if config is not None else RouletteConfig(),
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool) -> RouletteContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap the platform so that nothing is launched

    Returns:
        RouletteContext with the platform for the running OS

    Raises:
        ValueError: If the OS is unsupported or the user config is invalid
    """
    home = Path.home()
    platform = select_platform()
    if dry_run:
        platform = DryRunSteamPlatform(platform)

    return RouletteContext(
        platform=platform,
        rng=random.Random(),
        home=home,
        config=load_config(default_config_path(home)),
        dry_run=dry_run,
    )
