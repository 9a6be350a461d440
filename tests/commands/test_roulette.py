"""Tests for the steam-roulette command using fakes.

These tests build Steam libraries on disk under tmp_path and inject a
FakeSteamPlatform through the context, so nothing is ever launched.
"""

import logging
import random
from importlib.metadata import version
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from steam_roulette.cli.cli import cli
from steam_roulette.core.config import RouletteConfig
from steam_roulette.core.context import RouletteContext
from steam_roulette.core.steam.abc import InstallKind
from steam_roulette.core.steam.fake import FakeSteamPlatform
from tests.test_utils.steam_library import create_library, declare_library_folders


def _ctx(platform: FakeSteamPlatform, config: RouletteConfig | None = None) -> RouletteContext:
    return RouletteContext.for_test(platform=platform, rng=random.Random(7), config=config)


def test_dry_run_picks_only_real_game(tmp_path: Path) -> None:
    """Test that runtimes and tools are never picked and dry-run launches nothing."""
    steam_root = tmp_path / "Steam"
    create_library(
        steam_root,
        {"70": "Half-Life", "250820": "SteamVR", "1887720": "Proton 7.0"},
    )
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, ["-d", "-v"], obj=_ctx(platform))

    assert result.exit_code == 0, result.output
    assert 'Randomly launching "Half-Life"! Have fun!' in result.output
    assert "would run steam steam://rungameid/70" in result.output
    assert platform.launch_calls == []


def test_launches_selected_game(tmp_path: Path) -> None:
    """Test that a normal run launches the selected app id."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"70": "Half-Life"})
    platform = FakeSteamPlatform(kind=InstallKind.SANDBOXED, root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 0, result.output
    assert platform.launch_calls == [(InstallKind.SANDBOXED, "70")]


def test_quiet_by_default(tmp_path: Path) -> None:
    """Test that nothing is printed without -v."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"70": "Half-Life"})
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 0
    assert result.output == ""


def test_verbose_announces_launch(tmp_path: Path) -> None:
    """Test that -v announces the game before launching it."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"400": "Portal"})
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, ["--verbose"], obj=_ctx(platform))

    assert result.exit_code == 0
    assert 'Randomly launching "Portal"! Have fun!' in result.output
    assert "Dry-run mode" not in result.output
    assert platform.launch_calls == [(InstallKind.NATIVE, "400")]


def test_empty_catalog_is_not_an_error(tmp_path: Path) -> None:
    """Test that a library with nothing launchable exits cleanly."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"228980": "Steamworks Common Redistributables"})
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, ["-v"], obj=_ctx(platform))

    assert result.exit_code == 0
    assert "Nothing to launch. Install some games!" in result.output
    assert platform.launch_calls == []


def test_empty_catalog_quiet(tmp_path: Path) -> None:
    """Test that an empty catalog prints nothing without -v."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {})
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 0
    assert result.output == ""


def test_steam_not_installed_fails() -> None:
    """Test that a missing Steam install exits with an error."""
    platform = FakeSteamPlatform(kind=InstallKind.NOT_FOUND)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 1
    assert "Error: Couldn't find Steam. Please make sure it is installed." in result.output
    assert platform.launch_calls == []


def test_missing_data_directory_fails() -> None:
    """Test that an install without a data directory exits with an error."""
    platform = FakeSteamPlatform(root=None)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 1
    assert "data directory could not be found" in result.output


def test_launch_failure_exits_with_error(tmp_path: Path) -> None:
    """Test that a failed spawn is reported and exits 1."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"70": "Half-Life"})
    platform = FakeSteamPlatform(
        root=steam_root,
        launch_error="Failed to launch Steam app 70\nCommand: steam steam://rungameid/70",
    )

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 1
    assert "Error: Failed to launch Steam app 70" in result.output


def test_warnings_shown_only_when_verbose(tmp_path: Path) -> None:
    """Test that scan warnings are printed under -v and hidden otherwise."""
    steam_root = tmp_path / "Steam"
    apps_dir = create_library(steam_root, {"70": "Half-Life"})
    declare_library_folders(apps_dir, [tmp_path / "unplugged-drive"])
    runner = CliRunner()

    quiet = runner.invoke(cli, [], obj=_ctx(FakeSteamPlatform(root=steam_root)))
    verbose = runner.invoke(cli, ["-v"], obj=_ctx(FakeSteamPlatform(root=steam_root)))

    assert quiet.exit_code == 0
    assert "Warning:" not in quiet.output
    assert verbose.exit_code == 0
    assert "Warning: Could not read library folder" in verbose.output
    assert "unplugged-drive" in verbose.output


def test_games_from_secondary_library_are_launched(tmp_path: Path) -> None:
    """Test that libraries listed in libraryfolders.vdf are part of the draw."""
    steam_root = tmp_path / "Steam"
    extra_root = tmp_path / "SteamLibrary"
    apps_dir = create_library(steam_root, {"1070560": "Steam Linux Runtime"})
    create_library(extra_root, {"620": "Portal 2"})
    declare_library_folders(apps_dir, [steam_root, extra_root])
    platform = FakeSteamPlatform(root=steam_root)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform))

    assert result.exit_code == 0, result.output
    assert platform.launch_calls == [(InstallKind.NATIVE, "620")]


def test_config_steam_dir_overrides_detected_root(tmp_path: Path) -> None:
    """Test that a configured steam_dir replaces the platform's default root."""
    detected_root = tmp_path / "Detected"
    configured_root = tmp_path / "Configured"
    create_library(detected_root, {"70": "Half-Life"})
    create_library(configured_root, {"400": "Portal"})
    platform = FakeSteamPlatform(root=detected_root)
    config = RouletteConfig(steam_dir=configured_root)

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform, config))

    assert result.exit_code == 0, result.output
    assert platform.launch_calls == [(InstallKind.NATIVE, "400")]


def test_config_steam_dir_used_when_platform_has_no_root(tmp_path: Path) -> None:
    """Test that a configured steam_dir rescues a missing data directory."""
    configured_root = tmp_path / "Configured"
    create_library(configured_root, {"400": "Portal"})
    platform = FakeSteamPlatform(root=None)

    runner = CliRunner()
    result = runner.invoke(
        cli, [], obj=_ctx(platform, RouletteConfig(steam_dir=configured_root))
    )

    assert result.exit_code == 0, result.output
    assert platform.launch_calls == [(InstallKind.NATIVE, "400")]


def test_config_excluded_names_are_never_picked(tmp_path: Path) -> None:
    """Test that user exclusions apply on top of the built-in ones."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"70": "Half-Life", "431960": "Wallpaper Engine"})
    platform = FakeSteamPlatform(root=steam_root)
    config = RouletteConfig(excluded_names=frozenset({"Wallpaper Engine"}))
    runner = CliRunner()

    for seed in range(10):
        ctx = RouletteContext.for_test(
            platform=platform, rng=random.Random(seed), config=config
        )
        result = runner.invoke(cli, [], obj=ctx)
        assert result.exit_code == 0, result.output

    assert {app_id for _, app_id in platform.launch_calls} == {"70"}


def test_config_library_folders_are_scanned(tmp_path: Path) -> None:
    """Test that configured extra libraries are part of the draw."""
    steam_root = tmp_path / "Steam"
    extra_root = tmp_path / "External"
    create_library(steam_root, {})
    create_library(extra_root, {"620": "Portal 2"})
    platform = FakeSteamPlatform(root=steam_root)
    config = RouletteConfig(library_folders=(extra_root,))

    runner = CliRunner()
    result = runner.invoke(cli, [], obj=_ctx(platform, config))

    assert result.exit_code == 0, result.output
    assert platform.launch_calls == [(InstallKind.NATIVE, "620")]


def test_help_lists_options() -> None:
    """Test that -h shows the supported flags."""
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "--verbose" in result.output
    assert "--dry-run" in result.output
    assert "--version" in result.output


def test_unknown_option_is_usage_error() -> None:
    """Test that unknown flags are rejected by the parser."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--bogus"])

    assert result.exit_code == 2
    assert "No such option" in result.output


def test_invalid_config_exits_with_error(tmp_path: Path) -> None:
    """Test that a broken config file is reported and exits 1."""
    config_dir = tmp_path / ".steam-roulette"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("steam_dir = \n", encoding="utf-8")

    runner = CliRunner()
    with (
        patch("steam_roulette.core.context.Path.home", return_value=tmp_path),
        patch("steam_roulette.core.steam.real.sys.platform", "linux"),
    ):
        result = runner.invoke(cli, [])

    assert result.exit_code == 1
    assert "Error: Invalid TOML" in result.output


def test_double_verbose_enables_debug_logging(tmp_path: Path) -> None:
    """Test that -vv configures debug logging and -v does not."""
    steam_root = tmp_path / "Steam"
    create_library(steam_root, {"70": "Half-Life"})
    runner = CliRunner()

    with patch("steam_roulette.cli.cli.logging.basicConfig") as mock_config:
        once = runner.invoke(cli, ["-v"], obj=_ctx(FakeSteamPlatform(root=steam_root)))
        assert once.exit_code == 0, once.output
        mock_config.assert_not_called()

        twice = runner.invoke(cli, ["-vv"], obj=_ctx(FakeSteamPlatform(root=steam_root)))

    assert twice.exit_code == 0, twice.output
    mock_config.assert_called_once_with(
        level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s"
    )


def test_version_option() -> None:
    """Test that --version prints the installed package version."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"steam-roulette, version {version('steam-roulette')}" in result.output
