import logging

import click

from steam_roulette.cli.ensure import Ensure
from steam_roulette.cli.output import machine_output, user_output, warning_output
from steam_roulette.core.context import RouletteContext, create_context
from steam_roulette.core.library import discover_catalog
from steam_roulette.core.selection import choose_game
from steam_roulette.core.steam.abc import InstallKind

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_LOG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


def _enable_debug_logging() -> None:
    logging.basicConfig(level=logging.DEBUG, format=DEBUG_LOG_FORMAT)


def run_roulette(ctx: RouletteContext, *, verbose: int) -> None:
    """Discover installed games, pick one at random and launch it."""
    kind = ctx.platform.detect()
    logger.debug("Detected Steam install kind: %s", kind.value)
    Ensure.invariant(
        kind is not InstallKind.NOT_FOUND,
        "Couldn't find Steam. Please make sure it is installed.",
    )

    default_root = ctx.config.steam_dir or ctx.platform.default_root(kind, ctx.home)
    default_root = Ensure.not_none(
        default_root,
        "Steam is installed but its data directory could not be found.",
    )
    logger.debug("Default library root: %s", default_root)

    catalog = discover_catalog(
        default_root,
        configured_roots=ctx.config.library_folders,
        extra_excluded=ctx.config.excluded_names,
    )
    if verbose > 0:
        for warning in catalog.warnings:
            warning_output(warning)

    game = choose_game(catalog.games, ctx.rng)
    if game is None:
        if verbose > 0:
            machine_output("Nothing to launch. Install some games!")
        return

    if verbose > 0:
        machine_output(f'Randomly launching "{game.name}"! Have fun!')

    if ctx.dry_run and verbose > 0:
        command = " ".join(ctx.platform.launch_command(kind, game.app_id))
        user_output(click.style("Dry-run mode:", fg="cyan", bold=True) + f" would run {command}")

    try:
        ctx.platform.launch(kind, game.app_id)
    except RuntimeError as e:
        Ensure.fail(str(e))


@click.command("steam-roulette", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="steam-roulette")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Show program output (game launched, warnings). Repeat for debug logging.",
)
@click.option(
    "-d",
    "--dry-run",
    is_flag=True,
    help="Pick a game but don't actually launch it.",
)
@click.pass_context
def cli(click_ctx: click.Context, verbose: int, dry_run: bool) -> None:
    """Randomly pick an installed game from your Steam library and launch it."""
    if verbose > 1:
        _enable_debug_logging()

    # Only create context if not already provided (e.g., by tests)
    if click_ctx.obj is None:
        try:
            click_ctx.obj = create_context(dry_run=dry_run)
        except ValueError as e:
            Ensure.fail(str(e))

    ctx: RouletteContext = click_ctx.obj
    if dry_run:
        ctx = ctx.with_dry_run()

    run_roulette(ctx, verbose=verbose)


def main() -> None:
    """CLI entry point used by the `steam-roulette` console script."""
    cli()
