"""Random game selection."""

import random
from collections.abc import Sequence

from steam_roulette.core.types import GameEntry

STEAM_RUN_URL_TEMPLATE = "steam://rungameid/{app_id}"


def rungame_url(app_id: str) -> str:
    """Build the URL that tells the Steam client to start an app."""
    return STEAM_RUN_URL_TEMPLATE.format(app_id=app_id)


def choose_game(games: Sequence[GameEntry], rng: random.Random) -> GameEntry | None:
    """Pick one game uniformly at random, or None if there are none."""
    if not games:
        return None
    return rng.choice(games)
