"""Rules for apps that show up in steamapps but are not games."""

from collections.abc import Iterable

# Tools and runtimes Steam installs alongside games.
EXCLUDED_NAMES = frozenset(
    {
        "Steamworks Common Redistributables",
        "SteamVR",
        "Proton Experimental",
    }
)

# Downloaded albums
SOUNDTRACK_SUFFIX = "Soundtrack"

PROTON_PREFIX = "Proton"
STEAM_RUNTIME_PREFIX = "Steam Linux Runtime"


def _parse_version(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return 0.0


def is_proton_runtime(name: str) -> bool:
    """Return True for versioned Proton installs such as "Proton 7.0".

    The name only has to start with "Proton"; the second word must parse as
    a non-zero number, so "Proton 0" and "Proton Hotfix" are not matched by
    this rule.
    """
    if not name.startswith(PROTON_PREFIX):
        return False
    words = name.split()
    if len(words) < 2:
        return False
    return _parse_version(words[1]) != 0.0


def is_excluded(name: str, extra_names: Iterable[str] = ()) -> bool:
    """Return True if an app with this display name should never be launched.

    Blank names are excluded too: a manifest without a readable name is not
    something we can show the user.

    Args:
        name: Display name from the app manifest
        extra_names: Additional exact names to exclude (from user config)
    """
    if not name.strip():
        return True
    if name in EXCLUDED_NAMES or name in set(extra_names):
        return True
    return (
        name.endswith(SOUNDTRACK_SUFFIX)
        or is_proton_runtime(name)
        or name.startswith(STEAM_RUNTIME_PREFIX)
    )
