from dataclasses import dataclass
from os import PathLike


@dataclass(frozen=True)
class CatalogOptions:
    """Construction-time settings for a SteamAppCatalog."""

    # Use this directory as the Steam root instead of probing the platform.
    steam_root: str | PathLike | None = None

    # Trust the embedded lists of known Source / Source 2 apps.
    seed_source_games: bool = True
    seed_source2_games: bool = True

    # Stop scanning every library when one manifest fails to parse,
    # keeping the apps collected so far. When False the broken manifest
    # is skipped and the scan carries on.
    abort_on_broken_manifest: bool = True
