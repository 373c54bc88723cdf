"""Find the apps installed by a local Steam client, without talking to Steam."""
from .catalog import AssetKind, SteamAppCatalog
from .config import CatalogOptions
from .engines import Engine
from .errors import ManifestParseError, SteamLocatorError
from .libraries import Library, get_libraries
from .manifests import AppRecord
from .probe import find_steam_root

__all__ = [
    'AppRecord',
    'AssetKind',
    'CatalogOptions',
    'Engine',
    'Library',
    'ManifestParseError',
    'SteamAppCatalog',
    'SteamLocatorError',
    'find_steam_root',
    'get_libraries',
]
