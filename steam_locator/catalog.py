"""
Catalog of the apps installed by the local Steam client.

All manifests are read once when the catalog is built. Afterwards queries are
plain lookups, except engine detection which may look at an app's files the
first time it is asked about.
"""
import enum
import logging
import os
from pathlib import Path
from typing import Iterator

from .config import CatalogOptions
from .engines import Engine, EngineClassifier
from .errors import ManifestParseError
from .libraries import Library, get_libraries
from .manifests import AppRecord, scan_library
from .probe import find_steam_root

logger = logging.getLogger(__name__)


class AssetKind(enum.Enum):
    """Artwork Steam caches per app, by file name suffix."""
    ICON = '_icon.jpg'
    LOGO = '_logo.png'
    BOX_ART = '_library_600x900.jpg'
    STORE_ART = '_header.jpg'


class SteamAppCatalog:
    # steam_root: Path | None
    # libraries: list[Library]
    # apps: dict[int, AppRecord]

    def __init__(self, steam_root: str | os.PathLike | None = None,
                 options: CatalogOptions | None = None):
        if options is None:
            options = CatalogOptions(steam_root=steam_root)
        elif steam_root is not None:
            raise ValueError("Pass steam_root either directly or in options, not both")
        self.options = options

        self.libraries: list[Library] = []
        self.apps: dict[int, AppRecord] = {}

        if options.steam_root is not None:
            self.steam_root = Path(options.steam_root)
        else:
            self.steam_root = find_steam_root()

        seeded = []
        if options.seed_source_games:
            seeded.append(Engine.SOURCE)
        if options.seed_source2_games:
            seeded.append(Engine.SOURCE2)
        self.engines = EngineClassifier(self.get_app_install_dir, seeded)

        if self.steam_root is not None:
            self._build()

    def _build(self):
        self.libraries = get_libraries(self.steam_root)

        skip_broken = not self.options.abort_on_broken_manifest

        try:
            for lib in self.libraries:
                for appid, record in scan_library(lib, skip_broken=skip_broken):
                    self.apps[appid] = record
        except ManifestParseError as e:
            # Keep whatever was collected before the broken manifest
            logger.warning(f"[Catalog] {e}, stopping scan with {len(self.apps)} apps")

        logger.info(f"[Catalog] {len(self.apps)} installed apps in {len(self.libraries)} libraries")

    # Catalog state

    @property
    def available(self) -> bool:
        return bool(self.apps)

    def __bool__(self):
        return self.available

    def __len__(self):
        return len(self.apps)

    def __contains__(self, appid):
        return appid in self.apps

    def __iter__(self) -> Iterator[int]:
        return iter(self.apps)

    @property
    def steam_install_dir(self) -> str:
        if self.steam_root is None:
            return ""
        return str(self.steam_root)

    @property
    def library_dirs(self) -> list[str]:
        return [str(lib) for lib in self.libraries]

    @property
    def sourcemods_dir(self) -> str:
        if self.steam_root is None:
            return ""
        return str(self.steam_root / 'steamapps' / 'sourcemods')

    # Per app queries

    def installed_apps(self, sort: bool = False, reverse: bool = False) -> list[int]:
        if sort:
            return sorted(self.apps, reverse=reverse)
        return list(self.apps)

    def is_app_installed(self, appid: int) -> bool:
        return appid in self.apps

    def get_app(self, appid: int) -> AppRecord | None:
        return self.apps.get(appid)

    def get_app_name(self, appid: int) -> str:
        record = self.apps.get(appid)
        if record is None:
            return ""
        return record.name

    def get_app_install_dir(self, appid: int) -> str:
        record = self.apps.get(appid)
        if record is None:
            return ""
        return str(self.libraries[record.library_index].install_dir(record.install_dir_name))

    def get_asset_path(self, appid: int, kind: AssetKind) -> str:
        """
        Path of a cached artwork file for an installed app.

        Returns:
            The path, or "" if the app is unknown or Steam has not cached
            that image
        """
        if self.steam_root is None or appid not in self.apps:
            return ""
        path = self.steam_root / 'appcache' / 'librarycache' / f"{appid}{kind.value}"
        if not path.exists():
            return ""
        return str(path)

    def get_app_icon_path(self, appid: int) -> str:
        return self.get_asset_path(appid, AssetKind.ICON)

    def get_app_logo_path(self, appid: int) -> str:
        return self.get_asset_path(appid, AssetKind.LOGO)

    def get_app_box_art_path(self, appid: int) -> str:
        return self.get_asset_path(appid, AssetKind.BOX_ART)

    def get_app_store_art_path(self, appid: int) -> str:
        return self.get_asset_path(appid, AssetKind.STORE_ART)

    def is_app_using_source_engine(self, appid: int) -> bool:
        return self.engines.is_source(appid)

    def is_app_using_source2_engine(self, appid: int) -> bool:
        return self.engines.is_source2(appid)

    def __repr__(self):
        return f"SteamAppCatalog({self.steam_install_dir!r}; {len(self.apps)} apps)"
