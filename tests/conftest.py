from __future__ import annotations

from pathlib import Path
import sys

import pytest
import vdf

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


def write_library_folders(steam_root: Path, paths: list) -> Path:
    """Write a libraryfolders.vdf declaring the given library paths in order."""
    folders = {str(i): {"path": str(path), "label": ""} for i, path in enumerate(paths)}
    vdf_path = steam_root / "steamapps" / "libraryfolders.vdf"
    vdf_path.parent.mkdir(parents=True, exist_ok=True)
    vdf_path.write_text(vdf.dumps({"libraryfolders": folders}, pretty=True), encoding="utf-8")
    return vdf_path


def write_manifest(library: Path, appid, name: str, installdir: str, install=True) -> Path:
    """Write appmanifest_<appid>.acf into <library>/steamapps."""
    steamapps = library / "steamapps"
    steamapps.mkdir(parents=True, exist_ok=True)
    manifest = steamapps / f"appmanifest_{appid}.acf"
    manifest.write_text(
        vdf.dumps({
            "AppState": {
                "appid": str(appid),
                "Universe": "1",
                "name": name,
                "StateFlags": "4",
                "installdir": installdir,
            }
        }, pretty=True),
        encoding="utf-8",
    )
    if install:
        (steamapps / "common" / installdir).mkdir(parents=True, exist_ok=True)
    return manifest


@pytest.fixture
def steam_root(tmp_path: Path) -> Path:
    root = tmp_path / "steam"
    (root / "steamapps").mkdir(parents=True)
    (root / "appcache" / "librarycache").mkdir(parents=True)
    return root


@pytest.fixture
def steam_app_factory(steam_root: Path):
    """
    Register apps in the main library of a fake Steam install.

    Call with (appid, name, installdir); returns the app's install directory.
    """
    write_library_folders(steam_root, [steam_root])

    def factory(appid, name, installdir=None):
        installdir = installdir or name
        write_manifest(steam_root, appid, name, installdir)
        return steam_root / "steamapps" / "common" / installdir

    return factory
