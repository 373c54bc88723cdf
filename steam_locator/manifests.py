import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import vdf

from .errors import ManifestParseError
from .libraries import Library, get_key

logger = logging.getLogger(__name__)

MANIFEST_PREFIX = 'appmanifest_'
MANIFEST_SUFFIX = '.acf'

MAX_APPID = 2 ** 32 - 1


@dataclass(frozen=True)
class AppRecord:
    """
    One installed app, as recorded in its manifest.

    install_dir_name is the leaf directory under <library>/common, the
    absolute path is built from the library when it is asked for.
    """
    name: str
    install_dir_name: str
    library_index: int


def is_manifest_name(filename: str) -> bool:
    return filename.startswith(MANIFEST_PREFIX) and filename.endswith(MANIFEST_SUFFIX)


def parse_appid(value: str) -> int | None:
    if not (value.isascii() and value.isdigit()):
        return None
    appid = int(value)
    if appid > MAX_APPID:
        return None
    return appid


def parse_manifest(text: str, path: Path, library_index: int) -> tuple[int, AppRecord] | None:
    """
    Extract the app id, name and install directory from manifest text.

    Returns None when a required field is missing, empty or malformed.

    Raises:
        ManifestParseError: text is not valid KeyValues
    """
    try:
        data = vdf.loads(text, escaped=False)
    except SyntaxError as e:
        raise ManifestParseError(path, str(e)) from e

    app_state = data.get('AppState')
    if not isinstance(app_state, dict):
        logger.debug(f"[Manifests] {path} has no AppState block")
        return None

    fields = {}
    for key in ('name', 'installdir', 'appid'):
        value = get_key(app_state, key)
        if not isinstance(value, str) or not value:
            logger.debug(f"[Manifests] {path} is missing {key}")
            return None
        fields[key] = value

    appid = parse_appid(fields['appid'])
    if appid is None:
        logger.debug(f"[Manifests] {path} has invalid appid {fields['appid']!r}")
        return None

    return appid, AppRecord(
        name=fields['name'],
        install_dir_name=fields['installdir'],
        library_index=library_index,
    )


def _manifest_paths(library: Library) -> list[Path]:
    try:
        with os.scandir(library.steamapps) as it:
            names = sorted(entry.name for entry in it if is_manifest_name(entry.name))
    except OSError as e:
        # Missing library, or permission denied on the library itself
        logger.debug(f"[Manifests] Skipping library {library}: {e}")
        return []
    return [library.steamapps / name for name in names]


def scan_library(library: Library, skip_broken: bool = False) -> Iterator[tuple[int, AppRecord]]:
    """
    Yield (appid, record) for every usable manifest in a library.

    Unreadable manifests and manifests lacking required fields are skipped.
    Manifests that are not valid KeyValues are skipped too when skip_broken
    is set.

    Raises:
        ManifestParseError: a manifest is not valid KeyValues and skip_broken
            is not set
    """
    for path in _manifest_paths(library):
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"[Manifests] Could not read {path}: {e}")
            continue

        try:
            result = parse_manifest(text, path, library.index)
        except ManifestParseError as e:
            if not skip_broken:
                raise
            logger.warning(f"[Manifests] {e}, skipping it")
            continue

        if result is not None:
            yield result
