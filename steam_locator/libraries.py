import logging
from pathlib import Path

import vdf

logger = logging.getLogger(__name__)

LIBRARY_FOLDERS_VDF = 'libraryfolders.vdf'

# Siblings of the numbered library blocks in older libraryfolders.vdf files.
NON_LIBRARY_KEYS = ('TimeNextStatsReport', 'ContentStatsID')


class Library:
    # index: int
    # steamapps: Path
    # common: Path

    def __init__(self, index: int, basepath: Path):
        self.index = index
        self.steamapps = Path(basepath) / 'steamapps'
        self.common = self.steamapps / 'common'

    def exists(self) -> bool:
        return self.steamapps.is_dir()

    def install_dir(self, install_dir_name: str) -> Path:
        return self.common / install_dir_name

    def __str__(self):
        return str(self.steamapps)

    def __repr__(self):
        return f"Library({self.index=}; {self.steamapps=})"


def get_key(block: dict, key: str):
    """Case-insensitive lookup of a key in a parsed KeyValues block."""
    if key in block:
        return block[key]
    folded = key.casefold()
    for name, value in block.items():
        if name.casefold() == folded:
            return value
    return None


def unescape_path(value: str) -> str:
    """Collapse the doubled backslashes Steam writes into Windows paths."""
    return value.replace('\\\\', '\\')


def parse_library_folders(text: str) -> list[Library]:
    try:
        data = vdf.loads(text, escaped=False)
    except SyntaxError as e:
        logger.warning(f"[Libraries] Could not parse {LIBRARY_FOLDERS_VDF}: {e}")
        return []

    folders = data.get('libraryfolders')
    if not isinstance(folders, dict):
        return []

    libraries = []
    for key, folder in folders.items():
        if key in NON_LIBRARY_KEYS:
            continue
        if not isinstance(folder, dict):
            # Pre-2021 files stored the path as a bare string; not supported.
            logger.debug(f"[Libraries] Skipping legacy library entry {key!r}")
            continue

        path = get_key(folder, 'path')
        if not isinstance(path, str):
            continue

        libraries.append(Library(len(libraries), Path(unescape_path(path))))
    return libraries


def get_libraries(steam_root: Path) -> list[Library]:
    """
    Read the library folders registered with a Steam install.

    Every declared library is returned in file order, including ones whose
    directory is currently missing.
    """
    libvdf = Path(steam_root) / 'steamapps' / LIBRARY_FOLDERS_VDF
    try:
        text = libvdf.read_text(encoding='utf-8')
    except FileNotFoundError:
        logger.debug(f"[Libraries] {libvdf} does not exist")
        return []
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"[Libraries] Could not read {libvdf}: {e}")
        return []

    libs = parse_library_folders(text)
    logger.debug(f"[Libraries] Found {len(libs)} libraries: {[str(lib) for lib in libs]}")
    return libs
