"""
Locate the Steam install directory on Windows, macOS and Linux.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

REG_STEAM = r"SOFTWARE\Valve\Steam"
REG_INSTALL_PATH = "InstallPath"

PROC_DIR = Path("/proc")
STEAM_CLIENT_DLL = "steamclient64.dll"


def _linux_candidates(home: Path) -> list[Path]:
    return [
        home / 'snap' / 'steam' / 'common' / '.steam' / 'steam',  # Snap package
        home / '.steam' / 'steam',
    ]


def _get_steam_root_from_registry() -> Path | None:
    """Read InstallPath from the 32-bit view of HKLM\\SOFTWARE\\Valve\\Steam."""
    import winreg

    access = winreg.KEY_QUERY_VALUE | winreg.KEY_WOW64_32KEY
    try:
        with winreg.OpenKeyEx(winreg.HKEY_LOCAL_MACHINE, REG_STEAM, 0, access) as key:
            value, _ = winreg.QueryValueEx(key, REG_INSTALL_PATH)
    except OSError as e:
        logger.debug(f"[Probe] Steam registry key unavailable: {e}")
        return None

    if not value:
        return None
    return Path(value)


def _get_steam_root_from_proc(proc_dir: Path) -> Path | None:
    """
    Find a running process whose working directory holds the Steam client.

    Entries we are not allowed to inspect, and processes that exit while we
    look at them, are skipped.
    """
    try:
        pids = sorted((name for name in os.listdir(proc_dir) if name.isdigit()), key=int)
    except OSError as e:
        logger.debug(f"[Probe] Cannot list {proc_dir}: {e}")
        return None

    for pid in pids:
        try:
            cwd = os.readlink(proc_dir / pid / 'cwd')
        except OSError:
            continue
        if os.path.exists(os.path.join(cwd, STEAM_CLIENT_DLL)):
            logger.debug(f"[Probe] Process {pid} runs from Steam directory {cwd}")
            return Path(cwd)
    return None


def find_steam_root() -> Path | None:
    """
    Resolve the Steam root directory for the current platform.

    Returns:
        Path to the Steam install, or None if Steam could not be found
    """
    if sys.platform == "win32":
        root = _get_steam_root_from_registry()
    elif sys.platform == "darwin":
        root = Path.home() / 'Library' / 'Application Support' / 'Steam'
        if not root.is_dir():
            root = None
    else:
        root = None
        for candidate in _linux_candidates(Path.home()):
            if candidate.exists():
                root = candidate
                break
        if root is None:
            root = _get_steam_root_from_proc(PROC_DIR)

    if root is None:
        logger.info("[Probe] Steam installation not found")
    else:
        logger.info(f"[Probe] Found Steam at {root}")
    return root
