"""
Detect which Valve engine an installed app is built on.

Source games keep a gameinfo.txt in a mod directory directly below the
install directory (hl2/, tf/, ...). Source 2 games keep a gameinfo.gi either
at that depth or one level further down (game/core/, game/dota/, ...).
"""
import enum
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterable, Iterator

from . import known_engines

logger = logging.getLogger(__name__)


class Engine(enum.Enum):
    SOURCE = 'source'
    SOURCE2 = 'source2'


def _subdirectories(path: Path) -> Iterator[Path]:
    """Immediate subdirectories of path, skipping anything we may not read."""
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"[Engines] Cannot list {path}: {e}")
        return

    for entry in entries:
        try:
            if entry.is_dir():
                yield Path(entry.path)
        except OSError:
            continue


def uses_source_engine(install_dir: Path) -> bool:
    return any(os.path.exists(sub / 'gameinfo.txt') for sub in _subdirectories(install_dir))


def uses_source2_engine(install_dir: Path) -> bool:
    for sub in _subdirectories(install_dir):
        if os.path.exists(sub / 'gameinfo.gi'):
            return True
        if any(os.path.exists(inner / 'gameinfo.gi') for inner in _subdirectories(sub)):
            return True
    return False


DETECTORS = {
    Engine.SOURCE: uses_source_engine,
    Engine.SOURCE2: uses_source2_engine,
}


def seed_apps(engine: Engine) -> frozenset:
    if engine is Engine.SOURCE:
        return known_engines.SOURCE_APPS
    if engine is Engine.SOURCE2:
        return known_engines.SOURCE2_APPS
    return frozenset()


class EngineClassifier:
    """
    Answers engine questions for apps and remembers the answers.

    Known positives (seeded or learned) answer True and known negatives answer
    False without touching the disk. Misses resolve the app's install
    directory and run the detector for that engine. The caches live as long
    as the classifier and are never invalidated.
    """

    def __init__(self, resolve_install_dir: Callable[[int], str], seeded: Iterable[Engine] = ()):
        self._resolve_install_dir = resolve_install_dir
        self._lock = threading.Lock()
        self._known_is = {engine: set() for engine in Engine}
        self._known_is_not = {engine: set() for engine in Engine}
        for engine in seeded:
            self._known_is[engine].update(seed_apps(engine))

    def _cached(self, engine: Engine, appid: int) -> bool | None:
        with self._lock:
            if appid in self._known_is[engine]:
                return True
            if appid in self._known_is_not[engine]:
                return False
        return None

    def _remember(self, engine: Engine, appid: int, result: bool):
        with self._lock:
            if result:
                self._known_is[engine].add(appid)
            else:
                self._known_is_not[engine].add(appid)

    def uses_engine(self, appid: int, engine: Engine) -> bool:
        cached = self._cached(engine, appid)
        if cached is not None:
            logger.debug(f"[Engines] Cache hit for {appid} ({engine.value}): {cached}")
            return cached

        install_dir = self._resolve_install_dir(appid)
        if not install_dir or not os.path.isdir(install_dir):
            result = False
        else:
            result = DETECTORS[engine](Path(install_dir))

        logger.debug(f"[Engines] {appid} uses {engine.value}: {result}")
        self._remember(engine, appid, result)
        return result

    def is_source(self, appid: int) -> bool:
        return self.uses_engine(appid, Engine.SOURCE)

    def is_source2(self, appid: int) -> bool:
        return self.uses_engine(appid, Engine.SOURCE2)
