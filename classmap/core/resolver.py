"""
Class map resolver.

Maps a requested class name to its defining file and asks the host runtime
to load it. The map comes from the cache artifact when possible; a miss
triggers at most one full rescan per resolver lifetime, which bounds the cost
of lookups for names that genuinely do not exist.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Set, TYPE_CHECKING, Union

from .cache_store import CacheStore
from .errors import AutoloadError, CacheUnavailable, RebuildNotAllowed
from .runtime import AutoloaderChain, HostRuntime
from .scanner import Scanner
from .schema import RebuildState, SymbolTable, normalize_name

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from classmap.config import ResolverConfig


logger = logging.getLogger(__name__)


class ClassMapResolver:
    """Resolves class names to source files and loads them on demand"""

    def __init__(self,
                 config: ResolverConfig,
                 runtime: HostRuntime,
                 cache_store: Optional[CacheStore] = None,
                 scanner: Optional[Scanner] = None):
        self.config = config
        self.root = Path(config.root)
        self.runtime = runtime
        self.cache_store = cache_store or CacheStore(self.root, config.cache_filename)
        self.ignored: Set[str] = set()
        for path in config.ignore:
            self.ignore(path)
        if scanner is not None:
            self.ignored.update(scanner.ignore)
            scanner.ignore = self.ignored
        self.scanner = scanner or Scanner(
            extensions=config.extensions,
            ignore=self.ignored,
            cache_path=self.cache_store.location,
            keywords=config.keywords,
        )
        self.state = RebuildState.NOT_REBUILT
        self._class_map: SymbolTable = {}
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> "ClassMapResolver":
        """Load the class map from cache, rebuilding it if the cache is unusable"""
        self._initialized = True
        try:
            self._class_map = self.cache_store.load()
        except CacheUnavailable as e:
            logger.info(f"{e}, rebuilding class map")
            try:
                self.rebuild()
            except RebuildNotAllowed:
                logger.warning("Class map cache unavailable and rebuilding is disabled")
                self._class_map = {}
        return self

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.init()

    def register(self, chain: AutoloaderChain, prepend: bool = False) -> "ClassMapResolver":
        """Register this resolver as a fallback with the host dispatch chain"""
        chain.register(self.autoload, prepend=prepend)
        return self

    # ------------------------------------------------------------------
    # Class map management
    # ------------------------------------------------------------------

    @property
    def rebuilt(self) -> bool:
        return self.state is RebuildState.REBUILT

    @property
    def cache_location(self) -> Path:
        return self.cache_store.location

    @property
    def class_map(self) -> SymbolTable:
        self._ensure_initialized()
        return dict(self._class_map)

    def set_class_map(self, class_map: SymbolTable) -> None:
        self._initialized = True
        self._class_map = dict(class_map)

    def ignore(self, path: Union[str, Path]) -> "ClassMapResolver":
        """Exclude a path from the next rebuild"""
        path = Path(path)
        if path.is_absolute():
            try:
                path = path.relative_to(self.root)
            except ValueError:
                logger.warning(f"Ignored path {path} is outside {self.root}, skipping")
                return self
        self.ignored.add(path.as_posix())
        return self

    def rebuild(self) -> SymbolTable:
        """Rescan the source tree; allowed once per resolver"""
        if not self.config.rebuild_allowed or self.state is RebuildState.REBUILT:
            raise RebuildNotAllowed("Unable to rebuild class map")

        self._initialized = True
        self._class_map = {}
        self._class_map = self.scanner.rebuild(self.root)
        self.state = RebuildState.REBUILT
        try:
            self.cache_store.save(self._class_map)
        except OSError as e:
            logger.warning(f"Unable to write cache file {self.cache_location}: {e}")
        return dict(self._class_map)

    def expire_cache(self) -> None:
        self.cache_store.invalidate()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_file(self, name: str) -> Optional[Path]:
        """Return the absolute path that defines ``name``, without loading it"""
        self._ensure_initialized()
        relative = self._class_map.get(normalize_name(name))
        if relative is None:
            return None
        return self.root / relative

    def resolve(self, name: str) -> bool:
        """
        Make ``name`` available to the host runtime.

        Returns False when the name is unknown or its file could not be
        loaded; load errors are never propagated.
        """
        self._ensure_initialized()
        key = normalize_name(name)
        if self.runtime.is_loaded(key):
            return True

        relative = self._class_map.get(key)
        if relative is None:
            return False

        path = self.root / relative
        try:
            return bool(self.runtime.load_file(path))
        except Exception as e:
            logger.warning(f"Failed to load {path} for {name}: {e}")
            return False

    def autoload(self, name: str) -> bool:
        """Dispatch hook entry point: resolve, rebuilding once on a miss"""
        try:
            if self.resolve(name):
                return True
            self.rebuild()
            return self.resolve(name)
        except RebuildNotAllowed:
            return False
        except AutoloadError as e:
            logger.error(f"Autoload of {name} failed: {e}")
            return False
