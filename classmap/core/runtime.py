"""
Host-side collaborators of the resolver.

``HostRuntime`` is what actually makes a resolved file available to the
running process; ``AutoloaderChain`` is the ordered list of fallback
resolvers the host consults when a name is unknown.
"""

import logging
from pathlib import Path
from typing import Callable, List, Protocol, Set

from .errors import LoadFailure
from .extractor import DECLARATION_KEYWORDS, extract_symbols
from .schema import normalize_name


logger = logging.getLogger(__name__)

AutoloadFunction = Callable[[str], bool]


class HostRuntime(Protocol):
    """Interface of the host's load mechanism"""

    def is_loaded(self, name: str) -> bool:
        """Return True if the (normalized) symbol is already available"""

    def load_file(self, path: Path) -> bool:
        """Load a source file into the running process"""


class IncludeRuntime:
    """
    Include-style host runtime.

    Loading a file reads it and registers every symbol it declares, the way
    an ``include`` makes a file's classes known to the interpreter.
    """

    def __init__(self, keywords=DECLARATION_KEYWORDS):
        self.keywords = tuple(keywords)
        self.loaded_symbols: Set[str] = set()
        self.included_files: List[Path] = []

    def is_loaded(self, name: str) -> bool:
        return normalize_name(name) in self.loaded_symbols

    def load_file(self, path: Path) -> bool:
        path = Path(path)
        try:
            source = path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            raise LoadFailure(f"Unable to include {path}: {e}") from e

        declared = {normalize_name(d.name) for d in extract_symbols(source, self.keywords)}
        self.loaded_symbols.update(declared)
        self.included_files.append(path)
        logger.debug(f"Included {path} ({len(declared)} symbols)")
        return True


class AutoloaderChain:
    """Ordered fallback resolvers, consulted until one succeeds"""

    def __init__(self):
        self._autoloaders: List[AutoloadFunction] = []

    def __len__(self) -> int:
        return len(self._autoloaders)

    def __contains__(self, autoloader: AutoloadFunction) -> bool:
        return autoloader in self._autoloaders

    def register(self, autoloader: AutoloadFunction, prepend: bool = False) -> None:
        """Add an autoloader; registering the same one twice is a no-op"""
        if autoloader in self._autoloaders:
            return
        if prepend:
            self._autoloaders.insert(0, autoloader)
        else:
            self._autoloaders.append(autoloader)

    def unregister(self, autoloader: AutoloadFunction) -> bool:
        if autoloader not in self._autoloaders:
            return False
        self._autoloaders.remove(autoloader)
        return True

    def dispatch(self, name: str) -> bool:
        """Try every autoloader in order; False means still unresolved"""
        for autoloader in list(self._autoloaders):
            if autoloader(name):
                return True
        logger.debug(f"No autoloader resolved {name}")
        return False
