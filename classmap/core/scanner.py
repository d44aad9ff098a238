"""
Depth-first source tree scanner that builds a class map.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Set

from .errors import ScanRootUnreadable
from .extractor import DECLARATION_KEYWORDS, extract_symbols
from .schema import SymbolTable, normalize_name


logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'


class Scanner:
    """Walks a directory tree and maps every declared symbol to its file"""

    def __init__(self,
                 extensions: Dict[str, bool],
                 ignore: Optional[Set[str]] = None,
                 cache_path: Optional[Path] = None,
                 keywords: Iterable[str] = DECLARATION_KEYWORDS,
                 on_file: Optional[Callable[[str], None]] = None):
        self.extensions = extensions
        self.ignore = ignore if ignore is not None else set()
        self.cache_path = Path(cache_path).resolve() if cache_path else None
        self.keywords = tuple(keywords)
        self.on_file = on_file
        self.files_scanned = 0

    def accepts(self, file_name: str) -> bool:
        """Check whether a file name has an allowed extension"""
        return self.extensions.get(Path(file_name).suffix, False) is True

    def rebuild(self, root: Path) -> SymbolTable:
        """Scan ``root`` and return a fresh class map"""
        root = Path(root)
        if not root.is_dir():
            raise ScanRootUnreadable(f"Scan root is not a directory: {root}")

        table: SymbolTable = {}
        self.files_scanned = 0
        logger.info(f"Scanning {root} for class declarations")
        self._scan_dir(root, root, table, is_root=True)
        logger.info(f"Scanned {self.files_scanned} files, found {len(table)} symbols")
        return table

    def _scan_dir(self, root: Path, directory: Path, table: SymbolTable, is_root: bool = False) -> None:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if is_root:
                raise ScanRootUnreadable(f"Unable to read scan root {directory}: {e}") from e
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            return

        for entry in entries:
            if entry.name.startswith(HIDDEN_PREFIX):
                continue

            path = Path(entry.path)
            relative = path.relative_to(root).as_posix()
            if relative in self.ignore:
                logger.debug(f"Ignoring {relative}")
                continue

            if entry.is_dir():
                self._scan_dir(root, path, table)
            elif entry.is_file() and self.accepts(entry.name) and not self._is_cache(path):
                self._scan_file(path, relative, table)

    def _is_cache(self, path: Path) -> bool:
        return self.cache_path is not None and path.resolve() == self.cache_path

    def _scan_file(self, path: Path, relative: str, table: SymbolTable) -> None:
        try:
            source = path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            logger.warning(f"Skipping unreadable file {path}: {e}")
            return

        self.files_scanned += 1
        if self.on_file:
            self.on_file(relative)

        for declaration in extract_symbols(source, self.keywords):
            key = normalize_name(declaration.name)
            previous = table.get(key)
            if previous is not None and previous != relative:
                logger.debug(f"{declaration.name} declared in {previous} and {relative}, keeping {relative}")
            table[key] = relative
