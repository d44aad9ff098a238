"""
Persistence of the class map to a JSON cache artifact.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from .errors import CacheUnavailable
from .schema import SymbolTable


logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILENAME = '.classmapcache.json'
CACHE_GENERATOR = 'classmap'
CACHE_VERSION = 1
CACHE_FILE_MODE = 0o664


class CacheStore:
    """Reads and writes the class map cache under the scan root"""

    def __init__(self, root: Path, filename: str = DEFAULT_CACHE_FILENAME):
        self.root = Path(root)
        self.filename = filename

    @property
    def location(self) -> Path:
        return self.root / self.filename

    def exists(self) -> bool:
        return self.location.is_file()

    def save(self, table: SymbolTable) -> None:
        """Write the class map, replacing any existing artifact in one step"""
        document = {
            'generator': CACHE_GENERATOR,
            'version': CACHE_VERSION,
            'generated_at': datetime.now(timezone.utc).isoformat(),
            'classes': dict(sorted(table.items())),
        }

        fd, tmp_name = tempfile.mkstemp(prefix=self.filename, suffix='.tmp', dir=str(self.root))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2)
            os.chmod(tmp_name, CACHE_FILE_MODE)
            os.replace(tmp_name, self.location)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info(f"Saved {len(table)} symbols to {self.location}")

    def load(self) -> SymbolTable:
        """Read the class map back, or raise CacheUnavailable"""
        if not self.location.is_file():
            raise CacheUnavailable(f"Unable to load cache file {self.location}")

        try:
            with open(self.location, encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise CacheUnavailable(f"Unable to load cache file {self.location}: {e}") from e

        if not isinstance(document, dict):
            raise CacheUnavailable(f"Cache file {self.location} is not a JSON object")
        if document.get('generator') != CACHE_GENERATOR or document.get('version') != CACHE_VERSION:
            raise CacheUnavailable(f"Cache file {self.location} has an unknown format")

        classes = document.get('classes')
        if not isinstance(classes, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in classes.items()
        ):
            raise CacheUnavailable(f"Cache file {self.location} has a malformed class map")

        logger.info(f"Loaded {len(classes)} symbols from {self.location}")
        return dict(classes)

    def invalidate(self) -> None:
        """Delete the cache artifact if it exists"""
        try:
            self.location.unlink()
            logger.info(f"Expired cache {self.location}")
        except FileNotFoundError:
            pass
