"""
classmap - resolve PHP class names to their source files on demand.

Scans a source tree for class, interface and trait declarations, caches the
resulting class map next to the sources and rebuilds it once per process
when a requested class is missing.
"""

from .core import (
    AutoloadError,
    AutoloaderChain,
    CacheStore,
    CacheUnavailable,
    ClassMapResolver,
    IncludeRuntime,
    LoadFailure,
    RebuildNotAllowed,
    Scanner,
    ScanRootUnreadable,
    extract_symbols,
)
from .config import ResolverConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "AutoloadError",
    "AutoloaderChain",
    "CacheStore",
    "CacheUnavailable",
    "ClassMapResolver",
    "IncludeRuntime",
    "LoadFailure",
    "RebuildNotAllowed",
    "ResolverConfig",
    "Scanner",
    "ScanRootUnreadable",
    "extract_symbols",
    "load_config",
]
