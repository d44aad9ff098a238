"""Core components: extraction, scanning, caching and resolution"""

from .cache_store import CacheStore
from .errors import (
    AutoloadError,
    CacheUnavailable,
    LoadFailure,
    RebuildNotAllowed,
    ScanRootUnreadable,
    TokenizeError,
)
from .extractor import DECLARATION_KEYWORDS, extract_symbols
from .resolver import ClassMapResolver
from .runtime import AutoloaderChain, HostRuntime, IncludeRuntime
from .scanner import Scanner
from .schema import Declaration, RebuildState, SymbolTable, Token, TokenKind, normalize_name
from .tokenizer import tokenize

__all__ = [
    'AutoloadError',
    'AutoloaderChain',
    'CacheStore',
    'CacheUnavailable',
    'ClassMapResolver',
    'DECLARATION_KEYWORDS',
    'Declaration',
    'HostRuntime',
    'IncludeRuntime',
    'LoadFailure',
    'RebuildNotAllowed',
    'RebuildState',
    'ScanRootUnreadable',
    'Scanner',
    'SymbolTable',
    'Token',
    'TokenKind',
    'TokenizeError',
    'extract_symbols',
    'normalize_name',
    'tokenize',
]
