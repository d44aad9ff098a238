"""
Error types raised by the class map components.

Everything below the top-level ``autoload`` entry point either recovers from
these or downgrades them to a boolean result.
"""


class AutoloadError(Exception):
    """Base class for all class map errors"""


class CacheUnavailable(AutoloadError):
    """The cache artifact is missing or cannot be parsed into a class map"""


class RebuildNotAllowed(AutoloadError):
    """Rebuilding is disabled or has already happened in this process"""


class ScanRootUnreadable(AutoloadError):
    """The scan root is not a readable directory"""


class LoadFailure(AutoloadError):
    """The host runtime could not load a resolved file"""


class TokenizeError(AutoloadError):
    """Source text could not be turned into a token stream"""
