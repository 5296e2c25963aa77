"""
Exception types shared across ComicShelf services.

Not-found lookups are not exceptions: the resolver reports them as a
normal error result so the caller can offer manual entry instead.
"""


class ComicShelfError(Exception):
    """Base class for ComicShelf errors."""


class InvalidArgumentError(ComicShelfError):
    """Caller supplied missing or malformed input. Never retried."""


class UpstreamUnavailableError(ComicShelfError):
    """The external metadata provider failed, timed out, or sent garbage."""


class ConfigurationError(ComicShelfError):
    """Operator error such as a missing API key. Never retried."""
