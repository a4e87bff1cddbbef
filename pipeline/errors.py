"""
Error types for the board discovery pipeline.

Only StartupConfigError is fatal. Everything else is raised below the
cycle runner and caught there, so one bad cycle never stops the scheduler.
"""

from pathlib import Path
from typing import Optional, Union


class DiscoveryError(Exception):
    """Base class for pipeline errors."""


class StartupConfigError(DiscoveryError, ValueError):
    """Required secret or config file is missing or unreadable."""


class UpstreamError(DiscoveryError):
    """A generative backend was unreachable or returned unusable content."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source

    def __str__(self):
        message = super().__str__()
        if self.source:
            return f"[{self.source}] {message}"
        return message


class PersistenceError(DiscoveryError):
    """Writing an output file failed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
