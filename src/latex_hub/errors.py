"""Exception types raised by the I/O-facing parts of the toolkit."""
from __future__ import annotations


class LatexHubError(Exception):
    """Base class for toolkit errors."""


class ProjectError(LatexHubError):
    """Raised when an upload cannot be turned into a LaTeX project."""


class ConversionError(LatexHubError):
    """Raised when the external converter fails or cannot be started."""
