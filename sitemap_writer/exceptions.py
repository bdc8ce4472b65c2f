"""
Exceptions raised by the sitemap writer.
"""

from typing import Any, Dict, Optional


class SitemapError(Exception):
    """Base exception for sitemap writing failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Args:
            message: Human-readable error message
            context: Additional context for logging (file path, rejected value, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigError(SitemapError, ValueError):
    """Raised when the writer is constructed or configured with invalid values."""


class ValidationError(SitemapError, ValueError):
    """Raised when an item attribute (URL, priority, frequency...) is invalid."""


class StateError(SitemapError, RuntimeError):
    """Raised when the writer is used after it has been finished."""
