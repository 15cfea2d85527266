"""Exception types raised by yapCSG."""


class CsgError(Exception):
    """Base exception for yapCSG errors."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InvalidInputError(CsgError, ValueError):
    """Raised when geometry handed to the CSG core cannot be used.

    Covers empty polygon soups, soups made only of degenerate polygons,
    polygons with fewer than three vertices and malformed mesh buffers.
    """


class ConfigError(CsgError, ValueError):
    """Raised for an invalid tolerance or configuration file."""


__all__ = ['CsgError', 'InvalidInputError', 'ConfigError']
