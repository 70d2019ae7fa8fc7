"""
Custom exceptions for the text diff engine.
"""


class TextDiffError(Exception):
    """Base exception for all text diff errors."""
    pass


class InvalidDiffInputError(TextDiffError):
    """Raised when the texts to compare are not strings."""
    pass


class InvalidDiffOptionError(TextDiffError):
    """Raised when a diff or view option has an invalid value."""
    pass
