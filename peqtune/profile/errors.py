"""Profile import errors."""
from __future__ import annotations


class ProfileError(ValueError):
    """Base class for profiles that cannot be imported."""


class ParseError(ProfileError):
    """Content is neither valid JSON nor the filter-list text grammar."""


class FormatError(ProfileError):
    """JSON parsed, but lacks a usable ``bands`` list."""
