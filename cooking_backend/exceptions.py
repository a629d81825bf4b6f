from __future__ import annotations


class CookingError(Exception):
    """Base exception for the project."""


class InvalidArgumentError(CookingError, ValueError):
    """Raised when a caller passes an argument outside its allowed range."""


class ResourceNotFoundError(CookingError):
    """Raised when a product, recipe or inventory entry does not exist."""


class DuplicateResourceError(CookingError):
    """Raised when creating an entity that must be unique and already exists."""


class DataLoadError(CookingError):
    """Raised when the seed catalog files cannot be loaded."""
