class CompositionError(Exception):
    """Base exception for tile composition errors."""


class InsufficientTiles(CompositionError):
    """Raised when fewer than two tiles are given to the compositor."""


class MetadataUnreadable(CompositionError):
    """Raised when a tile's width or height cannot be read."""
