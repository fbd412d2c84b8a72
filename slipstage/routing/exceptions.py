class RoutingError(Exception):
    """Base exception for source routing errors."""


class ExtensionUnresolvable(RoutingError):
    """Raised when no file extension can be read from a source URL."""


class UnsupportedExtension(RoutingError):
    """Raised when a source URL has an extension the pipeline cannot handle."""
