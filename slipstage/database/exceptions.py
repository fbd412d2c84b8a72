class RepositoryError(Exception):
    """Base exception for persistence errors."""


class InvalidIdentifierError(RepositoryError):
    """Raised when a table or column name is not a plain SQL identifier."""


class DatabaseUnavailable(RepositoryError):
    """Raised when the connection pool cannot reach PostgreSQL at startup."""
