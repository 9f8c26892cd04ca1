"""Custom exceptions for the application."""


class ConfigurationMissing(Exception):
    """Raised when a required configuration value is absent."""

    pass


class FetchError(Exception):
    """Raised when a source document cannot be fetched."""

    pass


class EmbeddingError(Exception):
    """Raised when embedding generation fails."""

    pass


class VectorIndexError(Exception):
    """Raised when vector index upsert or query operations fail."""

    pass


class CompletionError(Exception):
    """Raised when chat completion fails."""

    pass


class QueryError(Exception):
    """Raised when the query pipeline cannot produce an answer."""

    pass
