"""Custom exceptions for service layer operations."""


class ServiceError(Exception):
    """Base class for failures raised by the service layer."""


class FeedError(ServiceError):
    """Raised when a podcast feed cannot be used."""


class FeedFetchError(FeedError):
    """Raised when the feed request fails or returns a non-success status."""


class FeedShapeError(FeedError):
    """Raised when the fetched document is not a usable RSS/Atom feed."""


class EmptyFeedError(FeedShapeError):
    """Raised when a feed has no items."""


class ProviderError(ServiceError):
    """Raised when the transcription or translation provider reports a failure."""


class StorageError(ServiceError):
    """Raised when a database or blob store operation fails."""
