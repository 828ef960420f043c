"""Error types shared by the registry, aggregator and API."""


class FeedAggregatorError(Exception):
    """Base error. ``status_code`` is the HTTP status the API answers with."""

    status_code = 500


class ValidationError(FeedAggregatorError):
    """A request is missing required fields."""

    status_code = 400


class ConflictError(FeedAggregatorError):
    """A category id or feed URL already exists."""

    status_code = 400


class NotFoundError(FeedAggregatorError):
    """A category or feed does not exist."""

    status_code = 404


class InternalError(FeedAggregatorError):
    """Unexpected failure inside the service."""

    status_code = 500


class RegistryIOError(InternalError):
    """The registry document could not be read or written."""


class UpstreamFetchError(FeedAggregatorError):
    """A single feed could not be fetched or parsed.

    Never reaches the API: the aggregator treats the feed as empty.
    """
