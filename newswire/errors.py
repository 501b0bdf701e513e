"""Exception types raised inside the feed engine."""


class NewswireError(Exception):
    """Base class for all engine errors."""


class FeedParseError(NewswireError):
    """Raised when a feed document cannot be parsed as a whole."""


class UnknownFeedFormatError(FeedParseError):
    """Raised when no mapper can be resolved for a feed document."""


class SchedulingError(NewswireError):
    """Raised when the poll timer cannot be armed with the requested interval."""
