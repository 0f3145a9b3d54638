from __future__ import annotations


class TagLogError(Exception):
    """Base class for problems found while reading a tagging log."""


class MalformedRecord(TagLogError):
    """Line has fewer than 4 fields; the line is skipped."""


class InvalidTimestamp(TagLogError):
    """Timestamp is non-empty and not all digits; the event is skipped."""


class UnparsableRating(TagLogError):
    """Rating field is not a decimal; the rating is dropped, the event kept."""


class IOFailure(TagLogError):
    """The log file could not be opened or fully read."""
