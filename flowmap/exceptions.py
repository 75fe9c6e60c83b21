"""Exceptions raised by the acquisition and pipeline layers.

The extraction core has no error type of its own; it degrades to empty
results instead.
"""


class FlowMapError(Exception):
    """Base exception for flowmap."""


class CrawlError(FlowMapError):
    """Raised when the start URL cannot be fetched at all."""


class CrawlCancelled(FlowMapError):
    """Raised when the caller's cancellation signal is set before extraction finishes."""
