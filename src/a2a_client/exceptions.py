"""Base exceptions for the A2A client."""

from __future__ import annotations


class A2AClientError(Exception):
    """Base exception for all A2A client errors.

    Every failure surfaced by the client derives from this class, so callers
    that do not care about the layer can catch it in one place.
    """

    pass
