"""Domain errors raised by the service layer.

Services raise; the HTTP layer maps each class to a status code once,
at the boundary.
"""

from __future__ import annotations


class QTrackError(Exception):
    """Base class for all expected domain failures."""


class ValidationError(QTrackError):
    pass


class NotFoundError(QTrackError):
    pass


class ConflictError(QTrackError):
    pass


class UnauthorizedError(QTrackError):
    pass
