"""
Errors Module - Exceptions raised by the storage and notification layers
"""


class PortfolioError(Exception):
    """Base exception for portfolio errors."""

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class StorageError(PortfolioError):
    """Object storage upload or lookup failed."""


class NotificationError(PortfolioError):
    """An outbound message could not be delivered."""


__all__ = ['PortfolioError', 'StorageError', 'NotificationError']
