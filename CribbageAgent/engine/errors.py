"""Exceptions raised by the cribbage engine"""


class CribbageError(Exception):
    """Base exception for all engine errors"""
    pass


class InvalidDiscardCount(CribbageError):
    """Discard did not name exactly two cards"""
    pass


class IllegalDiscard(CribbageError):
    """Discard not allowed in the current state"""
    pass


class IllegalPlay(CribbageError):
    """Card cannot be played now; nothing was changed.

    `events` holds anything the automatic GO check produced on behalf of
    the current player after the rejection.
    """

    def __init__(self, message, events=None):
        super().__init__(message)
        self.events = list(events or [])
