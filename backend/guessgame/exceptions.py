"""Errors raised by the guessing game."""


class GameError(Exception):
    """Base class for game errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GameError):
    """Bad user input: empty name, guess outside 1..100 or not a number."""


class TransitionError(GameError):
    """The requested event is not allowed in the session's current status."""


class StoreError(GameError):
    """The record store could not be read or written."""
