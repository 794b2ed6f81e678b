"""Errors raised by the package."""


class EcError(Exception):
    """An error described by a simple message."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"EcError: {self.message}"