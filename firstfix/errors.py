from __future__ import annotations


class FirstFixError(Exception):
    """Base error; ``str(error)`` is the message shown to the user."""


class TransportError(FirstFixError):
    """Non-2xx status (or no usable response) from the backend."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class BackendReportedError(FirstFixError):
    """2xx response whose body carries an ``error`` field."""


class MissingTargetError(FirstFixError):
    """The (owner, repo, number) triple could not be derived."""
