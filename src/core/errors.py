"""Exception hierarchy and process exit codes."""

from __future__ import annotations


class PhantomError(Exception):
    """Base error for phantom-batch.

    Carries a human-readable message, an optional underlying cause, and the
    process exit code the CLI uses when the error reaches the top level.
    """

    exit_code = 5

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class ConfigurationError(PhantomError):
    """Invalid configuration, detected before any work starts."""

    exit_code = 1


class RemoteServiceError(PhantomError):
    """The remote operation for an item reported a failure."""

    exit_code = 2


class InputValidationError(PhantomError):
    """Invalid user input such as an empty service list."""

    exit_code = 3


class NetworkError(PhantomError):
    """Transport-level failure talking to a remote endpoint."""

    exit_code = 4


class BatchCancelledError(PhantomError):
    """The batch context was cancelled."""


class DeadlineExceededError(BatchCancelledError):
    """The batch context deadline passed."""
