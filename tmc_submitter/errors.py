"""Exception types raised by the submission engine."""

from __future__ import annotations


class TmcError(Exception):
    """Base class for errors reported to the user."""


class UserInputError(TmcError):
    """Invalid command input, e.g. no exercise given or an unknown exercise path."""


class ManifestError(TmcError):
    """The course manifest could not be read or parsed."""


class UnknownStatusError(TmcError, ValueError):
    """The server returned a submission status this client does not understand."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Unknown submission status: '{status}'")
        self.status = status
