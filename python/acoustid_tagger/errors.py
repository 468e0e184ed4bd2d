"""Exception types raised by the tagging pipeline and its collaborators."""


class TaggerError(Exception):
    """Base class for tagging failures."""


class FingerprintError(TaggerError):
    """fpcalc failed or produced output we could not read."""


class LookupServiceError(TaggerError):
    """The AcoustID lookup did not complete or returned a non-ok status."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnparsableNameError(TaggerError):
    """A file name does not split into exactly one artist and one title."""


class PromptCancelled(TaggerError):
    """The operator cancelled a prompt."""


class TagOpenError(TaggerError):
    """Tags could not be read from the file."""


class TagSaveError(TaggerError):
    """Tags could not be written to the file."""


class RenameError(TaggerError):
    """The file could not be renamed after a successful save."""
