"""Exception hierarchy for sketch construction."""


class StrobesyncError(ValueError):
    """Base class for every error raised by strobesync."""


class InvalidConfiguration(StrobesyncError):
    """Window or length parameters are out of the required ordering."""


class InputTooShort(StrobesyncError):
    """The input holds fewer values than the smallest window needs."""


class InsufficientInput(InputTooShort):
    """A window tracker was primed with fewer values than its size."""
