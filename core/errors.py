"""
errors.py - Failure taxonomy for profile operations
ONE RESPONSIBILITY: Name every way an operation can fail
"""


class ProfmanError(Exception):
    """Base class for fatal operation errors."""

    def __init__(self, message, profile=None, artifact=None):
        super().__init__(message)
        self.message = message
        self.profile = profile
        self.artifact = artifact

    def describe(self, operation=None):
        """Build the user-facing message naming operation, profile and artifact."""
        parts = []
        if operation:
            parts.append(f"{operation} failed")
        if self.profile:
            parts.append(f"profile '{self.profile}'")
        head = " for ".join(parts)

        text = f"{head}: {self.message}" if head else self.message
        if self.artifact:
            text += f" ({self.artifact})"
        return text


class MalformedInput(ProfmanError):
    """A document could not be parsed or is not a JSON object."""


class SourceMissing(ProfmanError):
    """An expected live document or template file does not exist."""


class NotFound(ProfmanError):
    """A referenced snapshot or backup does not exist."""


class AmbiguousState(ProfmanError):
    """More than one artifact matches one identifier."""


class BackupFailed(ProfmanError):
    """A required backup could not be written."""


class WriteFailed(ProfmanError):
    """A staging write or atomic replace failed."""


class InvalidArgument(ProfmanError):
    """Option values that cannot be combined or are refused."""


class Aborted(Exception):
    """The user declined a confirmation prompt. Not an error."""
