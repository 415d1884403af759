"""Exception hierarchy shared by the client, the contest core and the CLI."""

from typing import Optional, Sequence


class CaffeineError(Exception):
    pass


class CollaboratorInvocationError(CaffeineError):
    """The caffeine process could not be run or exited with an error."""

    def __init__(self, message: str, command: Sequence[str], stderr: Optional[str] = None):
        super().__init__(message)
        self.command = list(command)
        self.stderr = stderr


class ParseError(CaffeineError):
    """Collaborator output did not have the expected shape."""


class FileSystemError(CaffeineError):

    def __init__(self, message: str, path):
        super().__init__(message)
        self.path = path


class SelectionAborted(CaffeineError):
    """The user declined to pick a contest, problem or file."""
