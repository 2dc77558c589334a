"""Exception hierarchy for BuildNow.

The core raises these; only the HTTP layer turns them into status codes.
"""

from typing import List, Optional, Sequence


class BuildNowError(Exception):
    """Base class for all BuildNow errors."""


class InvalidRequestError(BuildNowError):
    """Client-caused: request fields are missing or malformed (HTTP 400)."""

    def __init__(self, message: str, fields: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields: List[str] = list(fields or [])


class MissingFieldError(InvalidRequestError):
    """One or more required fields are absent or empty."""

    def __init__(self, fields: Sequence[str]):
        super().__init__(f"Missing required fields: {', '.join(fields)}", fields)


class GatewayError(BuildNowError):
    """The completion API failed or returned no usable content."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ParseError(BuildNowError):
    """Model output did not match the expected JSON shape."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class CollaboratorError(BuildNowError):
    """Identity provider or project store failure."""


class NotSignedInError(CollaboratorError):
    """An action that needs a user was attempted without one."""

    def __init__(self, action: str):
        super().__init__(f"Must be logged in to {action}")


class ProjectNotFoundError(CollaboratorError):
    """No project with the given id in the user's collection."""

    def __init__(self, collection: str, project_id: str):
        label = "Saved project" if collection == "saved" else "Active project"
        super().__init__(f"{label} not found: {project_id}")
        self.collection = collection
        self.project_id = project_id
