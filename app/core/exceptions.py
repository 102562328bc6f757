"""Domain exceptions raised by the repositories.

Each exception carries the HTTP status the API maps it to, so handlers can
translate them without inspecting the message.
"""

from fastapi import status


class JATrackrError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(JATrackrError):
    """No usable lookup key was supplied."""


class UserValidationError(JATrackrError):
    """A required user field is missing or blank."""


class DuplicateUserError(JATrackrError):
    """Username or email is already bound to another account."""


class OwnerNotFoundError(JATrackrError):
    """A job application references a user that does not exist."""


class NotFoundOrAlreadyAssociatedError(JATrackrError):
    """Conditional job reference update matched nothing."""

    status_code = status.HTTP_409_CONFLICT


class UserNotFoundError(JATrackrError):
    status_code = status.HTTP_404_NOT_FOUND


class ReferenceOwnerNotFoundError(UserNotFoundError, NotFoundOrAlreadyAssociatedError):
    """The user a job reference was being added to does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class JobAlreadyAssociatedError(NotFoundOrAlreadyAssociatedError):
    status_code = status.HTTP_409_CONFLICT
