"""
Domain exceptions raised by the service layer.

Services stay HTTP-agnostic; ``backend.app.error_handlers`` maps each
class to a status code and payload.
"""


class DevConnectorError(Exception):
    """Base class for all domain errors."""

    default_message = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# Authentication
# =============================================================================


class AuthError(DevConnectorError):
    """Base class for authentication and authorization failures."""


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password. Both cases share one message."""

    default_message = "Invalid Credentials"


class UserAlreadyExistsError(AuthError):
    default_message = "User already exists"


class MissingTokenError(AuthError):
    default_message = "No token, authorization denied"


class InvalidTokenError(AuthError):
    default_message = "Token is not valid"


class TokenSigningError(AuthError):
    """Raised when a token cannot be signed. Treated as a server error."""

    default_message = "Server Error"


class NotAuthorizedError(AuthError):
    default_message = "User not authorized"


# =============================================================================
# Lookups
# =============================================================================


class NotFoundError(DevConnectorError):
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class ProfileNotFoundError(NotFoundError):
    default_message = "Profile not found"


class InvalidIdError(NotFoundError):
    """A path id that can never match a stored row (not a positive integer)."""

    default_message = "Profile not found"


class EntryNotFoundError(NotFoundError):
    """No experience/education entry with the requested id."""

    default_message = "Entry not found"


class PostNotFoundError(NotFoundError):
    default_message = "Post not found"


# =============================================================================
# Validation
# =============================================================================


class EntryValidationError(DevConnectorError):
    """An experience/education entry failed a cross-field check."""

    def __init__(self, message: str, param: str):
        self.param = param
        super().__init__(message)


# =============================================================================
# GitHub
# =============================================================================


class GitHubError(DevConnectorError):
    """Base class for GitHub proxy failures."""


class GitHubProfileNotFoundError(GitHubError):
    default_message = "No Github profile found"


class GitHubUnavailableError(GitHubError):
    default_message = "GitHub API unavailable"


__all__ = [
    "DevConnectorError",
    "AuthError",
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "MissingTokenError",
    "InvalidTokenError",
    "TokenSigningError",
    "NotAuthorizedError",
    "NotFoundError",
    "UserNotFoundError",
    "ProfileNotFoundError",
    "InvalidIdError",
    "EntryNotFoundError",
    "PostNotFoundError",
    "EntryValidationError",
    "GitHubError",
    "GitHubProfileNotFoundError",
    "GitHubUnavailableError",
]
