"""Error taxonomy for the tasting ledgers.

Every rule violation detected by the domain layer is raised as one of these
exceptions. The application installs a single handler that turns them into
JSON responses with the status code carried by the class.
"""


class TastingError(Exception):
    """Base exception"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(TastingError):
    """No caller could be resolved from the request"""

    status_code = 401


class ForbiddenError(TastingError):
    """The caller may not act on this event"""

    status_code = 403


class NotFoundError(TastingError):
    """Entity absent, or deliberately reported as absent"""

    status_code = 404


class ValidationFailedError(TastingError):
    """Malformed input, with a message per offending field"""

    status_code = 400

    def __init__(self, errors: dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors


class ConflictError(TastingError):
    """The requested change is not valid in the current state"""

    status_code = 409


class AuthUnavailableError(TastingError):
    """The identity proxy integration is switched off"""

    status_code = 503


class JoinCodeExhaustedError(TastingError):
    """Could not find an unused join code within the attempt budget"""

    status_code = 500
