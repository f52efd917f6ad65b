"""Error taxonomy shared by services and API handlers.

Services raise these; ``estatemls.main`` turns them into ``{"error": message}``
JSON responses with the matching status code.
"""


class EstateError(Exception):
    """Base exception for the estate backend."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(EstateError):
    """No identity, or the identity assertion failed verification."""
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(EstateError):
    """Identity present but not allowed to perform the action."""
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(EstateError):
    status_code = 404
    default_message = "Resource not found"


class ValidationError(EstateError):
    """Malformed or out-of-range input."""
    status_code = 400
    default_message = "Invalid request"


class ConflictError(EstateError):
    """Request conflicts with the current state of the target."""
    status_code = 409
    default_message = "Conflict"


class InternalError(EstateError):
    pass
