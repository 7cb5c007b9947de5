"""Domain exceptions raised by services and mapped to HTTP responses by the API."""


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(DashboardError):
    """Required data missing or malformed (400)."""

    status_code = 400


class PermissionDeniedError(DashboardError):
    """Authenticated but not allowed to act on the resource (403)."""

    status_code = 403


class NotFoundError(DashboardError):
    """Resource not found (404)."""

    status_code = 404


class ConflictError(DashboardError):
    """
    Resource already exists (409).

    ``payload`` replaces the default ``{"detail": message}`` body when set.
    """

    status_code = 409

    def __init__(self, message: str, payload: object | None = None):
        super().__init__(message)
        self.payload = payload
