"""Authentication exceptions."""

from dashboard.exceptions import DashboardError


class AuthenticationError(DashboardError):
    """Credentials missing, malformed or wrong (401)."""

    status_code = 401
