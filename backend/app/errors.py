"""Error taxonomy shared by the gate, the API routes and the services."""
from __future__ import annotations

ACCESS_DENIED_TITLE = "Access Denied"
ACCESS_DENIED_MESSAGE = "You do not have permission to view this page."


class AccessDenied(Exception):
    """Request may not proceed. Rendered as the access-denied view."""

    status_code = 401

    def __init__(self, reason: str = ACCESS_DENIED_MESSAGE):
        super().__init__(reason)
        self.reason = reason


class AuthenticationMissing(AccessDenied):
    """No session could be resolved from the request."""


class AuthorizationDenied(AccessDenied):
    """A session resolved but the user's role is insufficient."""


class DependencyConflict(Exception):
    """A record cannot be removed because other records still reference it."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFound(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


ACCESS_DENIED_HTML = """<!DOCTYPE html>
<html>
<head><title>{title}</title></head>
<body>
    <main>
        <h1>{title}</h1>
        <p>{message}</p>
    </main>
</body>
</html>
"""


def render_access_denied() -> str:
    """HTML body of the access-denied view."""
    return ACCESS_DENIED_HTML.format(title=ACCESS_DENIED_TITLE, message=ACCESS_DENIED_MESSAGE)
