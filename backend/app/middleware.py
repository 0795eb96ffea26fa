"""Optimistic session gate for the back-office pages."""
import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def is_protected_path(path: str, prefixes: list[str]) -> bool:
    """True if ``path`` is a protected prefix or one of its sub-paths."""
    for prefix in prefixes:
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Redirect requests for protected paths that carry no session cookie.

    Only the cookie's presence is checked here. Each handler resolves the
    session against the store itself, see ``app.api.deps``.
    """

    def __init__(self, app, cookie_name: str, protected_prefixes: list[str], redirect_to: str = "/"):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.protected_prefixes = protected_prefixes
        self.redirect_to = redirect_to

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if is_protected_path(path, self.protected_prefixes) and not request.cookies.get(self.cookie_name):
            logger.debug("No session cookie for %s, redirecting to %s", path, self.redirect_to)
            return RedirectResponse(url=self.redirect_to, status_code=307)
        return await call_next(request)
