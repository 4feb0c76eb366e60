"""Application middleware."""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .config import PRINCIPAL_ID_HEADER, PRINCIPAL_AVATAR_HEADER
from .identity import Principal


class PrincipalMiddleware(BaseHTTPMiddleware):
    """Attach the caller's principal to request state.

    The authenticating proxy in front of the app sets the identity headers.
    Requests without them continue anonymously; operations that need a
    principal reject them on their own.
    """

    async def dispatch(self, request: Request, call_next):
        principal_id = request.headers.get(PRINCIPAL_ID_HEADER, "").strip()

        if principal_id:
            request.state.principal = Principal(
                id=principal_id,
                avatar_url=request.headers.get(PRINCIPAL_AVATAR_HEADER, "").strip(),
            )
        else:
            request.state.principal = None

        return await call_next(request)
