"""Identity oracle contract.

Authentication itself happens upstream; this app only asks "who is
calling?" and gets a principal or None back.
"""
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import Request


@dataclass(frozen=True)
class Principal:
    """An authenticated identity from the external provider."""
    id: str
    avatar_url: str = ""


class IdentityOracle(Protocol):
    """Anything that can name the current principal."""

    async def current_principal(self) -> Optional[Principal]: ...


class RequestIdentity:
    """Identity oracle backed by the principal attached to a request.

    ``PrincipalMiddleware`` resolves the principal once per request and
    stores it on ``request.state``.
    """

    def __init__(self, request: Request):
        self._request = request

    async def current_principal(self) -> Optional[Principal]:
        return getattr(self._request.state, "principal", None)


class FixedIdentity:
    """Identity oracle that always answers with the same principal.

    Used for out-of-band callers (scripts, webhooks) and in tests.
    """

    def __init__(self, principal: Optional[Principal]):
        self._principal = principal

    async def current_principal(self) -> Optional[Principal]:
        return self._principal
