"""Caller resolution for inbound requests.

Authentication happens outside Tipline. A :class:`CallerResolver` turns a
request into a :class:`~tipline.reports.authorization.Caller`; the shipped
:class:`TrustedHeaderCallerResolver` reads identity headers set by an
authenticating reverse proxy. Deployments that expose Tipline directly
must supply their own resolver or strip these headers at the edge.
"""

from __future__ import annotations

import typing as typ

from tipline.reports.authorization import ANONYMOUS, Authenticated

if typ.TYPE_CHECKING:
    from falcon.asgi import Request

    from tipline.reports.authorization import Caller

__all__ = [
    "DEFAULT_PERMISSIONS_HEADER",
    "DEFAULT_USER_HEADER",
    "AnonymousCallerResolver",
    "CallerResolver",
    "TrustedHeaderCallerResolver",
]

DEFAULT_USER_HEADER = "X-Tipline-User"
DEFAULT_PERMISSIONS_HEADER = "X-Tipline-Permissions"


@typ.runtime_checkable
class CallerResolver(typ.Protocol):
    """Resolve the identity behind a request."""

    async def resolve(self, req: Request) -> Caller:
        """Return the caller for *req*; never raises for missing identity."""
        ...


class AnonymousCallerResolver:
    """Treat every request as anonymous."""

    async def resolve(self, req: Request) -> Caller:
        """Return :data:`~tipline.reports.authorization.ANONYMOUS`."""
        del req
        return ANONYMOUS


def parse_permissions(raw: str | None) -> frozenset[str]:
    """Split a comma-separated permission header into a set."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


class TrustedHeaderCallerResolver:
    """Read the caller from proxy-supplied headers.

    Parameters
    ----------
    user_header
        Header carrying the authenticated username.
    permissions_header
        Header carrying a comma-separated permission list.

    """

    def __init__(
        self,
        *,
        user_header: str = DEFAULT_USER_HEADER,
        permissions_header: str = DEFAULT_PERMISSIONS_HEADER,
    ) -> None:
        """Configure the header names."""
        self._user_header = user_header
        self._permissions_header = permissions_header

    async def resolve(self, req: Request) -> Caller:
        """Return an authenticated caller when the user header is present."""
        username = (req.get_header(self._user_header) or "").strip()
        if not username:
            return ANONYMOUS
        permissions = parse_permissions(req.get_header(self._permissions_header))
        return Authenticated(username=username, permissions=permissions)
