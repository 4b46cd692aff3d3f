"""Caller identities and the permission gate for staff-only operations.

The authentication subsystem is outside Tipline; it hands us either an
:class:`Anonymous` caller or an :class:`Authenticated` one carrying a
permission set. Staff operations require the moderation dashboard
permission.

Usage
-----
>>> gate = AuthorizationGate()
>>> gate.is_authorized(Authenticated("mod", frozenset({"StaffDashboard"})))
True
>>> gate.is_authorized(ANONYMOUS)
False

"""

from __future__ import annotations

import dataclasses as dc

STAFF_DASHBOARD_PERMISSION = "StaffDashboard"


@dc.dataclass(frozen=True, slots=True)
class Anonymous:
    """A caller with no verified identity."""


@dc.dataclass(frozen=True, slots=True)
class Authenticated:
    """A caller verified by the authentication collaborator.

    Attributes
    ----------
    username
        Account name; recorded as the author of reports they file.
    permissions
        Permission strings granted to the account.

    """

    username: str
    permissions: frozenset[str] = frozenset()


type Caller = Anonymous | Authenticated

ANONYMOUS = Anonymous()


def is_authorized(
    caller: Caller | None,
    permission: str = STAFF_DASHBOARD_PERMISSION,
) -> bool:
    """Return whether *caller* holds *permission*.

    ``None`` is treated as :data:`ANONYMOUS`.
    """
    match caller:
        case Authenticated(permissions=permissions):
            return permission in permissions
        case _:
            return False


@dc.dataclass(frozen=True, slots=True)
class AuthorizationGate:
    """Permission check bound to one permission string."""

    permission: str = STAFF_DASHBOARD_PERMISSION

    def is_authorized(self, caller: Caller | None) -> bool:
        """Return whether *caller* holds the bound permission."""
        return is_authorized(caller, self.permission)
