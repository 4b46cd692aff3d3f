"""Configuration for the report lifecycle.

Usage
-----
Create a configuration with defaults:

>>> config = ReportsConfig()
>>> config.page_size
50

Or load from environment variables:

>>> import os
>>> os.environ["TIPLINE_REPORTS_PAGE_SIZE"] = "25"
>>> ReportsConfig.from_env().page_size
25

"""

from __future__ import annotations

import dataclasses as dc
import os

from tipline.reports.authorization import STAFF_DASHBOARD_PERMISSION

DEFAULT_PAGE_SIZE = 50


@dc.dataclass(frozen=True, slots=True)
class ReportsConfig:
    """Settings for listing and authorization.

    Attributes
    ----------
    page_size
        Number of reports in one listing window. Default is 50.
    moderation_permission
        Permission string required to change report status. Default is
        ``StaffDashboard``.

    """

    page_size: int = DEFAULT_PAGE_SIZE
    moderation_permission: str = STAFF_DASHBOARD_PERMISSION

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise ValueError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls) -> ReportsConfig:
        """Create configuration from environment variables.

        Reads ``TIPLINE_REPORTS_PAGE_SIZE`` (positive integer) and
        ``TIPLINE_MODERATION_PERMISSION`` (non-blank string).

        Raises
        ------
        ValueError
            If ``TIPLINE_REPORTS_PAGE_SIZE`` is not a positive integer.

        """
        page_size = cls._parse_positive_int(
            "TIPLINE_REPORTS_PAGE_SIZE", DEFAULT_PAGE_SIZE
        )
        permission = os.environ.get("TIPLINE_MODERATION_PERMISSION", "").strip()
        return cls(
            page_size=page_size,
            moderation_permission=permission or STAFF_DASHBOARD_PERMISSION,
        )
