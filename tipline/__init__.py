"""Tipline: moderation report intake and triage.

Anyone can file a report about a piece of content or an address; staff
holding the moderation dashboard permission list, review, and change the
status of those reports.

Public API
----------
The lifecycle service and its collaborators live in :mod:`tipline.reports`;
cache adapters live in :mod:`tipline.cache`; the Falcon ASGI surface lives
in :mod:`tipline.api`.
"""
