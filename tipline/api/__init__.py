"""Tipline HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that exposes the report lifecycle over HTTP.

Usage
-----
Create and run the application::

    from tipline.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # full mode with report endpoints

Public API
----------
create_app
    Application factory that configures the Falcon ASGI app with health
    endpoints and, when a lifecycle service is provided, report endpoints.
AppDependencies
    Collaborators for the full application.
"""

from tipline.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
