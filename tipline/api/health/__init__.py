"""Health probe resources.

Usage
-----
Import health resources for route registration::

    from tipline.api.health.resources import HealthResource, ReadyResource
"""
