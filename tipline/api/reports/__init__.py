"""Report API resources.

Usage
-----
Import report resources for route registration::

    from tipline.api.reports.resources import (
        ReportCollectionResource,
        ReportItemResource,
    )
"""
