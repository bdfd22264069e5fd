"""
API Interface - FastAPI REST API.

Serves the search endpoint the news site's search page reads
(/api/search?q=...) and an enhancement preview endpoint.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
