"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from gscnews import __version__
from gscnews.domains.search import QueryEnhancer
from gscnews.interfaces.api.deps import get_query_enhancer

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "gscnews"}


@router.get("/api")
async def api_info(enhancer: QueryEnhancer = Depends(get_query_enhancer)) -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "GSC News API",
        "version": __version__,
        "description": "Supply chain news search with AI query enhancement",
        "enhancement_available": enhancer.available,
        "docs": "/docs",
    }
