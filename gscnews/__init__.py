"""
GSC News - Supply chain news search with AI-assisted query enhancement.

Example:
    >>> from gscnews.domains.search import QueryEnhancer
    >>> enhancer = QueryEnhancer()
    >>> result = await enhancer.enhance("why are ports backed up")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
