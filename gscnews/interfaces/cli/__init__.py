"""
CLI Interface - Command-line tools for GSC News.

Provides commands for:
- Query enhancement previews
- Article search
- Article import and database setup
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
