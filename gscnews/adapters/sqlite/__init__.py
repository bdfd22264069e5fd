from .repository import ArticleRepository

__all__ = ["ArticleRepository"]
