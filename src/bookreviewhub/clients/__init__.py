from .api import BookReviewClient

__all__ = ["BookReviewClient"]
