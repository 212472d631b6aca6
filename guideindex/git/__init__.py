"""Read access to the documentation site's git repository."""

from .checkout import Checkout
from .repository import ContentNotFoundError, ContentProvider, GitError, GitRepository

__all__ = [
    "Checkout",
    "ContentNotFoundError",
    "ContentProvider",
    "GitError",
    "GitRepository",
]
