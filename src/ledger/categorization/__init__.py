"""Transaction categorization utilities.

Rule-based and local so imports stay fast and predictable.
"""

from .rules import CATEGORIES, DEFAULT_CATEGORY, categorize

__all__ = ["CATEGORIES", "DEFAULT_CATEGORY", "categorize"]
