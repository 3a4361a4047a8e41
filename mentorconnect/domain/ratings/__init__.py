"""Ratings domain - mentor rating aggregation"""

from .service import recompute_mentor_rating

__all__ = ["recompute_mentor_rating"]
