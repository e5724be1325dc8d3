"""Fuzzy ranking for the branch, commit and file search overlay."""

from .fuzzy import DEFAULT_RANK_LIMIT, RankedItem, fuzzy_score, rank_fuzzy_matches

__all__ = ["DEFAULT_RANK_LIMIT", "RankedItem", "fuzzy_score", "rank_fuzzy_matches"]
