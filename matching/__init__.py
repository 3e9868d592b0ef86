"""
Skill-Based Posting Matching

This package provides:
1. Skill normalization and keyword extraction from resume text
2. Deterministic match scoring and ranking of postings

Usage:
    from matching import extract_skills, rank_postings

    skills = extract_skills(resume_text)
    for result in rank_postings(skills, postings):
        print(f"{result.title}: {result.match_percent}%")
"""

from .skills import normalize_skill, extract_skills, order_skills
from .scoring_engine import calculate_match_percent, rank_postings
from .matcher import get_recommendations, collection_for_type

__all__ = [
    "normalize_skill",
    "extract_skills",
    "order_skills",
    "calculate_match_percent",
    "rank_postings",
    "get_recommendations",
    "collection_for_type",
]
__version__ = "1.0.0"
