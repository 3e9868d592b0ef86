"""
Deterministic Scoring Engine

All scoring functions are deterministic - same inputs produce same outputs.
No AI/LLM is used in this module.
"""

import logging
from typing import Any, Dict, Iterable, List, Sequence, Set

from models import MatchResult
from .fields import resolve_required_skill_list, resolve_title
from .skills import normalize_skill

logger = logging.getLogger(__name__)


def calculate_match_percent(required_skills: Sequence[str], user_skills: Set[str]) -> int:
    """
    Calculate the percentage of required skills the user has (0-100).

    Formula:
    - A required entry is matched when its normalized form is in the
      normalized user skills. Duplicate entries are counted individually.
    - round_half_up(matched / total * 100), 0 when there are no requirements

    Args:
        required_skills: Posting's required skills (display form)
        user_skills: Already-normalized user skills

    Returns:
        Integer score from 0-100
    """
    total = len(required_skills)
    if total == 0:
        return 0

    matched = sum(1 for s in required_skills if normalize_skill(s) in user_skills)
    # Integer round-half-up of matched * 100 / total
    return (matched * 200 + total) // (2 * total)


def score_posting(posting: Dict[str, Any], user_skills: Set[str]) -> MatchResult:
    required = resolve_required_skill_list(posting)
    percent = calculate_match_percent(required, user_skills)
    logger.debug(f"Posting {posting.get('id')}: {percent}% of {len(required)} required skills")
    return MatchResult(
        posting_id=str(posting.get("id", "")),
        title=resolve_title(posting),
        match_percent=percent,
    )


def rank_postings(user_skills: Iterable[str], postings: Iterable[Dict[str, Any]]) -> List[MatchResult]:
    """
    Score every posting and sort by match percentage (highest first).

    Ties keep catalog order (sorted() is stable).
    """
    normalized = {normalize_skill(s) for s in user_skills if isinstance(s, str)}
    results = [score_posting(p, normalized) for p in postings]
    results.sort(key=lambda r: r.match_percent, reverse=True)

    if results:
        logger.info(f"Ranked {len(results)} postings, top match: {results[0].match_percent}%")
    return results
