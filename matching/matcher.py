"""
Main Matcher Module

Loads a user's skills and a posting collection from the document store
and ranks the postings with the scoring engine.
"""

import logging
from typing import List

from models import MatchResult
from .config import POSTING_COLLECTIONS, USERS_COLLECTION
from .scoring_engine import rank_postings

logger = logging.getLogger(__name__)


def collection_for_type(posting_type: str) -> str:
    """
    Map a posting type to its collection name.

    Raises:
        ValueError: If the type is not internship or hackathon
    """
    try:
        return POSTING_COLLECTIONS[posting_type]
    except KeyError:
        raise ValueError(f"Unknown posting type: {posting_type!r}")


def get_recommendations(store, user_id: str, posting_type: str) -> List[MatchResult]:
    """
    Rank all postings of one type for a user.

    Args:
        store: Document store (get/list/merge)
        user_id: Authenticated user ID
        posting_type: "internship" or "hackathon"

    Returns:
        MatchResult list sorted by match_percent (highest first), or an
        empty list when the user has no profile yet.

    Raises:
        ValueError: On an unknown posting type. Store errors propagate.
    """
    collection = collection_for_type(posting_type)

    user = store.get(USERS_COLLECTION, user_id)
    if user is None:
        logger.info(f"No profile for user {user_id}, returning no recommendations")
        return []

    skills = user.get("skills") or []
    if not isinstance(skills, (list, tuple, set)):
        skills = []

    postings = store.list(collection)
    logger.info(f"Matching {len(skills)} skills against {len(postings)} {collection}")
    return rank_postings(skills, postings)
