"""
Skill normalization and keyword extraction.

Extraction is a plain case-insensitive substring test against
SKILL_VOCABULARY. There is no word-boundary check, so "Java" is reported
for a resume that only mentions "JavaScript".
"""

import logging
import re
from typing import Iterable, List, Optional, Set

from .config import SKILL_VOCABULARY, SKILL_SEPARATORS

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(SKILL_SEPARATORS)


def normalize_skill(skill: str) -> str:
    """Comparison key for a skill name: "Node.js", "node js" and "NODE-JS" all map to "nodejs"."""
    return _SEPARATOR_RE.sub("", skill.lower())


def extract_skills(text: Optional[str]) -> Set[str]:
    """
    Find vocabulary skills mentioned in resume text.

    Args:
        text: Raw resume text (may be empty or None)

    Returns:
        Set of canonical display names, e.g. {"Python", "Node.js"}
    """
    if not text:
        return set()

    lower = text.lower()
    found = {skill for skill in SKILL_VOCABULARY if skill.lower() in lower}
    logger.debug(f"Extracted {len(found)} skills from {len(text)} chars of text")
    return found


def order_skills(skills: Iterable[str]) -> List[str]:
    """Return skills in vocabulary order, unknown names last in sorted order."""
    skills = set(skills)
    known = [s for s in SKILL_VOCABULARY if s in skills]
    extra = sorted(skills.difference(SKILL_VOCABULARY))
    return known + extra
