"""
Field resolution for posting documents.

Postings come from several sources and do not share one schema: the skill
list may live under skillsRequired, skills, domains or themes, and the
description may or may not be capitalized. Each lookup is an ordered list
of accessors; the first one returning a non-empty value wins.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import DESCRIPTION_FIELDS, REQUIRED_SKILLS_FIELDS, TITLE_FIELDS

Accessor = Callable[[Dict[str, Any]], Any]

DEFAULT_DESCRIPTION = "No description provided."


def field(name: str) -> Accessor:
    return lambda doc: doc.get(name)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def first_populated(doc: Dict[str, Any], accessors: Sequence[Accessor], default: Any = None) -> Any:
    """Return the first non-empty accessor value, or default."""
    for accessor in accessors:
        value = accessor(doc)
        if not _is_empty(value):
            return value
    return default


DESCRIPTION_ACCESSORS: List[Accessor] = [field(name) for name in DESCRIPTION_FIELDS]
REQUIRED_SKILLS_ACCESSORS: List[Accessor] = [field(name) for name in REQUIRED_SKILLS_FIELDS]
TITLE_ACCESSORS: List[Accessor] = [field(name) for name in TITLE_FIELDS]


def resolve_description(doc: Dict[str, Any]) -> Any:
    return first_populated(doc, DESCRIPTION_ACCESSORS, DEFAULT_DESCRIPTION)


def resolve_required_skills(doc: Dict[str, Any]) -> Any:
    """Raw required-skills value; usually a list, occasionally a plain string."""
    return first_populated(doc, REQUIRED_SKILLS_ACCESSORS, [])


def resolve_required_skill_list(doc: Dict[str, Any]) -> List[str]:
    """Required skills as a list; anything that is not a list counts as empty."""
    value = resolve_required_skills(doc)
    if not isinstance(value, (list, tuple)):
        return []
    return [str(s) for s in value if s is not None]


def resolve_title(doc: Dict[str, Any]) -> Optional[str]:
    return first_populated(doc, TITLE_ACCESSORS)
