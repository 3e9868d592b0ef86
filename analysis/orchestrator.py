"""
Analysis Orchestrator

Runs one compatibility analysis:
1. Load the user profile
2. Resolve the posting collection and load the posting
3. Build the prompt from the resolved posting fields and the profile
4. Call the model once and extract its text

analyze() always returns text; failures become user-facing messages.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from matching.config import POSTING_COLLECTIONS, USERS_COLLECTION
from matching.fields import resolve_description, resolve_required_skills
from utils import truncate_text
from .config import MAX_RESUME_CHARS, MESSAGES
from .gemini_client import extract_candidate_text
from .prompt import build_analysis_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class NotFound:
    reason: str


@dataclass(frozen=True)
class InvalidRequest:
    reason: str


@dataclass(frozen=True)
class InferenceError:
    reason: str


AnalysisResult = Union[Ok, NotFound, InvalidRequest, InferenceError]


def result_text(result: AnalysisResult) -> str:
    if isinstance(result, Ok):
        return result.text
    return result.reason


def profile_skills(user) -> List[str]:
    """Skills stored on a profile; anything that is not a list counts as none."""
    skills = user.get("skills") or []
    if not isinstance(skills, (list, tuple, set)):
        return []
    return [str(s) for s in skills if s is not None]


class AnalysisOrchestrator:
    """
    Args:
        store: Document store (get/list/merge)
        client: Inference client with generate(prompt) -> response dict
        max_resume_chars: Resume characters embedded in the prompt
    """

    def __init__(self, store, client, max_resume_chars: int = MAX_RESUME_CHARS):
        self.store = store
        self.client = client
        self.max_resume_chars = max_resume_chars

    def run(self, user_id: str, posting_id: str, posting_type: str) -> AnalysisResult:
        """Run the pipeline. Store and client exceptions propagate."""
        user = self.store.get(USERS_COLLECTION, user_id)
        if user is None:
            return NotFound(MESSAGES["profile_not_found"])

        collection = POSTING_COLLECTIONS.get(posting_type)
        if collection is None:
            return InvalidRequest(MESSAGES["invalid_type"])

        posting = self.store.get(collection, posting_id)
        if posting is None:
            return NotFound(MESSAGES["posting_not_found"].format(label=posting_type.capitalize()))

        prompt = build_analysis_prompt(
            posting_type=posting_type,
            description=resolve_description(posting),
            required_skills=resolve_required_skills(posting),
            resume_text=truncate_text(user.get("resumeText"), self.max_resume_chars),
            verified_skills=profile_skills(user),
        )

        response = self.client.generate(prompt)
        text = extract_candidate_text(response)
        if text is None:
            logger.warning(f"Empty or malformed model response for {collection}/{posting_id}")
            return InferenceError(MESSAGES["no_analysis"])

        return Ok(text)

    def analyze(self, user_id: str, posting_id: str, posting_type: str) -> str:
        """Run the pipeline and flatten the outcome to text. Never raises."""
        try:
            result = self.run(user_id, posting_id, posting_type)
        except Exception as e:
            logger.error(f"Analysis failed for user {user_id}, {posting_type} {posting_id}: {e}", exc_info=True)
            result = InferenceError(MESSAGES["analysis_failed"])

        logger.info(f"Analysis for user {user_id}, {posting_type} {posting_id}: {type(result).__name__}")
        return result_text(result)
