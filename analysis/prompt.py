"""
Prompt construction for the compatibility analysis.

build_analysis_prompt is a pure function of the posting and user fields so
it can be tested without a network call.
"""

from typing import Any, Iterable, Optional

from matching.fields import DEFAULT_DESCRIPTION


def format_skills(value: Any) -> str:
    """Join a skill sequence with commas; strings pass through unchanged."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, set)):
        return ", ".join(str(v) for v in value)
    return str(value)


def format_text(value: Any) -> str:
    """Flatten a free-text field that may be stored as a list, map or number."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return "\n".join(format_text(v) for v in value.values() if v is not None)
    if isinstance(value, (list, tuple)):
        return "\n".join(format_text(v) for v in value if v is not None)
    return str(value)


def build_analysis_prompt(
    posting_type: str,
    description: Any,
    required_skills: Any,
    resume_text: str,
    verified_skills: Optional[Iterable[str]],
) -> str:
    """
    Build the single-turn prompt sent to the model.

    Args:
        posting_type: "internship" or "hackathon"
        description: Resolved posting description (text, or a list/map of text)
        required_skills: Resolved required skills (list or free text)
        resume_text: Resume text, already truncated
        verified_skills: Skills stored on the user's profile

    Returns:
        Prompt text
    """
    required = format_skills(required_skills) or "Not specified"
    verified = format_skills(verified_skills) or "None"
    description = format_text(description) or DEFAULT_DESCRIPTION
    resume = resume_text or "No resume text available."

    return "\n".join([
        f"You are a career advisor. Assess how well this candidate fits the {posting_type} below.",
        "",
        f"{posting_type.capitalize()} description:",
        description,
        "",
        f"Required skills: {required}",
        "",
        "Candidate resume:",
        resume,
        "",
        f"Verified candidate skills: {verified}",
        "",
        "IMPORTANT: Every skill listed under \"Verified candidate skills\" is confirmed for this candidate.",
        "Treat each of them as MATCHED, even if it does not appear in the resume text.",
        "",
        "Respond in this format:",
        "Match score: <0-100>%",
        "Matched skills: <comma-separated list>",
        "Missing skills: <comma-separated list>",
        "Eligibility: <Eligible | Partially eligible | Not eligible>",
        "Recommendations: <2-3 short, concrete suggestions>",
        "",
        "Keep the answer concise and do not use markdown tables.",
    ])
