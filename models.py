from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class UserProfile(BaseModel):
    """Model for a users/{uid} document."""
    model_config = ConfigDict(extra="allow")
    resumeText: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    resumeUpdatedAt: Optional[int] = None  # epoch milliseconds


class MatchResult(BaseModel):
    """One ranked posting. Serialized as {id, title, matchPercent}."""
    posting_id: str = Field(serialization_alias="id")
    title: Optional[str] = None
    match_percent: int = Field(ge=0, le=100, serialization_alias="matchPercent")


class AnalysisRequest(BaseModel):
    """
    Request body for /analysis.

    Fields are optional here so the route can answer 400 (not 422) when
    type or the posting id is missing.
    """
    internshipId: Optional[str] = None
    hackathonId: Optional[str] = None
    type: Optional[str] = None


class AnalysisResponse(BaseModel):
    success: bool = True
    analysis: str


class UploadResumeResponse(BaseModel):
    success: bool = True
    extractedSkills: List[str] = Field(default_factory=list)


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    gemini_api_key: Optional[str] = None
    model_name: str = "gemini-2.0-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout_seconds: int = 60
    max_resume_chars: int = 4000
    max_upload_bytes: int = 10 * 1024 * 1024
