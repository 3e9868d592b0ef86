"""
Posting Compatibility Analysis

Builds a prompt from a user's profile and one posting, asks Gemini for a
narrative fit assessment and returns the text.

Usage:
    from analysis import AnalysisOrchestrator, GeminiClient

    orchestrator = AnalysisOrchestrator(store, GeminiClient(api_key))
    print(orchestrator.analyze(user_id, internship_id, "internship"))
"""

from .orchestrator import AnalysisOrchestrator, AnalysisResult, Ok, NotFound, InvalidRequest, InferenceError
from .gemini_client import GeminiClient, extract_candidate_text
from .prompt import build_analysis_prompt

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisResult",
    "Ok",
    "NotFound",
    "InvalidRequest",
    "InferenceError",
    "GeminiClient",
    "extract_candidate_text",
    "build_analysis_prompt",
]
