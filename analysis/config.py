"""
Configuration for the posting analysis pipeline.
"""

# Resume characters embedded in the prompt
MAX_RESUME_CHARS = 4000

# Gemini request defaults
GEMINI_CONFIG = {
    "model": "gemini-2.0-flash",
    "api_base": "https://generativelanguage.googleapis.com/v1beta",
    "timeout_seconds": 60,
}

# User-facing messages returned instead of an analysis
MESSAGES = {
    "profile_not_found": "User profile not found. Please upload your resume first.",
    "invalid_type": "Invalid analysis type. Expected 'internship' or 'hackathon'.",
    "posting_not_found": "{label} not found.",
    "no_analysis": "No analysis returned. Please try again.",
    "analysis_failed": "Analysis failed. Please try again later.",
}
