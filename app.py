from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, UploadFile, File, Header, HTTPException, Depends
from fastapi.responses import PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from models import (
    AnalysisRequest,
    AnalysisResponse,
    MatchResult,
    Settings,
    UploadResumeResponse,
)
from utils import extract_text_from_pdf_bytes, looks_like_pdf, now_ms
from matching import extract_skills, get_recommendations, order_skills
from matching.config import POSTING_COLLECTIONS, USERS_COLLECTION
from analysis import AnalysisOrchestrator, GeminiClient
from analysis.config import GEMINI_CONFIG, MAX_RESUME_CHARS


# Load environment from the project .env if present
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env", override=False)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Opportunity Matching API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> Settings:
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        model_name=os.getenv("GEMINI_MODEL", GEMINI_CONFIG["model"]),
        gemini_api_base=os.getenv("GEMINI_API_BASE", GEMINI_CONFIG["api_base"]),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT_SECONDS", str(GEMINI_CONFIG["timeout_seconds"]))),
        max_resume_chars=int(os.getenv("ANALYSIS_MAX_RESUME_CHARS", str(MAX_RESUME_CHARS))),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
    )


def get_store():
    try:
        from firebase_service import get_firebase_service

        return get_firebase_service()
    except Exception as e:
        logger.error(f"Firebase service not available: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Firebase service not available: {str(e)}"
        )


def get_token_verifier(store=Depends(get_store)) -> Callable[[str], str]:
    return store.verify_id_token


def get_inference_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.model_name,
        api_base=settings.gemini_api_base,
        timeout=settings.request_timeout_seconds,
    )


def get_orchestrator(
    store=Depends(get_store),
    client: GeminiClient = Depends(get_inference_client),
    settings: Settings = Depends(get_settings),
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(store, client, max_resume_chars=settings.max_resume_chars)


async def require_user(
    authorization: Optional[str] = Header(default=None),
    verify_token: Callable[[str], str] = Depends(get_token_verifier),
) -> str:
    """Resolve the bearer token to a user ID or fail with 401."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        return await asyncio.to_thread(verify_token, token)
    except Exception as e:
        logger.info(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")


async def list_postings(store, posting_type: str) -> List[Dict[str, Any]]:
    try:
        return await asyncio.to_thread(store.list, POSTING_COLLECTIONS[posting_type])
    except Exception as e:
        logger.error(f"Failed to list {posting_type} postings: {e}")
        raise HTTPException(status_code=500, detail=str(e))


async def recommendations(store, user_id: str, posting_type: str) -> List[MatchResult]:
    try:
        return await asyncio.to_thread(get_recommendations, store, user_id, posting_type)
    except Exception as e:
        logger.error(f"Failed to rank {posting_type} postings for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Backend running"


@app.get("/internships")
async def get_internships(store=Depends(get_store)):
    return await list_postings(store, "internship")


@app.get("/hackathons")
async def get_hackathons(store=Depends(get_store)):
    return await list_postings(store, "hackathon")


@app.get("/all")
async def get_all_opportunities(store=Depends(get_store)):
    hackathons, internships = await asyncio.gather(
        list_postings(store, "hackathon"),
        list_postings(store, "internship"),
    )
    return hackathons + internships


@app.get("/matching_internships", response_model=List[MatchResult])
async def matching_internships(user_id: str = Depends(require_user), store=Depends(get_store)):
    return await recommendations(store, user_id, "internship")


@app.get("/matching_hackathons", response_model=List[MatchResult])
async def matching_hackathons(user_id: str = Depends(require_user), store=Depends(get_store)):
    return await recommendations(store, user_id, "hackathon")


@app.post("/upload-resume", response_model=UploadResumeResponse)
async def upload_resume(
    resume: Optional[UploadFile] = File(default=None),
    user_id: str = Depends(require_user),
    store=Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Extract text and skills from an uploaded PDF resume and merge them into
    the user's profile. Skills are union-merged; resume text is replaced.
    """
    if resume is None:
        raise HTTPException(status_code=400, detail="Missing resume file")

    resume_bytes = await resume.read(settings.max_upload_bytes + 1)
    if len(resume_bytes) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Resume exceeds the 10 MB upload limit")
    if not resume_bytes or not looks_like_pdf(resume_bytes):
        raise HTTPException(status_code=400, detail="Resume must be a PDF file")

    try:
        resume_text = await asyncio.to_thread(extract_text_from_pdf_bytes, resume_bytes)
    except Exception as e:
        logger.warning(f"Could not read PDF from {user_id}: {e}")
        raise HTTPException(status_code=400, detail="Resume PDF could not be read")

    skills = order_skills(extract_skills(resume_text))
    update: Dict[str, Any] = {
        "resumeText": resume_text,
        "resumeUpdatedAt": now_ms(),
    }
    if skills:
        update["skills"] = skills

    try:
        await asyncio.to_thread(store.merge, USERS_COLLECTION, user_id, update, ("skills",))
    except Exception as e:
        logger.error(f"Failed to save resume for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Resume uploaded for {user_id}: {len(skills)} skills extracted")
    return UploadResumeResponse(success=True, extractedSkills=skills)


@app.post("/analysis", response_model=AnalysisResponse)
async def analysis(
    request: AnalysisRequest,
    user_id: str = Depends(require_user),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    Narrative compatibility report for one posting.

    Always 200 once the request is valid: missing profiles, missing postings
    and model failures are reported inside the analysis text.
    """
    if not request.type:
        raise HTTPException(status_code=400, detail="Missing type")

    item_id = request.internshipId or request.hackathonId
    if not item_id:
        raise HTTPException(status_code=400, detail="Missing item id")

    text = await asyncio.to_thread(orchestrator.analyze, user_id, item_id, request.type)
    return AnalysisResponse(success=True, analysis=text)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
