import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_corpus, get_skill_taxonomy, get_text_embedder
from config import settings
from models.requests import QuickRecommendRequest
from models.responses import RecommendResponse
from services import document_parser, recommender
from services.embeddings import EmbeddingUnavailableError, TextEmbedder
from services.job_corpus import JobCorpus
from services.skill_extractor import SkillTaxonomy

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, headers_enabled=True)


@router.get("/health")
async def health(
    corpus: JobCorpus = Depends(get_corpus),
    taxonomy: SkillTaxonomy = Depends(get_skill_taxonomy),
):
    return {
        "status": "ok",
        "jobs_loaded": len(corpus),
        "skills_loaded": len(taxonomy),
        "embedding_model": settings.embedding_model,
    }


async def _run_recommend(
    resume_text: str,
    corpus: JobCorpus,
    taxonomy: SkillTaxonomy,
    embedder: TextEmbedder,
) -> RecommendResponse:
    try:
        return await run_in_threadpool(recommender.recommend, resume_text, corpus, taxonomy, embedder)
    except EmbeddingUnavailableError:
        raise HTTPException(status_code=503, detail="Embedding service unavailable")


@router.post("/recommend", response_model=RecommendResponse)
@limiter.limit(settings.rate_limit)
async def recommend(
    request: Request,
    response: Response,
    resume_file: UploadFile = File(...),
    corpus: JobCorpus = Depends(get_corpus),
    taxonomy: SkillTaxonomy = Depends(get_skill_taxonomy),
    embedder: TextEmbedder = Depends(get_text_embedder),
):
    filename = resume_file.filename or ""
    if not filename.lower().endswith(document_parser.SUPPORTED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Unsupported file type. Use PDF or DOCX")

    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        resume_text = await run_in_threadpool(document_parser.extract_document_text, filename, content)
    except Exception as e:
        logger.warning("Could not parse %s: %s", filename, e)
        raise HTTPException(status_code=400, detail="Could not parse resume file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from resume")

    logger.info("Received %s (%d bytes, %d chars extracted)", filename, len(content), len(resume_text))
    return await _run_recommend(resume_text[:settings.max_resume_chars], corpus, taxonomy, embedder)


@router.post("/recommend/quick", response_model=RecommendResponse)
@limiter.limit(settings.rate_limit)
async def recommend_quick(
    request: Request,
    response: Response,
    body: QuickRecommendRequest,
    corpus: JobCorpus = Depends(get_corpus),
    taxonomy: SkillTaxonomy = Depends(get_skill_taxonomy),
    embedder: TextEmbedder = Depends(get_text_embedder),
):
    if not body.resume_text.strip():
        raise HTTPException(status_code=400, detail="Resume text is empty")
    return await _run_recommend(body.resume_text, corpus, taxonomy, embedder)
