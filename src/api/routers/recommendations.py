"""API router for voter recommendations."""

import asyncio
import logging
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException

from config import settings
from models.schemas import (
    ClearCacheResponse,
    IssueSummary,
    RecommendationRequestBody,
    RecommendationsResponse,
)
from services.catalog import load_issues
from services.civic_lookup import CivicLookupService
from services.errors import ValidationError
from services.llm_priority_analyzer import LLMPriorityAnalyzer
from services.recommendation_service import RecommendationService, build_request

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_recommendation_service() -> RecommendationService:
    return RecommendationService()


def get_llm_analyzer() -> Optional[LLMPriorityAnalyzer]:
    if not settings.enable_llm_analysis:
        return None
    return LLMPriorityAnalyzer()


def get_civic_lookup() -> Optional[CivicLookupService]:
    if not settings.enable_civic_lookup:
        return None
    return CivicLookupService()


async def _collect(label: str, call: Optional[Callable[[], Awaitable[Any]]]) -> Tuple[Any, Optional[str]]:
    if call is None:
        return None, None
    try:
        return await call(), None
    except Exception as e:
        logger.error(f"{label} failed: {e}")
        return None, str(e) or type(e).__name__


@router.post("", response_model=RecommendationsResponse)
async def create_recommendations(
    body: RecommendationRequestBody,
    service: RecommendationService = Depends(get_recommendation_service),
    llm_analyzer: Optional[LLMPriorityAnalyzer] = Depends(get_llm_analyzer),
    civic_lookup: Optional[CivicLookupService] = Depends(get_civic_lookup),
) -> RecommendationsResponse:
    """
    Generate candidate, ballot measure and policy recommendations.

    Args:
        body: Priorities, ZIP code and mode
        service: Recommendation orchestrator
        llm_analyzer: Optional LLM priority analyzer, None when disabled
        civic_lookup: Optional representative lookup, None when disabled

    Returns:
        Recommendations plus optional LLM analysis and representatives

    Raises:
        HTTPException: If the request is malformed
    """
    try:
        request = build_request(body.priorities, body.zip_code, body.mode)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        f"Recommendations requested for {len(request.priorities)} priorities "
        f"at '{request.location}' in {request.mode.value} mode"
    )

    priorities = list(request.priorities)
    llm_call = (lambda: llm_analyzer.analyze(priorities)) if llm_analyzer else None
    civic_call = (lambda: civic_lookup.lookup_representatives(request.location)) if civic_lookup else None

    result, (llm_analysis, llm_error), (representatives, civic_error) = await asyncio.gather(
        service.generate_recommendations(request, use_cache=body.use_cache),
        _collect("LLM priority analysis", llm_call),
        _collect("Civic lookup", civic_call),
    )

    return RecommendationsResponse(
        **asdict(result),
        llm_analysis=llm_analysis,
        llm_error=llm_error,
        representatives=representatives,
        civic_error=civic_error,
    )


@router.delete("/cache", response_model=ClearCacheResponse)
async def clear_recommendation_cache(
    service: RecommendationService = Depends(get_recommendation_service),
) -> ClearCacheResponse:
    return ClearCacheResponse(cleared=service.cache.clear())


@router.get("/issues", response_model=List[IssueSummary])
async def list_issues() -> List[IssueSummary]:
    return [
        IssueSummary(id=issue.id, name=issue.name, category=issue.category.value, weight=issue.weight)
        for issue in load_issues()
    ]
