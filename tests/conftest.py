"""Test fixtures for service and API tests."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))


ensure_src_on_path()

os.environ.setdefault("ENABLE_LLM_ANALYSIS", "false")
os.environ.setdefault("ENABLE_CIVIC_LOOKUP", "false")

try:
    from api.routers import recommendations
except ImportError:
    from src.api.routers import recommendations

from services.recommendation_cache import RecommendationCache
from services.recommendation_service import RecommendationService


@pytest.fixture(scope="function")
def recommendation_cache() -> RecommendationCache:
    return RecommendationCache()


@pytest.fixture(scope="function")
def recommendation_service(recommendation_cache: RecommendationCache) -> RecommendationService:
    return RecommendationService(cache=recommendation_cache, cache_enabled=True)


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="Ballot Compass Test",
        description="Match voter priorities to candidates, ballot measures and policies",
        version="0.1.0",
        lifespan=test_lifespan,
    )

    app.include_router(recommendations.router, prefix="/api/v1/recommendations", tags=["recommendations"])

    @app.get("/")
    async def root():
        return {
            "name": "Ballot Compass",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(test_app: FastAPI, recommendation_service: RecommendationService):
    test_app.dependency_overrides[recommendations.get_recommendation_service] = lambda: recommendation_service
    test_app.dependency_overrides[recommendations.get_llm_analyzer] = lambda: None
    test_app.dependency_overrides[recommendations.get_civic_lookup] = lambda: None
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
