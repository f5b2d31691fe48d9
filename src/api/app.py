import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import recommendations
from config import settings
from services.catalog import warm_catalog

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    issues, conflicts, candidates, measures = warm_catalog()
    logger.info(
        f"Loaded catalog: {issues} issues, {conflicts} conflicts, "
        f"{candidates} candidates, {measures} ballot measures"
    )
    if settings.enable_llm_analysis:
        logger.info(f"LLM priority analysis enabled with model {settings.openai_model}")
    if settings.enable_civic_lookup:
        logger.info("Civic representative lookup enabled")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Match voter priorities to candidates, ballot measures and policies",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recommendations.router, prefix="/api/v1/recommendations", tags=["recommendations"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
