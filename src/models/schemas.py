from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RecommendationRequestBody(BaseModel):
    priorities: List[str] = Field(default_factory=list, description="Free-text voter priorities")
    zip_code: str = Field(default="", description="Voter location, usually a ZIP code")
    mode: Optional[str] = Field(default="current", description="Recommendation mode (current, demo)")
    use_cache: bool = Field(default=True, description="Set to false to bypass the result cache")


class CandidateRecommendationResponse(BaseModel):
    name: str
    office: str
    party: str
    position_summary: str
    platform_highlights: List[str]
    rationale: str
    profile_url: str
    alignment_score: float
    alignment: str

    model_config = {"from_attributes": True}


class BallotMeasureRecommendationResponse(BaseModel):
    id: str
    title: str
    description: str
    supporters: List[str]
    opposers: List[str]
    explanation: str
    relevance_score: float
    is_fallback: bool
    ballotpedia_link: str

    model_config = {"from_attributes": True}


class PolicyRecommendationsResponse(BaseModel):
    top_policies: List[str]
    explanation: str

    model_config = {"from_attributes": True}


class LLMConflict(BaseModel):
    priority1: str
    priority2: str
    reason: str = ""


class LLMAnalysisResult(BaseModel):
    mappings: Dict[str, List[str]] = Field(default_factory=dict)
    analysis: str = ""
    conflicts: List[LLMConflict] = Field(default_factory=list)
    confidence_scores: Dict[str, float] = Field(default_factory=dict, alias="confidenceScores")

    model_config = {"populate_by_name": True}


class OfficialRecord(BaseModel):
    name: str
    party: Optional[str] = None
    urls: List[str] = Field(default_factory=list)
    phones: List[str] = Field(default_factory=list)


class OfficeRecord(BaseModel):
    name: str
    division_id: Optional[str] = None
    officials: List[OfficialRecord] = Field(default_factory=list)


class RecommendationsResponse(BaseModel):
    candidates: List[CandidateRecommendationResponse]
    ballot_measures: List[BallotMeasureRecommendationResponse]
    policy_recommendations: PolicyRecommendationsResponse
    error: Optional[str] = None
    llm_analysis: Optional[LLMAnalysisResult] = None
    llm_error: Optional[str] = None
    representatives: Optional[List[OfficeRecord]] = None
    civic_error: Optional[str] = None


class IssueSummary(BaseModel):
    id: str
    name: str
    category: str
    weight: float


class ClearCacheResponse(BaseModel):
    cleared: int
