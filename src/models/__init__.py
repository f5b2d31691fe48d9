from models.domain import (
    BallotMeasure,
    BallotMeasureMatch,
    Candidate,
    CandidateMatch,
    ConflictDefinition,
    Issue,
    IssueMatch,
    MappedPriority,
    PoliticalCategory,
    PriorityAnalysis,
    RecommendationMode,
    RecommendationRequest,
    RecommendationsResult,
)

__all__ = [
    "BallotMeasure",
    "BallotMeasureMatch",
    "Candidate",
    "CandidateMatch",
    "ConflictDefinition",
    "Issue",
    "IssueMatch",
    "MappedPriority",
    "PoliticalCategory",
    "PriorityAnalysis",
    "RecommendationMode",
    "RecommendationRequest",
    "RecommendationsResult",
]
