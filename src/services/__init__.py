from .ballot_measures import BallotMeasureService
from .candidate_matching import CandidateMatchingService
from .errors import MappingError, MatchError, RecommendationError, ValidationError
from .priority_mapping import PriorityMappingService
from .recommendation_cache import RecommendationCache, get_recommendation_cache
from .recommendation_service import RecommendationService, build_request

__all__ = [
    "BallotMeasureService",
    "CandidateMatchingService",
    "MappingError",
    "MatchError",
    "PriorityMappingService",
    "RecommendationCache",
    "RecommendationError",
    "RecommendationService",
    "ValidationError",
    "build_request",
    "get_recommendation_cache",
]
