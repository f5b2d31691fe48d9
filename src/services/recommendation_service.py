"""
Recommendation orchestration.

Runs priority mapping, candidate matching and ballot measure matching in
sequence, isolates failures per matching branch, derives a policy summary and
caches whole results keyed by (priority set, location, mode).
"""

import logging
import re
from typing import List, Optional

from config import settings
from models.domain import (
    BallotMeasureMatch,
    BallotMeasureRecommendation,
    Candidate,
    CandidateMatch,
    CandidateRecommendation,
    PolicyRecommendations,
    PriorityAnalysis,
    RecommendationRequest,
    RecommendationMode,
    RecommendationsResult,
    Stance,
)
from services.ballot_measures import BallotMeasureService
from services.candidate_matching import CandidateMatchingService
from services.errors import MappingError, MatchError, ValidationError
from services.priority_mapping import PriorityMappingService
from services.recommendation_cache import RecommendationCache, get_recommendation_cache, make_cache_key

logger = logging.getLogger(__name__)

NO_POLICY_FOCUS = "No specific policy focus identified from priorities."
POLICY_EXPLANATION = "These recommendations are based on your stated priorities."
FAILURE_EXPLANATION = "Unable to generate recommendations due to an error."
BALLOTPEDIA_BASE = "https://ballotpedia.org"

STANCE_VERBS = {
    Stance.SUPPORT: "Supports",
    Stance.OPPOSE: "Opposes",
    Stance.NEUTRAL: "Neutral on",
}


def alignment_label(score: float) -> str:
    if score > 0.7:
        return "strong"
    if score > 0.4:
        return "partial"
    return "weak"


def position_summary(candidate: Candidate) -> str:
    if not candidate.positions:
        return "Position information unavailable"
    return ", ".join(f"{STANCE_VERBS[p.stance]} {p.issue.lower()}" for p in candidate.positions[:3])


def platform_highlights(candidate: Candidate) -> List[str]:
    if not candidate.positions:
        return ["Platform information unavailable"]
    return [f"{STANCE_VERBS[p.stance]} {p.issue}" for p in candidate.positions]


def _profile_url(name: str) -> str:
    slug = re.sub(r"\s+", "_", name.strip())
    return f"{BALLOTPEDIA_BASE}/{slug}"


def to_candidate_recommendation(match: CandidateMatch) -> CandidateRecommendation:
    candidate = match.candidate
    return CandidateRecommendation(
        name=candidate.name,
        office=candidate.office,
        party=candidate.party,
        position_summary=position_summary(candidate),
        platform_highlights=platform_highlights(candidate),
        rationale=match.rationale,
        profile_url=_profile_url(candidate.name),
        alignment_score=match.alignment_score,
        alignment=alignment_label(match.alignment_score),
    )


def to_measure_recommendation(match: BallotMeasureMatch) -> BallotMeasureRecommendation:
    measure = match.ballot_measure
    return BallotMeasureRecommendation(
        id=measure.id,
        title=measure.title,
        description=measure.description,
        supporters=list(measure.supporters),
        opposers=list(measure.opposers),
        explanation=match.explanation,
        relevance_score=match.relevance_score,
        is_fallback=match.is_fallback,
        ballotpedia_link=f"{BALLOTPEDIA_BASE}/{measure.id}",
    )


def policy_recommendations(analysis: PriorityAnalysis) -> PolicyRecommendations:
    top = [mp.user_priority for mp in analysis.mapped_priorities if mp.mapped_issues]
    return PolicyRecommendations(top_policies=top or [NO_POLICY_FOCUS], explanation=POLICY_EXPLANATION)


def failed_result(message: str) -> RecommendationsResult:
    return RecommendationsResult(
        candidates=[],
        ballot_measures=[],
        policy_recommendations=PolicyRecommendations(top_policies=[], explanation=FAILURE_EXPLANATION),
        error=message,
    )


def build_request(priorities, location, mode=None) -> RecommendationRequest:
    """Validate raw request fields and build the core request, raising ValidationError when malformed."""
    if not isinstance(priorities, (list, tuple)) or not priorities:
        raise ValidationError("Missing or invalid priorities")
    if not all(isinstance(p, str) for p in priorities):
        raise ValidationError("Priorities must be text")
    if not any(p.strip() for p in priorities):
        raise ValidationError("Priorities must not all be blank")
    if not isinstance(location, str) or not location.strip():
        raise ValidationError("Missing or invalid location")

    try:
        request_mode = RecommendationMode(mode) if mode else RecommendationMode.CURRENT
    except ValueError:
        raise ValidationError(f"Invalid mode: {mode}")

    return RecommendationRequest(priorities=tuple(priorities), location=location, mode=request_mode)


class RecommendationService:
    """Composes the matching services into a single recommendation result."""

    def __init__(
        self,
        priority_mapper: Optional[PriorityMappingService] = None,
        candidate_matcher: Optional[CandidateMatchingService] = None,
        ballot_measure_analyzer: Optional[BallotMeasureService] = None,
        cache: Optional[RecommendationCache] = None,
        cache_enabled: Optional[bool] = None,
    ):
        self.priority_mapper = priority_mapper or PriorityMappingService()
        self.candidate_matcher = candidate_matcher or CandidateMatchingService()
        self.ballot_measure_analyzer = ballot_measure_analyzer or BallotMeasureService()
        self.cache = cache if cache is not None else get_recommendation_cache()
        self.cache_enabled = settings.recommendation_cache_enabled if cache_enabled is None else cache_enabled

    async def generate_recommendations(
        self,
        request: RecommendationRequest,
        use_cache: bool = True,
    ) -> RecommendationsResult:
        """
        Generate recommendations for a request. Never raises.

        Args:
            request: Priorities, location and mode
            use_cache: Set to False to bypass the result cache for this call

        Returns:
            Recommendations; ``error`` is set when mapping or a matching branch failed
        """
        caching = self.cache_enabled and use_cache
        key = make_cache_key(request.priorities, request.location, request.mode)
        if caching:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Recommendation cache hit for {key}")
                return cached

        try:
            result = self._build(request)
        except MappingError as e:
            logger.error(f"Priority mapping failed: {e}")
            return failed_result(str(e))
        except Exception as e:
            logger.exception("Unexpected error while generating recommendations")
            return failed_result(str(e) or type(e).__name__)

        if caching:
            self.cache.put(key, result)
        return result

    def _build(self, request: RecommendationRequest) -> RecommendationsResult:
        analysis = self._analyze(request)
        logger.info(
            f"Mapped {len(analysis.mapped_priorities)} priorities, "
            f"flagged {len(analysis.flagged_priorities)}, "
            f"dominant categories: {[c.value for c in analysis.dominant_categories]}"
        )

        errors: List[str] = []
        candidates = self._match_candidates(analysis, request, errors)
        measures = self._match_measures(analysis, request, errors)

        return RecommendationsResult(
            candidates=candidates,
            ballot_measures=measures,
            policy_recommendations=policy_recommendations(analysis),
            error="; ".join(errors) or None,
        )

    def _analyze(self, request: RecommendationRequest) -> PriorityAnalysis:
        try:
            return self.priority_mapper.analyze_priorities(list(request.priorities))
        except Exception as e:
            raise MappingError(str(e) or type(e).__name__) from e

    def _match_candidates(
        self,
        analysis: PriorityAnalysis,
        request: RecommendationRequest,
        errors: List[str],
    ) -> List[CandidateRecommendation]:
        try:
            matches = self.candidate_matcher.find_matching_candidates(
                analysis,
                mode=request.mode.value,
                location=request.location,
            )
            return [to_candidate_recommendation(m) for m in matches]
        except Exception as e:
            error = MatchError("Candidate", str(e) or type(e).__name__)
            logger.error(str(error))
            errors.append(str(error))
            return []

    def _match_measures(
        self,
        analysis: PriorityAnalysis,
        request: RecommendationRequest,
        errors: List[str],
    ) -> List[BallotMeasureRecommendation]:
        try:
            matches = self.ballot_measure_analyzer.find_relevant_measures(
                analysis,
                request.location,
                mode=request.mode.value,
            )
            return [to_measure_recommendation(m) for m in matches]
        except Exception as e:
            error = MatchError("Ballot measure", str(e) or type(e).__name__)
            logger.error(str(error))
            errors.append(str(error))
            return []
