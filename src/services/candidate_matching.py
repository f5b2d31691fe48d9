import logging
from typing import List, Optional, Sequence

from models.domain import Candidate, CandidateMatch, PriorityAnalysis, clamp_score
from services.catalog import load_candidates

logger = logging.getLogger(__name__)

POSITION_MATCH_INCREMENT = 0.2


def _contains_either_way(a: str, b: str) -> bool:
    left, right = a.casefold(), b.casefold()
    return bool(left and right) and (left in right or right in left)


def _rationale(candidate: Candidate, matched: List[str], priorities: List[str]) -> str:
    rationale = f"{candidate.name} aligns with your priorities"
    if matched:
        return f"{rationale} on {' and '.join(matched)}"
    if priorities:
        return f"{rationale} on {priorities[0]}"
    return f"{rationale} on general policy themes"


class CandidateMatchingService:
    """Scores the candidate roster against a priority analysis."""

    def __init__(self, candidates: Optional[Sequence[Candidate]] = None):
        self.candidates = tuple(candidates) if candidates is not None else load_candidates()

    def find_matching_candidates(
        self,
        analysis: PriorityAnalysis,
        mode: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[CandidateMatch]:
        """
        Score every candidate against the mapped priorities.

        Each position whose issue label and a priority contain one another adds
        0.2 x position strength. Candidates without any hit are still returned
        so a non-empty roster never yields an empty list.

        Args:
            analysis: Result of priority mapping
            mode: Recommendation mode (current or demo)
            location: Voter location, reserved for district-aware rosters

        Returns:
            Matches sorted by alignment score, highest first; ties keep roster order
        """
        priorities = analysis.user_priorities
        matches = [self._match_candidate(c, priorities) for c in self.candidates]
        logger.debug(f"Scored {len(matches)} candidates for mode={mode} location={location}")
        return sorted(matches, key=lambda m: m.alignment_score, reverse=True)

    def _match_candidate(self, candidate: Candidate, priorities: List[str]) -> CandidateMatch:
        score = 0.0
        matched: List[str] = []
        for position in candidate.positions:
            for priority in priorities:
                if _contains_either_way(position.issue, priority):
                    score = clamp_score(score + POSITION_MATCH_INCREMENT * position.strength)
                    if priority not in matched:
                        matched.append(priority)
        return CandidateMatch(
            candidate=candidate,
            alignment_score=score,
            matched_priorities=matched or priorities[:1],
            rationale=_rationale(candidate, matched, priorities),
        )
