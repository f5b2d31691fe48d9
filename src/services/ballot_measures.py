"""
Ballot measure relevance scoring.

Measures are filtered by exact location code, then scored against the mapped
priorities by category and title/description overlap. When no measure applies
to the location the whole roster is returned and every match is marked as a
fallback.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from models.domain import (
    BallotMeasure,
    BallotMeasureMatch,
    MeasureImpactAnalysis,
    PriorityAnalysis,
    clamp_score,
)
from services.catalog import load_ballot_measures

logger = logging.getLogger(__name__)

BASE_RELEVANCE = 0.5
CATEGORY_MATCH_INCREMENT = 0.1

DEFAULT_PROS = ["Could benefit local communities", "Addresses important issues"]
DEFAULT_CONS = ["May increase costs", "Implementation challenges exist"]
DEFAULT_UNCERTAIN_IMPACTS = ["Long-term effects unclear", "Implementation timeline uncertain"]
FISCAL_MARKERS = ("tax", "bond", "fee", "levy")


def _category_label(category: str) -> str:
    return category.replace("_", " ").casefold()


def _category_hit(category: str, priority: str, measure: BallotMeasure) -> bool:
    text = priority.casefold()
    if not text.strip():
        return False
    return (
        _category_label(category) in text
        or text in measure.title.casefold()
        or text in measure.description.casefold()
    )


def filter_by_location(measures: Sequence[BallotMeasure], location: str) -> Tuple[List[BallotMeasure], bool]:
    local = [m for m in measures if location in m.applicable_locations]
    if local:
        return local, False
    return list(measures), True


class BallotMeasureService:
    """Scores the ballot measure roster against a priority analysis and location."""

    def __init__(self, measures: Optional[Sequence[BallotMeasure]] = None):
        self.measures = tuple(measures) if measures is not None else load_ballot_measures()

    def find_relevant_measures(
        self,
        analysis: PriorityAnalysis,
        location: str,
        mode: Optional[str] = None,
    ) -> List[BallotMeasureMatch]:
        measures, is_fallback = filter_by_location(self.measures, location)
        if is_fallback and measures:
            logger.warning(f"No ballot measures for location {location!r}; returning {len(measures)} fallback measures")

        priorities = analysis.user_priorities
        matches = [self._match_measure(m, priorities, is_fallback) for m in measures]
        logger.debug(f"Scored {len(matches)} ballot measures for mode={mode}")
        return sorted(matches, key=lambda m: m.relevance_score, reverse=True)

    def _match_measure(self, measure: BallotMeasure, priorities: List[str], is_fallback: bool) -> BallotMeasureMatch:
        score = BASE_RELEVANCE
        matched_categories: List[str] = []
        relevant: List[str] = []
        for category in measure.categories:
            for priority in priorities:
                if not _category_hit(category, priority, measure):
                    continue
                score = clamp_score(score + CATEGORY_MATCH_INCREMENT)
                if category not in matched_categories:
                    matched_categories.append(category)
                if priority not in relevant:
                    relevant.append(priority)

        return BallotMeasureMatch(
            ballot_measure=measure,
            relevance_score=score,
            relevant_priorities=relevant or priorities[:1],
            explanation=self._explanation(measure, matched_categories, relevant, priorities),
            pros=self._pros(measure, matched_categories),
            cons=self._cons(measure),
            impact_analysis=self._impact_analysis(measure, matched_categories, relevant),
            is_fallback=is_fallback,
        )

    def _explanation(
        self,
        measure: BallotMeasure,
        matched_categories: List[str],
        relevant: List[str],
        priorities: List[str],
    ) -> str:
        categories = matched_categories or list(measure.categories)
        topic = _category_label(categories[0]) if categories else "local policy"
        explanation = f"This measure relates to {topic}"
        if relevant:
            return f"{explanation} which aligns with your priority of {relevant[0]}"
        if priorities:
            return f"{explanation} which may be relevant to your interest in {priorities[0]}"
        return explanation

    def _pros(self, measure: BallotMeasure, matched_categories: List[str]) -> List[str]:
        pros = [f"Advances {_category_label(c)} goals you listed" for c in matched_categories]
        pros += [f"Backed by {s}" for s in measure.supporters]
        return pros or list(DEFAULT_PROS)

    def _cons(self, measure: BallotMeasure) -> List[str]:
        cons = [f"Opposed by {o}" for o in measure.opposers]
        if any(marker in measure.description.casefold() for marker in FISCAL_MARKERS):
            cons.append("Adds public cost or new revenue obligations")
        return cons or list(DEFAULT_CONS)

    def _impact_analysis(
        self,
        measure: BallotMeasure,
        matched_categories: List[str],
        relevant: List[str],
    ) -> MeasureImpactAnalysis:
        positive = [
            f"Could improve {_category_label(c)} outcomes related to {relevant[0]}"
            for c in matched_categories
        ] or ["Could improve quality of life", "May address key community needs"]
        negative = ["Potential tax implications"] if any(
            marker in measure.description.casefold() for marker in FISCAL_MARKERS
        ) else ["May have unintended consequences"]
        return MeasureImpactAnalysis(
            positive_impacts=positive,
            negative_impacts=negative,
            uncertain_impacts=list(DEFAULT_UNCERTAIN_IMPACTS),
        )
