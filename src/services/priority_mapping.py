"""
Priority mapping against the issue taxonomy.

Each free-text priority is either flagged (extreme or out-of-scope phrasing)
or mapped onto weighted issue matches. Mapped issues are then aggregated into
dominant categories and checked for conflicts.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from constants.text_patterns import (
    COMPILED_FLAGGED_PRIORITY_PATTERNS,
    COMPOUND_PHRASE_BOOSTS,
    FALLBACK_CONFIDENCE,
    MAX_DOMINANT_CATEGORIES,
    MIN_FALLBACK_WORD_LENGTH,
    START_OF_TEXT_BOOST,
    WORD_PATTERN,
)
from models.domain import (
    ConflictDefinition,
    ConflictSeverity,
    ConflictType,
    FlaggedPriority,
    Issue,
    IssueMatch,
    MappedPriority,
    PoliticalCategory,
    PriorityAnalysis,
    clamp_score,
)
from services.catalog import load_conflicts, load_issues

logger = logging.getLogger(__name__)


def _norm(text: str) -> str:
    return (text or "").strip().casefold()


def _words(text: str) -> set[str]:
    return {w for w in WORD_PATTERN.findall(_norm(text)) if len(w) >= MIN_FALLBACK_WORD_LENGTH}


def flag_priority(priority: str) -> Optional[FlaggedPriority]:
    for pattern, flag_type, reason in COMPILED_FLAGGED_PRIORITY_PATTERNS:
        if pattern.search(priority):
            return FlaggedPriority(user_priority=priority, flag_type=flag_type, reason=reason)
    return None


def term_match_signal(priority: str, terms: Iterable[str]) -> float:
    """Best containment signal of any term, scaled by how much of the priority it covers."""
    haystack = _norm(priority)
    if not haystack:
        return 0.0
    best = 0.0
    for term in terms:
        needle = _norm(term)
        if not needle or needle not in haystack:
            continue
        score = len(needle) / len(haystack)
        if haystack.startswith(needle):
            score *= START_OF_TEXT_BOOST
        best = max(best, score)
    return best


def score_issue(priority: str, issue: Issue) -> IssueMatch:
    haystack = _norm(priority)
    if any(haystack == _norm(s) for s in issue.synonyms):
        signal = 1.0
    else:
        signal = min(1.0, term_match_signal(priority, issue.all_terms))
    matched = [t for t in issue.all_terms if _norm(t) and _norm(t) in haystack]
    return IssueMatch(issue=issue, confidence=clamp_score(signal * issue.weight), matched_terms=matched)


def _issue_vocabulary(issue: Issue) -> set[str]:
    words: set[str] = set()
    for text in (issue.name, *issue.all_terms):
        words |= _words(text)
    return words


def _fallback_issue(priority: str, issues: Sequence[Issue]) -> Issue:
    priority_words = _words(priority)
    best_issue, best_overlap = issues[0], 0
    for issue in issues:
        overlap = len(priority_words & _issue_vocabulary(issue))
        if overlap > best_overlap:
            best_issue, best_overlap = issue, overlap
    return best_issue


def _category_boosts(priority: str) -> List[PoliticalCategory]:
    haystack = _norm(priority)
    boosted: List[PoliticalCategory] = []
    for keywords, categories in COMPOUND_PHRASE_BOOSTS:
        if all(k in haystack for k in keywords):
            boosted.extend(categories)
    return boosted


def _approach_conflicts(first: Issue, second: Issue) -> List[ConflictDefinition]:
    conflicts = []
    for a in first.policy_approaches:
        for b in second.policy_approaches:
            if b.name in a.conflicting_approaches or a.name in b.conflicting_approaches:
                conflicts.append(
                    ConflictDefinition(
                        issues=(first.id, second.id),
                        reason=f"Conflicting approaches: {a.name} vs {b.name}",
                        severity=ConflictSeverity.MEDIUM,
                        type=ConflictType.IMPLEMENTATION,
                        possible_compromises=(
                            f"Consider balanced approach between {a.name} and {b.name}",
                            "Seek expert mediation for implementation strategy",
                        ),
                    )
                )
    return conflicts


def _opposition_conflict(issue: Issue, opposing: Issue) -> ConflictDefinition:
    return ConflictDefinition(
        issues=(issue.id, opposing.id),
        reason=f"Direct policy opposition between {issue.name} and {opposing.name}",
        severity=ConflictSeverity.HIGH,
        type=ConflictType.POLICY,
        possible_compromises=(
            "Seek balanced approach considering both perspectives",
            "Consider phased implementation to address concerns",
        ),
    )


class PriorityMappingService:
    """Maps free-text voter priorities onto the issue taxonomy."""

    def __init__(
        self,
        issues: Optional[Sequence[Issue]] = None,
        conflicts: Optional[Sequence[ConflictDefinition]] = None,
    ):
        self.issues = tuple(issues) if issues is not None else load_issues()
        self.conflicts = tuple(conflicts) if conflicts is not None else load_conflicts()
        if not self.issues:
            raise ValueError("Issue taxonomy is empty")

    def analyze_priorities(self, priorities: Sequence[str]) -> PriorityAnalysis:
        flagged: List[FlaggedPriority] = []
        mapped: List[MappedPriority] = []

        for priority in priorities:
            if not (priority or "").strip():
                continue
            flag = flag_priority(priority)
            if flag:
                logger.warning(f"Flagged priority ({flag.flag_type.value}): {priority!r}")
                flagged.append(flag)
                continue
            mapped.append(self.map_priority(priority))

        all_issues = [m.issue for mp in mapped for m in mp.mapped_issues]
        return PriorityAnalysis(
            mapped_priorities=mapped,
            dominant_categories=self.dominant_categories(mapped),
            potential_conflicts=self.find_conflicts(all_issues),
            flagged_priorities=flagged,
        )

    def map_priority(self, priority: str) -> MappedPriority:
        scored = [score_issue(priority, issue) for issue in self.issues]
        matches = sorted((m for m in scored if m.confidence > 0), key=lambda m: m.confidence, reverse=True)
        if not matches:
            issue = _fallback_issue(priority, self.issues)
            logger.info(f"No taxonomy terms in {priority!r}; falling back to {issue.id}")
            matches = [IssueMatch(issue=issue, confidence=FALLBACK_CONFIDENCE, matched_terms=[priority])]
        return MappedPriority(user_priority=priority, mapped_issues=matches)

    def dominant_categories(self, mapped: Iterable[MappedPriority]) -> List[PoliticalCategory]:
        counts: Counter = Counter()
        for mapped_priority in mapped:
            counts.update(m.issue.category for m in mapped_priority.mapped_issues)
            counts.update(_category_boosts(mapped_priority.user_priority))
        order = list(PoliticalCategory)
        ranked = sorted((c for c in counts if counts[c] > 0), key=lambda c: (-counts[c], order.index(c)))
        return ranked[:MAX_DOMINANT_CATEGORIES]

    def find_conflicts(self, mapped_issues: Iterable[Issue]) -> List[ConflictDefinition]:
        # All-pairs over the mapped issues; request sizes stay in the tens.
        unique = list({issue.id: issue for issue in mapped_issues}.values())
        present = {issue.id: issue for issue in unique}
        conflicts: List[ConflictDefinition] = []

        for conflict in self.conflicts:
            first, second = conflict.issues
            if first in present and second in present:
                conflicts.append(conflict)

        # Unordered pairs: a pair whose approaches name each other yields one
        # conflict, and a repeated issue never pairs with itself.
        for i, first in enumerate(unique):
            for second in unique[i + 1:]:
                conflicts.extend(_approach_conflicts(first, second))

        for issue in unique:
            for opposing_id in issue.opposing_issues:
                if opposing_id in present:
                    conflicts.append(_opposition_conflict(issue, present[opposing_id]))

        return conflicts
