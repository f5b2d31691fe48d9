import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class PoliticalCategory(str, enum.Enum):
    EDUCATION = "EDUCATION"
    ECONOMY = "ECONOMY"
    HEALTHCARE = "HEALTHCARE"
    ENVIRONMENT = "ENVIRONMENT"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    PUBLIC_SAFETY = "PUBLIC_SAFETY"
    SOCIAL_SERVICES = "SOCIAL_SERVICES"
    HOUSING = "HOUSING"
    IMMIGRATION = "IMMIGRATION"
    FOREIGN_POLICY = "FOREIGN_POLICY"
    CIVIL_RIGHTS = "CIVIL_RIGHTS"
    TAXATION = "TAXATION"
    TECHNOLOGY = "TECHNOLOGY"
    AGRICULTURE = "AGRICULTURE"
    ENERGY = "ENERGY"
    DEFENSE = "DEFENSE"
    LABOR = "LABOR"
    TRANSPORTATION = "TRANSPORTATION"
    CRIMINAL_JUSTICE = "CRIMINAL_JUSTICE"
    ELECTORAL_REFORM = "ELECTORAL_REFORM"


class FlagType(str, enum.Enum):
    EXTREME = "extreme"
    OUT_OF_SCOPE = "out_of_scope"


class ConflictSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConflictType(str, enum.Enum):
    RESOURCE = "resource"
    IMPLEMENTATION = "implementation"
    POLICY = "policy"


class Stance(str, enum.Enum):
    SUPPORT = "support"
    OPPOSE = "oppose"
    NEUTRAL = "neutral"


class RecommendationMode(str, enum.Enum):
    CURRENT = "current"
    DEMO = "demo"


def clamp_score(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class PolicyApproach:
    name: str
    conflicting_approaches: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Issue:
    """A taxonomy entry used as matching vocabulary."""
    id: str
    name: str
    category: PoliticalCategory
    synonyms: Tuple[str, ...]
    related_terms: Tuple[str, ...]
    weight: float = 1.0
    description: str = ""
    policy_approaches: Tuple[PolicyApproach, ...] = ()
    opposing_issues: Tuple[str, ...] = ()

    @property
    def all_terms(self) -> Tuple[str, ...]:
        return self.synonyms + self.related_terms


@dataclass(frozen=True)
class ConflictDefinition:
    issues: Tuple[str, str]
    reason: str
    severity: ConflictSeverity
    type: ConflictType
    possible_compromises: Tuple[str, ...] = ()


@dataclass
class IssueMatch:
    issue: Issue
    confidence: float
    matched_terms: List[str] = field(default_factory=list)


@dataclass
class MappedPriority:
    user_priority: str
    mapped_issues: List[IssueMatch] = field(default_factory=list)


@dataclass
class FlaggedPriority:
    user_priority: str
    flag_type: FlagType
    reason: str


@dataclass
class PriorityAnalysis:
    """Result of mapping a request's priorities onto the issue taxonomy."""
    mapped_priorities: List[MappedPriority] = field(default_factory=list)
    dominant_categories: List[PoliticalCategory] = field(default_factory=list)
    potential_conflicts: List[ConflictDefinition] = field(default_factory=list)
    flagged_priorities: List[FlaggedPriority] = field(default_factory=list)

    @property
    def user_priorities(self) -> List[str]:
        return [p.user_priority for p in self.mapped_priorities]


@dataclass(frozen=True)
class CandidatePosition:
    issue: str
    stance: Stance
    strength: float


@dataclass(frozen=True)
class Candidate:
    id: str
    name: str
    party: str
    office: str
    positions: Tuple[CandidatePosition, ...] = ()


@dataclass
class CandidateMatch:
    candidate: Candidate
    alignment_score: float
    matched_priorities: List[str]
    rationale: str


@dataclass(frozen=True)
class BallotMeasure:
    id: str
    title: str
    description: str
    applicable_locations: Tuple[str, ...] = ()
    supporters: Tuple[str, ...] = ()
    opposers: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()


@dataclass
class MeasureImpactAnalysis:
    positive_impacts: List[str] = field(default_factory=list)
    negative_impacts: List[str] = field(default_factory=list)
    uncertain_impacts: List[str] = field(default_factory=list)


@dataclass
class BallotMeasureMatch:
    ballot_measure: BallotMeasure
    relevance_score: float
    relevant_priorities: List[str]
    explanation: str
    pros: List[str]
    cons: List[str]
    impact_analysis: MeasureImpactAnalysis
    is_fallback: bool = False


@dataclass(frozen=True)
class RecommendationRequest:
    priorities: Tuple[str, ...]
    location: str
    mode: RecommendationMode = RecommendationMode.CURRENT


@dataclass
class CandidateRecommendation:
    name: str
    office: str
    party: str
    position_summary: str
    platform_highlights: List[str]
    rationale: str
    profile_url: str
    alignment_score: float
    alignment: str


@dataclass
class BallotMeasureRecommendation:
    id: str
    title: str
    description: str
    supporters: List[str]
    opposers: List[str]
    explanation: str
    relevance_score: float
    is_fallback: bool
    ballotpedia_link: str


@dataclass
class PolicyRecommendations:
    top_policies: List[str]
    explanation: str


@dataclass
class RecommendationsResult:
    candidates: List[CandidateRecommendation]
    ballot_measures: List[BallotMeasureRecommendation]
    policy_recommendations: PolicyRecommendations
    error: Optional[str] = None
