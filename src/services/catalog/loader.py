"""Catalog loader for the static issue taxonomy and candidate/measure rosters."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from models.domain import (
    BallotMeasure,
    Candidate,
    CandidatePosition,
    ConflictDefinition,
    ConflictSeverity,
    ConflictType,
    Issue,
    PolicyApproach,
    PoliticalCategory,
    Stance,
)

logger = logging.getLogger(__name__)

CATALOG_DIR = Path(__file__).parent


def get_catalog_path(catalog_id: str) -> Path:
    return CATALOG_DIR / f"{catalog_id}.yaml"


@lru_cache(maxsize=8)
def _load_catalog_file(catalog_id: str) -> Tuple[Dict[str, Any], ...]:
    path = get_catalog_path(catalog_id)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        entries = yaml.safe_load(f) or []

    if not isinstance(entries, list):
        raise ValueError(f"Catalog file {path} must contain a list of entries")
    logger.debug(f"Loaded {len(entries)} entries from {path.name}")
    return tuple(entries)


def _strings(values: Any) -> Tuple[str, ...]:
    return tuple(str(v) for v in (values or []))


def _issue(entry: Dict[str, Any]) -> Issue:
    approaches = tuple(
        PolicyApproach(
            name=a["name"],
            conflicting_approaches=_strings(a.get("conflicting_approaches")),
        )
        for a in entry.get("policy_approaches") or []
    )
    return Issue(
        id=entry["id"],
        name=entry["name"],
        category=PoliticalCategory(entry["category"]),
        synonyms=_strings(entry.get("synonyms")),
        related_terms=_strings(entry.get("related_terms")),
        weight=float(entry.get("weight", 1.0)),
        description=entry.get("description", ""),
        policy_approaches=approaches,
        opposing_issues=_strings(entry.get("opposing_issues")),
    )


def _conflict(entry: Dict[str, Any]) -> ConflictDefinition:
    first, second = entry["issues"]
    return ConflictDefinition(
        issues=(first, second),
        reason=entry["reason"],
        severity=ConflictSeverity(entry["severity"]),
        type=ConflictType(entry["type"]),
        possible_compromises=_strings(entry.get("possible_compromises")),
    )


def _candidate(entry: Dict[str, Any]) -> Candidate:
    positions = tuple(
        CandidatePosition(
            issue=p["issue"],
            stance=Stance(p["stance"]),
            strength=float(p["strength"]),
        )
        for p in entry.get("positions") or []
    )
    return Candidate(
        id=entry["id"],
        name=entry["name"],
        party=entry["party"],
        office=entry["office"],
        positions=positions,
    )


def _ballot_measure(entry: Dict[str, Any]) -> BallotMeasure:
    return BallotMeasure(
        id=entry["id"],
        title=entry["title"],
        description=entry["description"],
        applicable_locations=_strings(entry.get("applicable_locations")),
        supporters=_strings(entry.get("supporters")),
        opposers=_strings(entry.get("opposers")),
        categories=_strings(entry.get("categories")),
    )


@lru_cache(maxsize=1)
def load_issues() -> Tuple[Issue, ...]:
    return tuple(_issue(e) for e in _load_catalog_file("issues"))


@lru_cache(maxsize=1)
def load_conflicts() -> Tuple[ConflictDefinition, ...]:
    return tuple(_conflict(e) for e in _load_catalog_file("conflicts"))


@lru_cache(maxsize=1)
def load_candidates() -> Tuple[Candidate, ...]:
    return tuple(_candidate(e) for e in _load_catalog_file("candidates"))


@lru_cache(maxsize=1)
def load_ballot_measures() -> Tuple[BallotMeasure, ...]:
    return tuple(_ballot_measure(e) for e in _load_catalog_file("ballot_measures"))


def issues_by_id() -> Dict[str, Issue]:
    return {issue.id: issue for issue in load_issues()}


def unknown_issue_references(
    known: Dict[str, Issue],
    issues: Iterable[Issue],
    conflicts: Iterable[ConflictDefinition],
) -> List[str]:
    """Describe every opposing-issue or conflict-table id missing from ``known``."""
    missing = []
    for issue in issues:
        missing.extend(
            f"issue {issue.id} opposes unknown issue {opposing}"
            for opposing in issue.opposing_issues
            if opposing not in known
        )
    for conflict in conflicts:
        missing.extend(
            f"conflict {'/'.join(conflict.issues)} names unknown issue {issue_id}"
            for issue_id in conflict.issues
            if issue_id not in known
        )
    return missing


def warm_catalog() -> List[int]:
    """Load every catalog once so request handling never touches disk."""
    for problem in unknown_issue_references(issues_by_id(), load_issues(), load_conflicts()):
        logger.warning(f"Catalog reference never matches: {problem}")
    return [
        len(load_issues()),
        len(load_conflicts()),
        len(load_candidates()),
        len(load_ballot_measures()),
    ]


def reload_catalog() -> None:
    _load_catalog_file.cache_clear()
    load_issues.cache_clear()
    load_conflicts.cache_clear()
    load_candidates.cache_clear()
    load_ballot_measures.cache_clear()
