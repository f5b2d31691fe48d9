from services.catalog.loader import (
    issues_by_id,
    load_ballot_measures,
    load_candidates,
    load_conflicts,
    load_issues,
    reload_catalog,
    warm_catalog,
)

__all__ = [
    "issues_by_id",
    "load_ballot_measures",
    "load_candidates",
    "load_conflicts",
    "load_issues",
    "reload_catalog",
    "warm_catalog",
]
