"""
Error taxonomy for the recommendation pipeline.

ValidationError is raised at the request boundary before the core runs.
MappingError and MatchError are raised inside the core and are converted
into an ``error`` annotation on the result by the orchestrator.
"""


class RecommendationError(Exception):
    """Base class for recommendation pipeline errors."""
    pass


class ValidationError(RecommendationError):
    """Raised when a recommendation request is malformed."""
    pass


class MappingError(RecommendationError):
    """Raised when priorities cannot be mapped onto the issue taxonomy."""
    pass


class MatchError(RecommendationError):
    """Raised when candidate or ballot measure matching fails."""

    def __init__(self, branch: str, message: str):
        super().__init__(f"{branch} matching failed: {message}")
        self.branch = branch
