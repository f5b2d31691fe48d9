"""API routers."""

try:
    from api.routers import recommendations
except ImportError:
    from src.api.routers import recommendations

__all__ = ["recommendations"]
