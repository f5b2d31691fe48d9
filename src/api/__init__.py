try:
    # Installed layout: api is a top-level package
    from api.app import app
except ImportError:
    # Source checkout: api lives under src
    from src.api.app import app

__all__ = ["app"]
