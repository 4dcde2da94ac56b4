"""kds — browse, fuzzy-find and view Kubernetes secrets in the terminal."""

__version__ = "0.1.0"

__all__ = ["__version__"]
