"""radr — Architecture Decision Record manager."""

__version__ = "0.1.0"
