"""Version information for repo-builder."""

__version__ = "1.0.0"
