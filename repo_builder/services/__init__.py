"""
Service layer for repository builds.

This package provides the collaborators of the repository pipeline
(signing, index pages) and the service that runs repository jobs.
"""

from .build_service import build_jobs, log_results_summary, run_jobs
from .index_page import StaticIndexPageBuilder
from .notary import NotarySigner

__all__ = [
    "build_jobs",
    "run_jobs",
    "log_results_summary",
    "StaticIndexPageBuilder",
    "NotarySigner",
]
