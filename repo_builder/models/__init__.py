"""
Pydantic models for repo-builder.

This package contains all Pydantic models used in the application:
- base: Shared model configuration
- distro: Distribution descriptors and repository layout
- config: Configuration file schema
- results: Command and job results
"""

from .base import RepoBuilderBaseModel
from .distro import DistroSpec, RepositoryLayout
from .config import BuildConfig, IndexPageConfig, NotaryConfig, TemplatesConfig
from .results import CommandResult, JobResult

__all__ = [
    "RepoBuilderBaseModel",
    "DistroSpec",
    "RepositoryLayout",
    "BuildConfig",
    "IndexPageConfig",
    "NotaryConfig",
    "TemplatesConfig",
    "CommandResult",
    "JobResult",
]
