"""
Repo Builder - Build, sign and index OS package repositories.

This package turns built packages into Debian-style repositories: it
scaffolds the architecture directories, regenerates the package indexes,
builds and signs the Release manifest and writes static index pages.
"""

from ._version import __version__

from .models import BuildConfig, DistroSpec, RepositoryLayout
from .repository import DebRepositoryJob, MetadataGenerator, PackageInjector, ReleaseManifestBuilder, ensure_arch_dirs
from .services import NotarySigner, StaticIndexPageBuilder, build_jobs, run_jobs
from .utils import ErrorCollector, OutputStore, setup_logging, get_logger
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "BuildConfig",
    "DistroSpec",
    "RepositoryLayout",
    "DebRepositoryJob",
    "MetadataGenerator",
    "PackageInjector",
    "ReleaseManifestBuilder",
    "ensure_arch_dirs",
    "NotarySigner",
    "StaticIndexPageBuilder",
    "build_jobs",
    "run_jobs",
    "ErrorCollector",
    "OutputStore",
    "setup_logging",
    "get_logger",
    "cli_main",
    "cli_group",
]
