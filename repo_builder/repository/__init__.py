"""
Debian repository synthesis.

This package scaffolds repository trees, injects packages, regenerates
package indexes and builds Release manifests.
"""

from .arch_dirs import ensure_arch_dirs
from .injector import PackageInjector, link_packages
from .metadata import MetadataGenerator
from .release import ReleaseManifestBuilder, render_release_header
from .job import DebRepositoryJob

__all__ = [
    "ensure_arch_dirs",
    "PackageInjector",
    "link_packages",
    "MetadataGenerator",
    "ReleaseManifestBuilder",
    "render_release_header",
    "DebRepositoryJob",
]
