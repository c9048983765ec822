"""Distribution and repository layout models for repo-builder."""

from pathlib import Path
from typing import List

from pydantic import ConfigDict, Field, field_validator

from ..utils.constants import ARCH_DIR_PREFIX, RELEASE_FILENAME, REPOSITORY_ROOT_DEPTH
from .base import RepoBuilderBaseModel


class DistroSpec(RepoBuilderBaseModel):
    """
    Immutable descriptor of a target distribution.

    Attributes:
        name: Key used to select the distribution in the configuration
        code_name: Distribution code name (e.g., 'xenial')
        component: Repository component (e.g., 'multiverse')
        edition: Product edition used to select the Release template
        architectures: Ordered list of architectures maintained for the distro
        bucket: Storage bucket the repository is published to
        repos: Repository names, relative to the local root
    """

    model_config = ConfigDict(frozen=True)

    name: str
    code_name: str
    component: str
    edition: str
    architectures: List[str] = Field(min_length=1)
    bucket: str
    repos: List[str] = Field(default_factory=list)

    @field_validator("architectures")
    @classmethod
    def validate_architectures(cls, v: List[str]) -> List[str]:
        """Reject blank and duplicated architecture names."""
        if any(not arch.strip() for arch in v):
            raise ValueError("Architecture names must not be empty")

        duplicates = sorted({arch for arch in v if v.count(arch) > 1})
        if duplicates:
            raise ValueError(f"Duplicate architecture(s): {', '.join(duplicates)}")

        return v

    @field_validator("repos")
    @classmethod
    def validate_repos(cls, v: List[str]) -> List[str]:
        """Repository names are joined onto the local root, so they must be relative."""
        for repo in v:
            if Path(repo).is_absolute() or ".." in Path(repo).parts:
                raise ValueError(f"Repository name must be a relative path: {repo}")
        return v

    @property
    def architecture_list(self) -> str:
        """Architectures joined by single spaces, as used in Release headers."""
        return " ".join(self.architectures)


class RepositoryLayout(RepoBuilderBaseModel):
    """
    Location of one component directory inside a repository tree.

    The package index stores paths relative to ``root``, so the scan tool
    runs from there while the Release tooling works from ``working_dir``.

    Attributes:
        root: Absolute repository root
        component_path: Component directory relative to ``root``
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    component_path: Path

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: Path) -> Path:
        """Ensure the root is absolute."""
        if not v.is_absolute():
            raise ValueError(f"Repository root must be absolute: {v}")
        return v

    @field_validator("component_path")
    @classmethod
    def validate_component_path(cls, v: Path) -> Path:
        """Ensure the component path stays inside the root."""
        if v.is_absolute():
            raise ValueError(f"Component path must be relative: {v}")
        if ".." in v.parts or not v.parts:
            raise ValueError(f"Invalid component path: '{v}'")
        return v

    @classmethod
    def from_working_dir(cls, working_dir: Path, depth: int = REPOSITORY_ROOT_DEPTH) -> "RepositoryLayout":
        """
        Split a component directory into repository root and relative path.

        Args:
            working_dir: Component directory
            depth: Number of trailing path segments below the repository root

        Returns:
            RepositoryLayout for the directory

        Raises:
            ValueError: If the directory has too few segments for the depth

        Example:
            >>> layout = RepositoryLayout.from_working_dir(Path("/srv/ubuntu/dists/xenial/org/3.4/multiverse"))
            >>> str(layout.root)
            '/srv/ubuntu'
        """
        if depth < 1:
            raise ValueError(f"Depth must be positive, got {depth}")

        working_dir = Path(working_dir).absolute()
        parts = working_dir.parts
        # parts[0] is the filesystem anchor and can't be part of the relative path
        if len(parts) - 1 < depth:
            raise ValueError(f"Path '{working_dir}' has fewer than {depth} segments below the filesystem root")

        return cls(root=Path(*parts[:-depth]), component_path=Path(*parts[-depth:]))

    @property
    def working_dir(self) -> Path:
        """Absolute component directory."""
        return self.root / self.component_path

    @property
    def release_dir(self) -> Path:
        """Directory holding the Release manifest (parent of the component)."""
        return self.working_dir.parent

    @property
    def release_file(self) -> Path:
        """Path of the Release manifest."""
        return self.release_dir / RELEASE_FILENAME

    def arch_dir(self, architecture: str) -> Path:
        """Absolute architecture directory."""
        return self.working_dir / f"{ARCH_DIR_PREFIX}{architecture}"

    def relative_arch_dir(self, architecture: str) -> Path:
        """Architecture directory relative to the repository root."""
        return self.component_path / f"{ARCH_DIR_PREFIX}{architecture}"


__all__ = ["DistroSpec", "RepositoryLayout"]
