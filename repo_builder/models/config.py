"""Configuration models for repo-builder."""

from typing import Dict, List, Optional

from pydantic import Field, field_validator

from ..utils.constants import DEFAULT_NOTARY_TIMEOUT
from ..utils.error_handling import TemplateNotFoundError
from .base import RepoBuilderBaseModel
from .distro import DistroSpec


class TemplatesConfig(RepoBuilderBaseModel):
    """
    Release header templates.

    Attributes:
        deb: Mapping of edition identifier to Release header template
    """

    deb: Dict[str, str] = Field(default_factory=dict)


class NotaryConfig(RepoBuilderBaseModel):
    """
    Connection settings for the notary signing service.

    Attributes:
        url: Base URL of the notary service
        key_name: Name of the signing key to use
        auth_token_file: Optional file containing a bearer token
        comment: Comment attached to signing requests
        timeout: Request timeout in seconds
    """

    url: str
    key_name: str
    auth_token_file: Optional[str] = None
    comment: str = "repo-builder release process"
    timeout: float = Field(default=DEFAULT_NOTARY_TIMEOUT, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Notary URL must start with http:// or https://: {v}")
        return v.rstrip("/")


class IndexPageConfig(RepoBuilderBaseModel):
    """
    Settings for the static index pages.

    Attributes:
        title_prefix: Text placed before the bucket name in page titles
    """

    title_prefix: str = "Index of"


class BuildConfig(RepoBuilderBaseModel):
    """
    Top-level repo-builder configuration.

    Attributes:
        templates: Release header templates
        distros: Distributions that can be built
        notary: Notary signing service settings
        index_page: Static index page settings
        verify_placeholders: Restore missing Packages files in existing arch directories
    """

    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    distros: List[DistroSpec] = Field(default_factory=list)
    notary: Optional[NotaryConfig] = None
    index_page: IndexPageConfig = Field(default_factory=IndexPageConfig)
    verify_placeholders: bool = False

    @field_validator("distros")
    @classmethod
    def validate_unique_names(cls, v: List[DistroSpec]) -> List[DistroSpec]:
        """Distro names are lookup keys and must be unique."""
        names = [distro.name for distro in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate distro name(s): {', '.join(duplicates)}")
        return v

    def get_distro(self, name: str) -> DistroSpec:
        """
        Get a distribution by name.

        Raises:
            ValueError: If no distribution has the name
        """
        for distro in self.distros:
            if distro.name == name:
                return distro

        available = ", ".join(distro.name for distro in self.distros) or "none"
        raise ValueError(f"Unknown distro '{name}' (available: {available})")

    def release_template(self, edition: str) -> str:
        """
        Get the Release header template for an edition.

        Raises:
            TemplateNotFoundError: If no template is defined for the edition
        """
        try:
            return self.templates.deb[edition]
        except KeyError as e:
            raise TemplateNotFoundError(f"no 'Release' template defined for {edition}") from e


__all__ = ["TemplatesConfig", "NotaryConfig", "IndexPageConfig", "BuildConfig"]
