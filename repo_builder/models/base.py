"""Base models for repo-builder."""

from pydantic import BaseModel, ConfigDict


class RepoBuilderBaseModel(BaseModel):
    """Base model for all repo-builder models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


__all__ = ["RepoBuilderBaseModel"]
