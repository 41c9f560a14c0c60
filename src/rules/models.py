from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.domain.entities import CONTENT_STATUSES


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class ContentRules(BaseModel):
    statuses: list[str]
    default_status: str = "draft"
    default_fields: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("statuses")
    @classmethod
    def _known_statuses(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - set(CONTENT_STATUSES))
        if unknown:
            raise ValueError(f"unknown content statuses: {unknown}")
        return v


class MediaRules(BaseModel):
    bucket: str = "media"
    allowlist_mime_types: list[str]
    max_upload_bytes: int = Field(gt=0)


class AuthRules(BaseModel):
    min_password_length: int = Field(default=6, ge=1)
    profile_fields: list[str] = Field(default_factory=list)


class PaginationRules(BaseModel):
    default_limit: int = Field(default=50, gt=0)
    max_limit: int = Field(default=100, gt=0)


class Rules(BaseModel):
    project: ProjectRules
    content: ContentRules
    media: MediaRules
    auth: AuthRules = Field(default_factory=AuthRules)
    pagination: PaginationRules = Field(default_factory=PaginationRules)
