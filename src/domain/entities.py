from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

# --- Enums / Literals ---
ContentStatus = Literal["draft", "scheduled", "published"]
FieldType = Literal["string", "text", "richtext", "number", "boolean", "datetime", "media", "select"]

CONTENT_STATUSES: tuple[str, ...] = ("draft", "published", "scheduled")

# --- Identity ---

class AuthUser(BaseModel):
    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

class AuthSession(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None

class Principal(BaseModel):
    """The caller of a protected request: identity plus the raw bearer token."""

    user: AuthUser
    token: str

    @property
    def id(self) -> str:
        return self.user.id

# --- Content Types ---

class FieldDefinition(BaseModel):
    name: str
    type: FieldType | str
    title: str | None = None
    required: bool = False
    options: dict[str, Any] | list[Any] | None = None

class ContentTypeDef(BaseModel):
    id: UUID | str | None = None
    owner_id: str | None = None  # None means public
    name: str
    title: str
    description: str = ""
    fields: list[FieldDefinition] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_public(self) -> bool:
        return self.owner_id is None

# --- Content ---

class ContentItem(BaseModel):
    id: UUID | str | None = None
    type_id: UUID | str
    owner_id: str | None = None
    status: ContentStatus = "draft"

    scheduled_at: datetime | None = None
    published_at: datetime | None = None

    data: dict[str, Any] = Field(default_factory=dict)

    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Joined relation, present on some reads
    content_type: dict[str, Any] | None = None

# --- Media ---

class MediaItem(BaseModel):
    id: UUID | str | None = None
    filename: str  # storage key
    originalname: str
    mimetype: str
    size: int
    url: str
    owner_id: str | None = None
    description: str | None = None
    alt_text: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
