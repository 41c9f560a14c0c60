from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

# Fields are optional at the schema level so that missing values are
# reported by the components with their own messages.


# --- Auth ---
class CredentialsRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: str | None = None


class ResetPasswordRequest(BaseModel):
    access_token: str | None = None
    refresh_token: str | None = None
    password: str | None = None


class ChangePasswordRequest(BaseModel):
    current_password: str | None = None
    new_password: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Open set of profile fields; the allowed keys come from rules."""

    model_config = ConfigDict(extra="allow")


# --- Content Types ---
class ContentTypeRequest(BaseModel):
    title: str | None = None
    slug: str | None = None
    description: str | None = None
    fields: list[dict[str, Any]] | None = None


# --- Content Items ---
class ContentItemRequest(BaseModel):
    """
    A content payload, either nested under "data" or flat.

    {"data": {"title": "Hi"}, "status": "draft"} and
    {"title": "Hi", "status": "draft"} are equivalent.
    """

    model_config = ConfigDict(extra="allow")

    status: str | None = None
    scheduled_at: datetime | None = None
    data: dict[str, Any] | None = None

    def payload(self) -> dict[str, Any]:
        body = self.model_dump(exclude={"status", "scheduled_at"})
        if body.get("data") is None:
            body.pop("data", None)
        return body


class ContentStatusRequest(BaseModel):
    status: str | None = None
    scheduled_at: datetime | None = None
