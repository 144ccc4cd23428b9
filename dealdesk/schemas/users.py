"""User and contact schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dealdesk.models.enums import BuyingRole, UserRole


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    role: UserRole
    department: str = ""
    avatar: str | None = None


class Contact(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1, max_length=255)
    role: str = ""
    company: str = ""
    email: str = ""
    phone: str | None = None
    linkedin: str | None = None
    location: str | None = None
    last_interaction: str | None = None
    tags: list[str] = Field(default_factory=list)
    buying_role: BuyingRole = BuyingRole.UNKNOWN
    ai_enriched: bool = False
