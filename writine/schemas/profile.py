from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class HandleUpdate(BaseModel):
    handle: str


class ProfileInfo(BaseModel):
    id: UUID
    handle: Optional[str] = None
    display_name: Optional[str] = None
    blog_url: Optional[str] = None  # https://{handle}.{apex} once a handle is set
    plan: str = "free"
    shows_branding: bool = True
    upgrade_hint: Optional[str] = None
