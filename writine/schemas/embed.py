from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class EmbedAuthor(BaseModel):
    name: Optional[str] = None
    handle: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None


class EmbedPostSummary(BaseModel):
    id: UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    reading_time: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EmbedPost(EmbedPostSummary):
    content: str = ""
    meta_description: Optional[str] = None


class EmbedPagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class EmbedListResponse(BaseModel):
    author: EmbedAuthor
    posts: List[EmbedPostSummary]
    pagination: EmbedPagination


class EmbedPostResponse(BaseModel):
    author: EmbedAuthor
    post: EmbedPost
