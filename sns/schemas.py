from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from sns.models import NotificationType, UserRole
from sns.pagination import Page

T = TypeVar("T")


# --- User ---

class UserJoinRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class UserLoginRequest(BaseModel):
    username: str
    password: str


class UserLoginResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Post ---

class PostCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    body: str


class PostModifyRequest(PostCreateRequest):
    pass


class PostResponse(BaseModel):
    id: int
    title: str
    body: str
    user: UserResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Like ---

class LikeCountResponse(BaseModel):
    post_id: int
    count: int


# --- Comment ---

class CommentRequest(BaseModel):
    body: str = Field(min_length=1)


class CommentResponse(BaseModel):
    id: int
    body: str
    post_id: int
    user_id: int
    username: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Notification ---

class NotificationResponse(BaseModel):
    id: int
    type: NotificationType
    text: str
    from_user_id: int
    post_id: int | None
    created_at: datetime | None = None


# --- Pagination ---

class PaginatedResponse(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedResponse[T]":
        return cls(
            items=page.items,
            total=page.total,
            page=page.request.page,
            size=page.request.size,
            pages=page.pages,
        )


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_posts: int
    total_likes: int
    total_comments: int
    avg_comments_per_post: float
    avg_likes_per_post: float
