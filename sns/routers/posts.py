from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sns.database import get_db
from sns.dependencies import get_current_username, get_page_request
from sns.pagination import PageRequest
from sns.schemas import (
    CommentRequest,
    CommentResponse,
    LikeCountResponse,
    PaginatedResponse,
    PostCreateRequest,
    PostModifyRequest,
    PostResponse,
)
from sns.services import post_service

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post("", status_code=201, response_model=PostResponse)
async def create_post(
    data: PostCreateRequest,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.create(db, data.title, data.body, username)


@router.put("/{post_id}", response_model=PostResponse)
async def modify_post(
    post_id: int,
    data: PostModifyRequest,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.modify(db, data.title, data.body, username, post_id)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: int,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    await post_service.delete(db, username, post_id)
    return Response(status_code=204)


@router.get(
    "",
    response_model=PaginatedResponse[PostResponse],
    dependencies=[Depends(get_current_username)],
)
async def list_posts(
    page_request: PageRequest = Depends(get_page_request),
    db: AsyncSession = Depends(get_db),
):
    page = await post_service.list_posts(db, page_request)
    return PaginatedResponse.from_page(page)


@router.get("/my", response_model=PaginatedResponse[PostResponse])
async def my_posts(
    page_request: PageRequest = Depends(get_page_request),
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    page = await post_service.my_list(db, username, page_request)
    return PaginatedResponse.from_page(page)


@router.post("/{post_id}/likes", status_code=201)
async def like_post(
    post_id: int,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    await post_service.like(db, post_id, username)
    return {"post_id": post_id, "liked": True}


@router.get(
    "/{post_id}/likes",
    response_model=LikeCountResponse,
    dependencies=[Depends(get_current_username)],
)
async def like_count(
    post_id: int,
    db: AsyncSession = Depends(get_db),
):
    count = await post_service.like_count(db, post_id)
    return LikeCountResponse(post_id=post_id, count=count)


@router.post("/{post_id}/comments", status_code=201)
async def add_comment(
    post_id: int,
    data: CommentRequest,
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    await post_service.comment(db, post_id, data.body, username)
    return {"post_id": post_id, "commented": True}


@router.get(
    "/{post_id}/comments",
    response_model=PaginatedResponse[CommentResponse],
    dependencies=[Depends(get_current_username)],
)
async def get_comments(
    post_id: int,
    page_request: PageRequest = Depends(get_page_request),
    db: AsyncSession = Depends(get_db),
):
    page = await post_service.get_comments(db, post_id, page_request)
    return PaginatedResponse.from_page(page)
