"""
Post service: the authorization and mutation gateway for posts, likes
and comments.

Design notes
------------
- Every operation resolves the acting user first and the target post
  second, so ``USER_NOT_FOUND`` always takes precedence over
  ``POST_NOT_FOUND`` and ``INVALID_PERMISSION``.
- Ownership is decided on identifier values (``post.user_id == user.id``),
  never on the identity of the loaded ORM objects.
- Functions flush but never commit.  The session passed in is the
  transaction boundary; ``get_db`` commits it on success and rolls it
  back on any exception, so a like or comment and its notification are
  persisted together or not at all.
- Duplicate likes are rejected twice: by the look-up below and by the
  ``(user_id, post_id)`` unique constraint, which catches concurrent
  requests that both pass the look-up.
- Like and comment inserts run in a SAVEPOINT.  When one fails on a
  constraint, the store is asked again: a post deleted in the meantime
  is ``POST_NOT_FOUND``, an existing like is ``ALREADY_LIKED``, anything
  else propagates.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sns.exceptions import ErrorCode, SnsApplicationException
from sns.models import Comment, Like, Notification, NotificationType, Post, User
from sns.pagination import Page, PageRequest
from sns.repositories import (
    comment_repository,
    like_repository,
    notification_repository,
    post_repository,
    user_repository,
)
from sns.schemas import CommentResponse, PostResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _get_user_or_raise(db: AsyncSession, username: str) -> User:
    user = await user_repository.find_by_username(db, username)
    if user is None:
        raise SnsApplicationException(ErrorCode.USER_NOT_FOUND, f"{username} not found")
    return user


async def _get_post_or_raise(db: AsyncSession, post_id: int) -> Post:
    post = await post_repository.find_by_id(db, post_id)
    if post is None:
        raise SnsApplicationException(ErrorCode.POST_NOT_FOUND, f"{post_id} not found")
    return post


async def _raise_if_post_gone(db: AsyncSession, post_id: int, cause: Exception) -> None:
    """Report an insert that failed because the post was deleted concurrently."""
    if await post_repository.find_by_id(db, post_id) is None:
        raise SnsApplicationException(
            ErrorCode.POST_NOT_FOUND, f"{post_id} not found"
        ) from cause


def _check_owner(post: Post, user: User) -> None:
    if post.user_id != user.id:
        raise SnsApplicationException(
            ErrorCode.INVALID_PERMISSION,
            f"{user.username} has no permission with post {post.id}",
        )


def _comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        body=comment.body,
        post_id=comment.post_id,
        user_id=comment.user_id,
        username=comment.user.username,
        created_at=comment.created_at,
    )


async def _notify_owner(
    db: AsyncSession, post: Post, actor: User, notification_type: NotificationType
) -> None:
    await notification_repository.save(
        db,
        Notification(
            type=notification_type,
            user_id=post.user_id,
            from_user_id=actor.id,
            post_id=post.id,
        ),
    )


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------

async def create(db: AsyncSession, title: str, body: str, username: str) -> PostResponse:
    user = await _get_user_or_raise(db, username)

    post = await post_repository.save(db, Post(title=title, body=body, user_id=user.id, user=user))
    await db.refresh(post, ["created_at", "updated_at"])

    logger.info("Post %d created by %s", post.id, username)
    return PostResponse.model_validate(post)


async def modify(
    db: AsyncSession, title: str, body: str, username: str, post_id: int
) -> PostResponse:
    user = await _get_user_or_raise(db, username)
    post = await _get_post_or_raise(db, post_id)
    _check_owner(post, user)

    post.title = title
    post.body = body
    await db.flush()
    # updated_at is computed by the database on UPDATE.
    await db.refresh(post, ["updated_at"])

    logger.info("Post %d modified by %s", post.id, username)
    return PostResponse.model_validate(post)


async def delete(db: AsyncSession, username: str, post_id: int) -> None:
    user = await _get_user_or_raise(db, username)
    post = await _get_post_or_raise(db, post_id)
    _check_owner(post, user)

    await like_repository.delete_all_by_post(db, post)
    await comment_repository.delete_all_by_post(db, post)
    await post_repository.delete(db, post)

    logger.info("Post %d deleted by %s", post_id, username)


async def list_posts(db: AsyncSession, page_request: PageRequest) -> Page[PostResponse]:
    page = await post_repository.find_all(db, page_request)
    return page.map(PostResponse.model_validate)


async def my_list(db: AsyncSession, username: str, page_request: PageRequest) -> Page[PostResponse]:
    user = await _get_user_or_raise(db, username)
    page = await post_repository.find_all_by_user(db, user, page_request)
    return page.map(PostResponse.model_validate)


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------

async def like(db: AsyncSession, post_id: int, username: str) -> None:
    user = await _get_user_or_raise(db, username)
    post = await _get_post_or_raise(db, post_id)

    if await like_repository.find_by_user_and_post(db, user, post) is not None:
        raise SnsApplicationException(
            ErrorCode.ALREADY_LIKED, f"{username} already liked post {post_id}"
        )

    try:
        async with db.begin_nested():
            await like_repository.save(db, Like(user_id=user.id, post_id=post.id))
    except IntegrityError as exc:
        # Lost a race: the post was deleted or the same like was committed.
        await _raise_if_post_gone(db, post_id, exc)
        if await like_repository.find_by_user_and_post(db, user, post) is not None:
            raise SnsApplicationException(
                ErrorCode.ALREADY_LIKED, f"{username} already liked post {post_id}"
            ) from exc
        raise

    await _notify_owner(db, post, user, NotificationType.NEW_LIKE_ON_POST)
    logger.info("Post %d liked by %s", post_id, username)


async def like_count(db: AsyncSession, post_id: int) -> int:
    post = await _get_post_or_raise(db, post_id)
    return await like_repository.count_by_post(db, post)


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

async def comment(db: AsyncSession, post_id: int, body: str, username: str) -> None:
    user = await _get_user_or_raise(db, username)
    post = await _get_post_or_raise(db, post_id)

    try:
        async with db.begin_nested():
            await comment_repository.save(
                db, Comment(body=body, user_id=user.id, post_id=post.id)
            )
    except IntegrityError as exc:
        await _raise_if_post_gone(db, post_id, exc)
        raise

    await _notify_owner(db, post, user, NotificationType.NEW_COMMENT_ON_POST)
    logger.info("Post %d commented by %s", post_id, username)


async def get_comments(
    db: AsyncSession, post_id: int, page_request: PageRequest
) -> Page[CommentResponse]:
    post = await _get_post_or_raise(db, post_id)
    page = await comment_repository.find_all_by_post(db, post, page_request)
    return page.map(_comment_to_response)
