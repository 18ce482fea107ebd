from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from sns.models import Comment, Post
from sns.pagination import Page, PageRequest, paginate


async def save(db: AsyncSession, comment: Comment) -> Comment:
    db.add(comment)
    await db.flush()
    return comment


async def find_all_by_post(db: AsyncSession, post: Post, page_request: PageRequest) -> Page[Comment]:
    return await paginate(
        db,
        Comment,
        page_request,
        Comment.post_id == post.id,
        options=(joinedload(Comment.user),),
    )


async def delete_all_by_post(db: AsyncSession, post: Post) -> None:
    await db.execute(delete(Comment).where(Comment.post_id == post.id))


async def count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Comment))).scalar_one()
