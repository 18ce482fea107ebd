from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sns.models import Like, Post, User


async def find_by_user_and_post(db: AsyncSession, user: User, post: Post) -> Like | None:
    q = select(Like).where(Like.user_id == user.id, Like.post_id == post.id)
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def save(db: AsyncSession, like: Like) -> Like:
    """
    Insert *like*.

    The ``(user_id, post_id)`` unique constraint is the real guard against
    double likes; a concurrent insert for the same pair raises
    ``IntegrityError`` here.
    """
    db.add(like)
    await db.flush()
    return like


async def count_by_post(db: AsyncSession, post: Post) -> int:
    q = select(func.count()).select_from(Like).where(Like.post_id == post.id)
    return (await db.execute(q)).scalar_one()


async def delete_all_by_post(db: AsyncSession, post: Post) -> None:
    await db.execute(delete(Like).where(Like.post_id == post.id))


async def count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Like))).scalar_one()
