from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from sns.models import Post, User
from sns.pagination import Page, PageRequest, paginate

# Columns a caller may sort post listings by.
SORTABLE_COLUMNS = ("id", "created_at", "updated_at", "title")


async def find_by_id(db: AsyncSession, post_id: int) -> Post | None:
    """Return the post with its owner eager loaded, or None."""
    q = select(Post).where(Post.id == post_id).options(joinedload(Post.user))
    result = await db.execute(q)
    return result.unique().scalar_one_or_none()


async def save(db: AsyncSession, post: Post) -> Post:
    db.add(post)
    await db.flush()
    return post


async def delete(db: AsyncSession, post: Post) -> None:
    await db.delete(post)
    await db.flush()


async def find_all(db: AsyncSession, page_request: PageRequest) -> Page[Post]:
    return await paginate(
        db,
        Post,
        page_request,
        options=(joinedload(Post.user),),
        sortable=SORTABLE_COLUMNS,
    )


async def find_all_by_user(db: AsyncSession, user: User, page_request: PageRequest) -> Page[Post]:
    return await paginate(
        db,
        Post,
        page_request,
        Post.user_id == user.id,
        options=(joinedload(Post.user),),
        sortable=SORTABLE_COLUMNS,
    )


async def count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Post))).scalar_one()
