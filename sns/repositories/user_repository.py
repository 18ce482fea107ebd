from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sns.models import User


async def find_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def save(db: AsyncSession, user: User) -> User:
    """Insert *user*; a duplicate username surfaces as ``IntegrityError`` on flush."""
    db.add(user)
    await db.flush()
    return user


async def count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(User))).scalar_one()
