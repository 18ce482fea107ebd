from sqlalchemy.ext.asyncio import AsyncSession

from sns.models import Notification, User
from sns.pagination import Page, PageRequest, paginate


async def save(db: AsyncSession, notification: Notification) -> Notification:
    db.add(notification)
    await db.flush()
    return notification


async def find_all_by_user(
    db: AsyncSession, user: User, page_request: PageRequest
) -> Page[Notification]:
    return await paginate(db, Notification, page_request, Notification.user_id == user.id)
