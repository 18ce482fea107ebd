"""
User service: sign-up, log-in and the notification inbox.

Username uniqueness is enforced twice: a look-up gives a clean error for
the common case and the unique constraint on ``users.username`` catches
two sign-ups racing for the same name.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sns.exceptions import ErrorCode, SnsApplicationException
from sns.models import Notification, User
from sns.pagination import Page, PageRequest
from sns.repositories import notification_repository, user_repository
from sns.schemas import NotificationResponse, UserResponse
from sns.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def _notification_to_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        type=notification.type,
        text=notification.type.text,
        from_user_id=notification.from_user_id,
        post_id=notification.post_id,
        created_at=notification.created_at,
    )


async def load_user_by_username(db: AsyncSession, username: str) -> User:
    user = await user_repository.find_by_username(db, username)
    if user is None:
        raise SnsApplicationException(ErrorCode.USER_NOT_FOUND, f"{username} not found")
    return user


async def join(db: AsyncSession, username: str, password: str) -> UserResponse:
    """Register *username*; only the PBKDF2 hash of *password* is stored."""
    if await user_repository.find_by_username(db, username) is not None:
        raise SnsApplicationException(ErrorCode.DUPLICATED_USER_NAME, f"{username} is duplicated")

    try:
        user = await user_repository.save(
            db, User(username=username, password=hash_password(password))
        )
    except IntegrityError as exc:
        raise SnsApplicationException(
            ErrorCode.DUPLICATED_USER_NAME, f"{username} is duplicated"
        ) from exc
    await db.refresh(user, ["created_at"])

    logger.info("User %s joined", username)
    return UserResponse.model_validate(user)


async def login(db: AsyncSession, username: str, password: str) -> str:
    """Return a signed access token for valid credentials."""
    user = await load_user_by_username(db, username)
    if not verify_password(password, user.password):
        logger.info("Rejected login for %s: wrong password", username)
        raise SnsApplicationException(ErrorCode.INVALID_PASSWORD)

    return create_access_token(user.username)


async def notification_list(
    db: AsyncSession, username: str, page_request: PageRequest
) -> Page[NotificationResponse]:
    user = await load_user_by_username(db, username)
    page = await notification_repository.find_all_by_user(db, user, page_request)
    return page.map(_notification_to_response)
