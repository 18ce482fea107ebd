from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sns.config import settings
from sns.exceptions import ErrorCode, SnsApplicationException
from sns.pagination import PageRequest
from sns.security import decode_username

_bearer = HTTPBearer(auto_error=False)


def get_page_request(
    page: int = Query(
        0,
        ge=0,
        description="Page number (0-based).",
    ),
    size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Number of items returned per page.",
    ),
    sort: str | None = Query(
        None,
        description="Column name to sort results by; unknown names sort by id.",
    ),
    direction: str = Query(
        "desc",
        pattern="^(asc|desc)$",
        description="Sort direction: 'asc' or 'desc'.",
    ),
) -> PageRequest:
    """
    Reusable FastAPI dependency that turns pagination / sorting query
    parameters into the ``PageRequest`` the services pass to the stores.
    """
    return PageRequest(
        page=page,
        size=size,
        sort=sort,
        direction=direction,
    )


def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    """
    Return the username carried by the ``Authorization: Bearer`` token.

    The user is not loaded here; services resolve the name themselves and
    report ``USER_NOT_FOUND`` when it no longer exists.
    """
    if credentials is None:
        raise SnsApplicationException(ErrorCode.INVALID_TOKEN, "Authorization header is missing")
    username = decode_username(credentials.credentials)
    if username is None:
        raise SnsApplicationException(ErrorCode.INVALID_TOKEN)
    return username
