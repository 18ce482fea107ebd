from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sns.database import get_db
from sns.dependencies import get_current_username, get_page_request
from sns.pagination import PageRequest
from sns.schemas import (
    NotificationResponse,
    PaginatedResponse,
    UserJoinRequest,
    UserLoginRequest,
    UserLoginResponse,
    UserResponse,
)
from sns.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/join", status_code=201, response_model=UserResponse)
async def join(data: UserJoinRequest, db: AsyncSession = Depends(get_db)):
    return await user_service.join(db, data.username, data.password)


@router.post("/login", response_model=UserLoginResponse)
async def login(data: UserLoginRequest, db: AsyncSession = Depends(get_db)):
    token = await user_service.login(db, data.username, data.password)
    return UserLoginResponse(token=token)


@router.get("/notifications", response_model=PaginatedResponse[NotificationResponse])
async def notifications(
    page_request: PageRequest = Depends(get_page_request),
    username: str = Depends(get_current_username),
    db: AsyncSession = Depends(get_db),
):
    page = await user_service.notification_list(db, username, page_request)
    return PaginatedResponse.from_page(page)
