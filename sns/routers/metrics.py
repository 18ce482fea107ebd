from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sns.database import get_db
from sns.repositories import comment_repository, like_repository, post_repository, user_repository
from sns.schemas import MetricsResponse

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):
    total_users = await user_repository.count(db)
    total_posts = await post_repository.count(db)
    total_likes = await like_repository.count(db)
    total_comments = await comment_repository.count(db)

    avg_comments = total_comments / total_posts if total_posts > 0 else 0
    avg_likes = total_likes / total_posts if total_posts > 0 else 0

    return MetricsResponse(
        total_users=total_users,
        total_posts=total_posts,
        total_likes=total_likes,
        total_comments=total_comments,
        avg_comments_per_post=round(avg_comments, 2),
        avg_likes_per_post=round(avg_likes, 2),
    )
