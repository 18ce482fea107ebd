"""Database seeder for the SNS API (users, posts, likes, comments, notifications)."""
import asyncio
import argparse
import random
import time

from sns.database import engine, async_session, Base
from sns.models import Comment, Like, Notification, NotificationType, Post, User
from sns.security import hash_password

SEED_PASSWORD = "password"

TOPICS = ["python", "fastapi", "postgresql", "docker", "testing", "travel",
          "coffee", "books", "music", "running", "cooking", "photography"]


async def seed(small: bool = False):
    num_users = 10 if small else 50
    num_posts = 100 if small else 5000
    max_likes_per_post = 3 if small else 10
    max_comments_per_post = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_posts} posts")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    # Hashing is slow on purpose; every seeded user shares one hash.
    password_hash = hash_password(SEED_PASSWORD)

    async with async_session() as session:
        users = []
        for i in range(num_users):
            user = User(username=f"user_{i:04d}", password=password_hash)
            session.add(user)
            users.append(user)
        await session.flush()
        print(f"  Created {len(users)} users (password: {SEED_PASSWORD!r})")

        total_likes = 0
        total_comments = 0
        batch_size = 500
        for batch_start in range(0, num_posts, batch_size):
            batch_end = min(batch_start + batch_size, num_posts)
            posts = []
            for i in range(batch_start, batch_end):
                topic = random.choice(TOPICS)
                post = Post(
                    title=f"Post {i}: thoughts on {topic}",
                    body=f"Some notes about {topic}. " * 10,
                    user_id=random.choice(users).id,
                )
                session.add(post)
                posts.append(post)
            await session.flush()

            for post in posts:
                likers = random.sample(users, k=random.randint(0, max_likes_per_post))
                for liker in likers:
                    session.add(Like(user_id=liker.id, post_id=post.id))
                    session.add(Notification(
                        type=NotificationType.NEW_LIKE_ON_POST,
                        user_id=post.user_id,
                        from_user_id=liker.id,
                        post_id=post.id,
                    ))
                total_likes += len(likers)

                for _ in range(random.randint(0, max_comments_per_post)):
                    commenter = random.choice(users)
                    session.add(Comment(
                        body=f"Nice post! ({commenter.username})",
                        user_id=commenter.id,
                        post_id=post.id,
                    ))
                    session.add(Notification(
                        type=NotificationType.NEW_COMMENT_ON_POST,
                        user_id=post.user_id,
                        from_user_id=commenter.id,
                        post_id=post.id,
                    ))
                    total_comments += 1
            await session.flush()

            print(f"  Batch {batch_start}-{batch_end}: posts created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts}")
    print(f"  Likes: {total_likes}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the SNS database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (100 posts)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
