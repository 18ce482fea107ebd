# Repositories package.
#
# One module per aggregate, each a set of async functions that take the
# caller's AsyncSession first.  They only read, add and flush; commit and
# rollback belong to whoever opened the session (``get_db`` for HTTP
# requests).
#
#   user_repository          username lookup, user insert
#   post_repository          post CRUD + paginated listings
#   like_repository          (user, post) likes and counts
#   comment_repository       comments of a post
#   notification_repository  like/comment events for a post owner
