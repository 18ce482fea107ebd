# Services package.
#
# Each module exposes async functions holding the business rules for one
# area of the API:
#
#   post_service   posts, likes and comments with ownership checks and
#                  owner notifications
#   user_service   sign-up, log-in (access tokens) and notification inbox
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as SnsApplicationException.
