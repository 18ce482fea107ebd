"""
Application error taxonomy.

Every failure the domain layer reports is a ``SnsApplicationException``
carrying an ``ErrorCode``.  The code decides the HTTP status the adapter
layer answers with, so services never import anything from FastAPI.
"""
from enum import Enum


class ErrorCode(Enum):
    DUPLICATED_USER_NAME = (409, "User name is duplicated")
    USER_NOT_FOUND = (404, "User not found")
    INVALID_PASSWORD = (401, "Password is invalid")
    INVALID_TOKEN = (401, "Token is invalid")
    POST_NOT_FOUND = (404, "Post not found")
    INVALID_PERMISSION = (403, "Permission is invalid")
    ALREADY_LIKED = (409, "User already liked the post")
    DATABASE_ERROR = (500, "Database error")

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message


class SnsApplicationException(Exception):
    """Single application error type; ``code`` identifies the failed precondition."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message is None:
            return self.code.message
        return f"{self.code.message}. {self.message}"

    def to_public_dict(self) -> dict:
        return {"detail": str(self), "code": self.code.name}
