"""
Application error hierarchy.

Every error carries the HTTP status it is rendered with; the handlers in
``expense_tracker.main`` turn them into ``{"error": message}`` bodies.
"""
from typing import Dict, Optional


class AppError(Exception):
    status_code: int = 500
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class DuplicateConflict(AppError):
    """A uniqueness invariant would be violated."""
    status_code = 400


class DuplicateIdentity(DuplicateConflict):
    pass


class DuplicateName(DuplicateConflict):
    pass


class DuplicateEmail(DuplicateConflict):
    pass


class NotFound(AppError):
    status_code = 404


class CategoryNotFound(NotFound):
    def __init__(self, category_id: int):
        super().__init__(f"Category not found: {category_id}")
        self.category_id = category_id


class IdentityNotFound(NotFound):
    def __init__(self, username: str):
        super().__init__(f"User not found: {username}")
        self.username = username


class AuthenticationFailure(AppError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(AuthenticationFailure):
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class AuthorizationFailure(AppError):
    status_code = 403
