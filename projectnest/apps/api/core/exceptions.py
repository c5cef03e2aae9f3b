"""Custom exception classes."""

from typing import Any, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
        status_code: int = 400,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


# ========== Bad Request Exceptions ==========
class BadRequestError(AppException):
    """Malformed or semantically invalid input."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            code="BAD_REQUEST",
            message=message,
            details=details,
            status_code=400,
        )


class NoFieldsToUpdateError(BadRequestError):
    """A partial update carried no fields."""

    def __init__(self, resource: str):
        super().__init__(
            message="No fields to update",
            details={"resource": resource},
        )
        self.code = "NO_FIELDS_TO_UPDATE"


class ValidationError(BadRequestError):
    """Validation failed for a single field."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation failed for field '{field}': {message}",
            details={"field": field, "error": message},
        )
        self.code = "VALIDATION_ERROR"


# ========== Auth Exceptions ==========
class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            code="AUTHENTICATION_ERROR",
            message=message,
            status_code=401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Invalid credentials provided."""

    def __init__(self):
        super().__init__(message="Invalid email or password")
        self.code = "INVALID_CREDENTIALS"


class TokenExpiredError(AuthenticationError):
    """JWT token has expired."""

    def __init__(self):
        super().__init__(message="Token has expired")
        self.code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """Invalid JWT token."""

    def __init__(self):
        super().__init__(message="Invalid token")
        self.code = "INVALID_TOKEN"


# ========== Authorization Exceptions ==========
class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            code="AUTHORIZATION_ERROR",
            message=message,
            status_code=403,
        )


class NotProjectMemberError(AuthorizationError):
    """User is not a member of the project."""

    def __init__(self, project_uid: Any):
        super().__init__(message="Access denied: not a project member")
        self.code = "NOT_PROJECT_MEMBER"
        self.details = {"project_uid": str(project_uid)}


# ========== Resource Exceptions ==========
class ResourceNotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            code="RESOURCE_NOT_FOUND",
            message=f"{resource} with id '{identifier}' not found",
            details={"resource": resource, "identifier": str(identifier)},
            status_code=404,
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: Any):
        super().__init__(resource="User", identifier=user_id)


class ProjectNotFoundError(ResourceNotFoundError):
    def __init__(self, project_uid: Any):
        super().__init__(resource="Project", identifier=project_uid)


class ListNotFoundError(ResourceNotFoundError):
    def __init__(self, list_uid: Any):
        super().__init__(resource="List", identifier=list_uid)


class TaskNotFoundError(ResourceNotFoundError):
    def __init__(self, task_uid: Any):
        super().__init__(resource="Task", identifier=task_uid)


class CanvasNotFoundError(ResourceNotFoundError):
    def __init__(self, project_uid: Any):
        super().__init__(resource="Canvas for project", identifier=project_uid)


class NoteNotFoundError(ResourceNotFoundError):
    def __init__(self, note_uid: Any):
        super().__init__(resource="Note", identifier=note_uid)


class FolderNotFoundError(ResourceNotFoundError):
    def __init__(self, folder_uid: Any):
        super().__init__(resource="Folder", identifier=folder_uid)


class ConversationNotFoundError(ResourceNotFoundError):
    def __init__(self, conversation_uid: Any):
        super().__init__(resource="Conversation", identifier=conversation_uid)


# ========== Conflict Exceptions ==========
class DuplicateResourceError(AppException):
    """Resource already exists."""

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            code="DUPLICATE_RESOURCE",
            message=f"{resource} with {field} '{value}' already exists",
            details={"resource": resource, "field": field, "value": value},
            status_code=409,
        )


# ========== System Exceptions ==========
class SystemError(AppException):
    """System error."""

    def __init__(self, message: str):
        super().__init__(
            code="SYSTEM_ERROR",
            message=message,
            status_code=500,
        )


class DatabaseError(SystemError):
    """Database operation failed."""

    def __init__(self, operation: str, details: Optional[str] = None):
        message = f"Database {operation} failed"
        if details:
            message += f": {details}"
        super().__init__(message=message)
