# -*- coding: utf-8 -*-
"""Tagged error taxonomy for menu administration.

Every failure carries an explicit ``kind`` so callers branch on the tag
instead of poking at status codes or message text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    NETWORK = "network"
    UNKNOWN = "unknown"


class ValidationCode(str, Enum):
    NAME_REQUIRED = "name_required"
    INVALID_CALORIES = "invalid_calories"
    IMAGE_REQUIRED = "image_required"
    INVALID_IMAGE_TYPE = "invalid_image_type"
    IMAGE_TOO_LARGE = "image_too_large"
    INVALID_IMAGE_DATA = "invalid_image_data"
    REJECTED = "rejected"  # server answered 400/422


_VALIDATION_MESSAGES = {
    ValidationCode.NAME_REQUIRED: "Menu name is required.",
    ValidationCode.INVALID_CALORIES: "Calories must be a non-negative whole number.",
    ValidationCode.IMAGE_REQUIRED: "An image is required.",
    ValidationCode.INVALID_IMAGE_TYPE: "Only PNG or JPEG images are allowed.",
    ValidationCode.IMAGE_TOO_LARGE: "Image must be 1 MB or smaller.",
    ValidationCode.INVALID_IMAGE_DATA: "Image data could not be read.",
    ValidationCode.REJECTED: "The data sent was rejected as invalid.",
}


class MenuError(Exception):
    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str = "", *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, status={self.status!r}, message={self.message!r})"


class ValidationError(MenuError):
    kind = ErrorKind.VALIDATION

    def __init__(self, code: ValidationCode, message: Optional[str] = None, *, status: Optional[int] = None) -> None:
        super().__init__(message or _VALIDATION_MESSAGES[code], status=status)
        self.code = code


class AuthError(MenuError):
    kind = ErrorKind.AUTH


class NotFoundError(MenuError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(MenuError):
    kind = ErrorKind.CONFLICT


class NetworkError(MenuError):
    kind = ErrorKind.NETWORK


class UnknownServerError(MenuError):
    kind = ErrorKind.UNKNOWN


def error_from_response(status: int, detail: Any = None) -> MenuError:
    """Map a non-2xx API response onto the taxonomy."""
    if isinstance(detail, str):
        message = detail
    elif detail is None:
        message = ""
    else:
        # FastAPI request validation errors arrive as a list of dicts.
        message = str(detail)
    if status in (400, 422):
        return ValidationError(ValidationCode.REJECTED, message or None, status=status)
    if status in (401, 403):
        return AuthError(message, status=status)
    if status == 404:
        return NotFoundError(message, status=status)
    if status == 409:
        return ConflictError(message, status=status)
    return UnknownServerError(message, status=status)


class Action(str, Enum):
    REFRESH = "refresh"
    UPDATE = "update"
    DELETE = "delete"
    ADD = "add"
    REORDER = "reorder"


_ACTION_FALLBACK = {
    Action.REFRESH: "Failed to load the menu.",
    Action.UPDATE: "Failed to save changes.",
    Action.DELETE: "Failed to delete the menu item.",
    Action.ADD: "Failed to add the menu item.",
    Action.REORDER: "Failed to save the order.",
}


def user_message(error: MenuError, action: Action) -> str:
    """Toast text for a failed action."""
    if isinstance(error, ValidationError):
        if error.code is ValidationCode.REJECTED:
            return _VALIDATION_MESSAGES[ValidationCode.REJECTED]
        return error.message
    if isinstance(error, AuthError):
        if error.status == 401:
            return "Your session has expired. Please log in again."
        return "This account is not allowed to manage the menu."
    if isinstance(error, NotFoundError):
        return "Menu item no longer exists. Refresh the page."
    if isinstance(error, ConflictError):
        return "A menu item with that name already exists."
    if isinstance(error, NetworkError):
        return "Cannot connect to the server. Check your connection."
    return error.message or _ACTION_FALLBACK[action]


class OperationStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class OperationResult:
    status: OperationStatus
    value: Any = None
    error: Optional[MenuError] = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(OperationStatus.OK, value=value)

    @classmethod
    def failure(cls, error: MenuError) -> "OperationResult":
        return cls(OperationStatus.FAILED, error=error)

    @classmethod
    def skipped(cls) -> "OperationResult":
        return cls(OperationStatus.SKIPPED)
