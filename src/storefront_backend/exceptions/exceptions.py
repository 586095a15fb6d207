"""
HTTP exceptions carrying a localized message key.

Every exception resolves its message from the i18n catalog using the locale
it was raised with, so the response text matches the caller's language.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status
import inspect
from datetime import datetime, timezone

from storefront_backend.i18n import translate, normalize_locale


class StorefrontException(HTTPException):
    """
    Base exception class for all storefront exceptions.

    Attributes:
        message_key: Key into the message catalog, also used as error code
        locale: Locale the message was resolved for
        context: Additional context for logging and debugging
    """

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message_key = "internal_error"

    def __init__(
        self,
        message_key: Optional[str] = None,
        locale: Optional[str] = None,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
        user_id: Optional[int] = None,
    ):
        self.message_key = message_key or self.default_message_key
        self.locale = normalize_locale(locale)
        self.context = context or {}
        self.user_id = user_id

        # Get caller information for debugging
        frame = inspect.currentframe()
        caller_frame = frame.f_back if frame else None
        while caller_frame is not None and caller_frame.f_code.co_name == "__init__":
            caller_frame = caller_frame.f_back
        if caller_frame is not None:
            self.function_name = caller_frame.f_code.co_name
            self.file_name = caller_frame.f_code.co_filename
            self.line_number = caller_frame.f_lineno
        else:
            self.function_name = None
            self.file_name = None
            self.line_number = None

        message = detail if isinstance(detail, str) else translate(self.message_key, self.locale)
        super().__init__(status_code=self.default_status, detail=message, headers=headers)

    @property
    def error_code(self) -> str:
        return self.message_key

    @property
    def message(self) -> str:
        return self.detail

    def to_response(self, include_debug: bool = False) -> Dict[str, Any]:
        """
        Render the JSON body sent to the client.

        Args:
            include_debug: Whether to include debug information (dev mode only)
        """
        response: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }

        if include_debug:
            debug = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "function": self.function_name,
                "file": self.file_name,
                "line": self.line_number,
                "user_id": self.user_id,
                "locale": self.locale,
                "additional_context": self.context or None,
            }
            response["debug"] = {k: v for k, v in debug.items() if v is not None}

        return response


# ============================================================================
# 400
# ============================================================================


class BadRequestException(StorefrontException):
    """Missing referenced entity or invalid parameter - 400"""

    default_status = status.HTTP_400_BAD_REQUEST
    default_message_key = "validation_failed"


# ============================================================================
# 401
# ============================================================================


class UnauthorizedException(StorefrontException):
    """Authentication failed or product/company owner mismatch - 401"""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_message_key = "invalid_authentication"


# ============================================================================
# 403
# ============================================================================


class ForbiddenException(StorefrontException):
    """Review mutation by someone other than its author - 403"""

    default_status = status.HTTP_403_FORBIDDEN
    default_message_key = "forbidden_update_review"


# ============================================================================
# 404
# ============================================================================


class NotFoundException(StorefrontException):
    """Unknown route - 404"""

    default_status = status.HTTP_404_NOT_FOUND
    default_message_key = "endpoint_not_found"


# ============================================================================
# 5xx
# ============================================================================


class InternalServerException(StorefrontException):
    """Write affected no rows or unexpected failure - 500"""

    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message_key = "internal_error"


class ServiceUnavailableException(StorefrontException):
    """Database pool exhausted - 503"""

    default_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message_key = "database_busy"
