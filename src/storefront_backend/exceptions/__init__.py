"""
Error handling package for the storefront backend.

Usage:
    from storefront_backend.exceptions import (
        BadRequestException,
        ForbiddenException,
        register_exception_handlers,
    )
"""

from storefront_backend.exceptions.exceptions import (
    StorefrontException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    InternalServerException,
    ServiceUnavailableException,
)

from storefront_backend.exceptions.error_handlers import (
    register_exception_handlers,
    storefront_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)


__all__ = [
    "StorefrontException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "InternalServerException",
    "ServiceUnavailableException",
    "register_exception_handlers",
    "storefront_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
]
