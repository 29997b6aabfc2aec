from .base import (
    AppError,
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    DatabaseUnavailableError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthenticationError",
    "ConfigurationError",
    "ConflictError",
    "DatabaseUnavailableError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
