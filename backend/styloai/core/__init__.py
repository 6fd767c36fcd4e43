"""
Core module for StyloAI backend.
Contains exception handling shared by routers and services.
"""
from .exceptions import (
    StyloAIException,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    PremiumRequiredError,
    RateLimitError,
    ExternalServiceError,
    ConfigurationError,
    ErrorResponse,
    register_exception_handlers,
)

__all__ = [
    "StyloAIException",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "PremiumRequiredError",
    "RateLimitError",
    "ExternalServiceError",
    "ConfigurationError",
    "ErrorResponse",
    "register_exception_handlers",
]
