"""Core module - config, exceptions, dependencies, middleware."""

from app.core.config import get_settings, Settings
from app.core.exceptions import (
    AppException,
    BadRequestException,
    ConfigMissingException,
    MetadataLoadFailedException,
    RequestFailedException,
    ValidationFailedException,
)

__all__ = [
    "get_settings",
    "Settings",
    "AppException",
    "BadRequestException",
    "ConfigMissingException",
    "MetadataLoadFailedException",
    "RequestFailedException",
    "ValidationFailedException",
]
