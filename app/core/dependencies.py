"""
Common dependencies for FastAPI routes.

Everything is read from `app.state`, which `create_app()` fills in, so tests
can build an app around a fake transport.
"""

from typing import Optional

import httpx
from fastapi import Request

from app.core.config import Settings
from app.meta.service import MetadataLoader


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_http_transport(request: Request) -> Optional[httpx.AsyncBaseTransport]:
    """Transport override for outbound calls; None means real network."""
    return request.app.state.http_transport


def get_metadata_loader(request: Request) -> MetadataLoader:
    return request.app.state.metadata_loader
