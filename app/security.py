from typing import Optional

from fastapi import Depends, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from app.settings import Settings, settings

API_KEY_NAME = "X-Content-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def is_valid_api_key(key: Optional[str], current_settings: Settings) -> bool:
    # an unset key locks the protected routes instead of opening them
    return bool(current_settings.CONTENT_API_KEY) and key == current_settings.CONTENT_API_KEY


def get_api_key(
    api_key_header: Optional[str] = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
):
    if is_valid_api_key(api_key_header, current_settings):
        return api_key_header
    raise HTTPException(
        status_code=HTTP_403_FORBIDDEN,
        detail="Could not validate API key",
    )
