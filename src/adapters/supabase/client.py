"""
Supabase client construction and SDK error translation.

A client is built per inbound request. When the caller's bearer token is
forwarded, every table and storage call runs under that user's row-level
security policies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import httpx
from supabase import (
    AuthError,
    Client,
    ClientOptions,
    PostgrestAPIError,
    StorageException,
    create_client,
)

from src.ports.errors import PlatformError

logger = logging.getLogger(__name__)


def build_client(url: str, key: str, access_token: str | None = None) -> Client:
    """
    Create a Supabase client.

    Args:
        url: Project URL.
        key: Anon key (or service key for maintenance jobs).
        access_token: Caller's JWT, forwarded as the Authorization header.
    """
    headers: dict[str, str] = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    options = ClientOptions(
        headers=headers,
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(url, key, options=options)


def _storage_details(err: StorageException) -> tuple[str, Any]:
    payload = err.args[0] if err.args else None
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("error") or payload), payload
    return str(err), None


@contextmanager
def platform_call(action: str) -> Iterator[None]:
    """Translate SDK and transport errors into PlatformError."""
    try:
        yield
    except PostgrestAPIError as e:
        logger.info("%s failed: %s", action, e.message)
        raise PlatformError(
            e.message or str(e),
            details={"details": e.details, "hint": e.hint},
            code=e.code,
        ) from e
    except AuthError as e:
        logger.info("%s failed: %s", action, e.message)
        raise PlatformError(e.message, code=getattr(e, "code", None)) from e
    except StorageException as e:
        message, details = _storage_details(e)
        logger.info("%s failed: %s", action, message)
        raise PlatformError(message, details=details) from e
    except httpx.HTTPError as e:
        logger.warning("%s failed: %s", action, e)
        raise PlatformError(f"{action} failed: {e}") from e


def to_row(values: dict[str, Any]) -> dict[str, Any]:
    """Make a dict JSON-ready for the REST API (datetimes as ISO strings)."""
    row: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        else:
            row[key] = value
    return row
