"""
Supabase adapters: tables, auth and storage behind the application ports.
"""

from .client import build_client, platform_call
from .identity import SupabaseIdentityProvider
from .repos import (
    SupabaseContentRepo,
    SupabaseContentTypeRepo,
    SupabaseMediaRepo,
    SupabaseProfileRepo,
)
from .storage import SupabaseObjectStorage

__all__ = [
    "build_client",
    "platform_call",
    "SupabaseContentRepo",
    "SupabaseContentTypeRepo",
    "SupabaseIdentityProvider",
    "SupabaseMediaRepo",
    "SupabaseObjectStorage",
    "SupabaseProfileRepo",
]
