"""
Supabase Storage implementation of ObjectStoragePort.
"""

from __future__ import annotations

from supabase import Client

from src.adapters.supabase.client import platform_call


class SupabaseObjectStorage:
    """A single storage bucket."""

    def __init__(self, client: Client, bucket: str = "media"):
        self.client = client
        self.bucket = bucket

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        with platform_call("Upload object"):
            self.client.storage.from_(self.bucket).upload(
                path=key,
                file=data,
                file_options={"content-type": content_type},
            )

    def get_public_url(self, key: str) -> str:
        with platform_call("Resolve public URL"):
            return self.client.storage.from_(self.bucket).get_public_url(key)

    def remove(self, keys: list[str]) -> None:
        if not keys:
            return
        with platform_call("Remove objects"):
            self.client.storage.from_(self.bucket).remove(keys)
