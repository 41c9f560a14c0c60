from typing import Protocol


class ObjectStoragePort(Protocol):
    """Object storage bucket. Methods raise PlatformError on failure."""

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under key."""
        ...

    def get_public_url(self, key: str) -> str:
        """Return the public URL for key."""
        ...

    def remove(self, keys: list[str]) -> None:
        """Remove objects by key."""
        ...
