"""Attachment storage collaborator.

Only resolves storage keys to access URLs; uploads and downloads live in the
document services, not here.
"""

from __future__ import annotations

import os
from urllib.parse import quote

_DEFAULT_BUCKET = "mro-logix-amazons3-bucket"


def _file_base_url() -> str | None:
    raw = (os.getenv("MROLOGIX_FILE_BASE_URL") or "").strip().rstrip("/")
    return raw or None


def _bucket_name() -> str:
    raw = (os.getenv("MROLOGIX_S3_BUCKET") or "").strip()
    return raw or _DEFAULT_BUCKET


def file_url(file_key: str) -> str:
    """Return the access URL for a stored attachment key."""

    key = quote(str(file_key).lstrip("/"), safe="/-_.~")
    base = _file_base_url()
    if base is not None:
        return f"{base}/{key}"
    return f"https://{_bucket_name()}.s3.amazonaws.com/{key}"
