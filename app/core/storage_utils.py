# app/core/storage_utils.py
import secrets
import time

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin

settings = get_settings()


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to the photo bucket and return a public URL.

    Args:
        path: Full object path inside the bucket, e.g. "12-1718000000000-ab12cd34ef56ab78.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Raises:
        Any exception raised by Supabase client if upload fails.
    """
    bucket = supabase_admin().storage.from_(settings.PHOTO_BUCKET)
    bucket.upload(path, file_bytes, {"content-type": content_type, "upsert": "true"})
    return public_photo_url(path)


def public_photo_url(filename: str | None) -> str | None:
    """
    Build the browser-facing URL for a stored photo.

    Absolute URLs are returned unchanged; PHOTO_PUBLIC_ORIGIN (a CDN)
    wins over the bucket's own public URL.
    """
    if not filename:
        return None
    if filename.startswith("http"):
        return filename
    if settings.PHOTO_PUBLIC_ORIGIN:
        return f"{settings.PHOTO_PUBLIC_ORIGIN.rstrip('/')}/{filename}"
    return supabase_admin().storage.from_(settings.PHOTO_BUCKET).get_public_url(filename)


def generate_photo_filename(user_id: int, ext: str) -> str:
    """
    Unique object name: "<user_id>-<ms timestamp>-<16 hex>.<ext>"
    """
    timestamp = int(time.time() * 1000)
    return f"{user_id}-{timestamp}-{secrets.token_hex(8)}.{ext}"
