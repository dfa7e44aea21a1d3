"""Public image URL construction for stored event and artist images."""

UPLOADS_PREFIX = "/uploads/"


def public_image_url(stored_path: str | None, storage_base_url: str) -> str | None:
    """Turn a stored image path into a URL a browser can load.

    Absolute URLs pass through unchanged. Paths under /uploads/ are rewritten
    onto the public storage bucket. Anything else is returned as stored.

    Args:
        stored_path: Value of an image_url column.
        storage_base_url: Public bucket base URL. Empty disables rewriting.

    Returns:
        The public URL, or None when no image is stored.
    """
    if not stored_path:
        return None
    if stored_path.startswith(("http://", "https://")):
        return stored_path
    if stored_path.startswith(UPLOADS_PREFIX) and storage_base_url:
        relative_path = stored_path[len(UPLOADS_PREFIX) :]
        return f"{storage_base_url.rstrip('/')}/{relative_path}"
    return stored_path
