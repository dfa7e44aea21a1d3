"""Tests for public image URL construction."""

from festival_finder.util import public_image_url

BUCKET = "https://storage.example.com/festival-images"


class TestPublicImageUrl:
    """Tests for public_image_url."""

    def test_none(self):
        """Test that a missing image stays missing."""
        assert public_image_url(None, BUCKET) is None
        assert public_image_url("", BUCKET) is None

    def test_absolute_urls_pass_through(self):
        """Test that absolute URLs are returned unchanged."""
        url = "https://cdn.example.com/poster.jpg"
        assert public_image_url(url, BUCKET) == url
        assert public_image_url("http://example.com/a.png", BUCKET) == (
            "http://example.com/a.png"
        )

    def test_upload_paths_are_rewritten(self):
        """Test that /uploads/ paths are moved onto the bucket."""
        assert public_image_url("/uploads/2025/poster.jpg", BUCKET) == (
            f"{BUCKET}/2025/poster.jpg"
        )

    def test_trailing_slash_on_bucket(self):
        """Test that a trailing slash on the bucket URL is not doubled."""
        assert public_image_url("/uploads/a.jpg", BUCKET + "/") == f"{BUCKET}/a.jpg"

    def test_no_bucket_leaves_path(self):
        """Test that without a bucket URL the stored path is kept."""
        assert public_image_url("/uploads/a.jpg", "") == "/uploads/a.jpg"

    def test_other_paths_unchanged(self):
        """Test that paths outside /uploads/ are returned as stored."""
        assert public_image_url("/static/logo.png", BUCKET) == "/static/logo.png"
