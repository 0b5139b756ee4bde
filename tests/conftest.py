"""Shared fixtures for the post utility tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from post import Post


@pytest.fixture
def make_post():
    """Factory for Post records with valid defaults."""

    def _make(post_id: str = "post", **overrides) -> Post:
        fields = {
            "id": post_id,
            "title": f"Title for {post_id}",
            "description": "A description that is comfortably longer than fifty characters.",
            "pub_datetime": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "author": "alice",
            "tags": ["python"],
        }
        fields.update(overrides)
        return Post(**fields)

    return _make
