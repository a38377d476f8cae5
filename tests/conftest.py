"""Root test configuration: isolated environment and shared Post factory"""

import os
from datetime import datetime

import pytest

from blocksearch.crud.tables import Post, PostStatus


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in a temp dir with no BLOCKSEARCH_* variables leaking in."""
    for name in list(os.environ):
        if name.startswith("BLOCKSEARCH_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="make_post")
def make_post_fixture():
    """Factory for unsaved Post rows with sensible defaults."""
    def _make(
        id: int,
        content: str = "",
        published_at: datetime = datetime(2024, 1, 5, 12, 0, 0),
        status: PostStatus = PostStatus.publish,
        type: str = "post",
        title: str = "",
        ) -> Post:
        return Post(id=id, content=content, published_at=published_at, status=status, type=type, title=title)
    return _make
