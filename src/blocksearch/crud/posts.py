"""Post persistence: lookup, upsert, and import of REST-style post records"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from sqlmodel import Session

from blocksearch.crud.tables import Post, PostStatus


def get_post(session: Session, post_id: int) -> Post | None:
    """Return the Post with the given id, or None if not found."""
    return session.get(Post, post_id)


def _rendered(value: Any, *keys: str) -> str:
    """Unwrap {"raw": ..., "rendered": ...} fields; plain strings pass through."""
    if isinstance(value, dict):
        for key in keys:
            if isinstance(value.get(key), str):
                return value[key]
        return ""
    return value if isinstance(value, str) else ""


def record_to_fields(record: dict) -> dict[str, Any]:
    """Normalize a post record to Post column values; raises ValueError if malformed."""
    try:
        post_id = int(record["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Post record has no valid id: {record!r:.80}") from e
    if post_id <= 0:
        raise ValueError(f"Post id must be positive, got {post_id}")

    raw_date = record.get("date") or record.get("published_at")
    try:
        published_at = datetime.fromisoformat(str(raw_date))
    except ValueError as e:
        raise ValueError(f"Post {post_id} has invalid date {raw_date!r}") from e
    if published_at.tzinfo is not None:
        published_at = published_at.replace(tzinfo=None)

    try:
        status = PostStatus(record.get("status", PostStatus.publish.value))
    except ValueError as e:
        raise ValueError(f"Post {post_id} has unknown status {record.get('status')!r}") from e

    return {
        "id": post_id,
        "title": _rendered(record.get("title", ""), "raw", "rendered"),
        "content": _rendered(record.get("content", ""), "raw", "rendered"),
        "published_at": published_at,
        "status": status,
        "type": str(record.get("type") or "post"),
    }


def upsert_post(session: Session, record: dict) -> tuple[Post, str]:
    """Insert or update a post by id.

    Returns (post, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    """
    fields = record_to_fields(record)
    post = get_post(session, fields["id"])

    if post:
        if all(getattr(post, k) == v for k, v in fields.items()):
            return post, "unchanged"
        for k, v in fields.items():
            setattr(post, k, v)
        post.updated_at = datetime.now()
        session.add(post)
        session.flush()
        return post, "updated"

    post = Post(**fields)
    session.add(post)
    session.flush()
    return post, "created"


def import_posts(session: Session, records: Iterable[dict]) -> dict[str, int]:
    """Upsert every record and return per-status counts."""
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    for record in records:
        _, status = upsert_post(session, record)
        counts[status] += 1
    return counts


def load_records(path: Path) -> list[dict]:
    """Read post records from a JSON array file or a JSON-lines (.jsonl) file."""
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".jsonl":
            records = [json.loads(line) for line in text.splitlines() if line.strip()]
        else:
            records = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    if isinstance(records, dict):
        records = [records]
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError(f"{path} must contain post objects")
    return records
