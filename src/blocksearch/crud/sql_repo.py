"""SQL-backed DocumentRepo over the posts table"""

from typing import Sequence

from sqlalchemy import or_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from blocksearch.core.errors import QueryError
from blocksearch.core.models import Candidate, DateRange
from blocksearch.crud.repo import DocumentRepo
from blocksearch.crud.tables import Post


class SQLRepo(DocumentRepo):
    """Opens a short-lived session per call so verification may run on worker threads."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_candidates(
        self,
        status: str,
        post_type: str,
        date_range: DateRange,
        patterns: Sequence[str],
        ) -> list[Candidate]:
        stmt = select(Post.id, Post.published_at).where(Post.status == status, Post.type == post_type)
        if patterns:
            stmt = stmt.where(or_(*(Post.content.contains(p, autoescape=True) for p in patterns)))
        if (start := date_range.start()) is not None:
            stmt = stmt.where(Post.published_at >= start)
        if (end := date_range.end()) is not None:
            stmt = stmt.where(Post.published_at < end)
        stmt = stmt.order_by(Post.published_at.desc(), Post.id.desc())
        try:
            with Session(self.engine) as session:
                rows = session.exec(stmt).all()
        except SQLAlchemyError as e:
            raise QueryError(f"Candidate query failed: {e}") from e
        return [Candidate(id=row[0], published_at=row[1]) for row in rows]

    def get_content(self, doc_id: int) -> str | None:
        try:
            with Session(self.engine) as session:
                post = session.get(Post, doc_id)
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load post {doc_id}: {e}") from e
        return post.content if post else None
