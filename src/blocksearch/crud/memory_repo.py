from dataclasses import dataclass, field
from typing import Iterable, Sequence

from blocksearch.core.models import Candidate, DateRange
from blocksearch.crud.repo import DocumentRepo
from blocksearch.crud.tables import Post


@dataclass
class MemoryRepo(DocumentRepo):
    _posts: dict[int, Post] = field(default_factory=dict)

    @classmethod
    def from_posts(cls, posts: Iterable[Post]) -> "MemoryRepo":
        repo = cls()
        for p in posts:
            repo.add(p)
        return repo

    def add(self, post: Post) -> Post:
        self._posts[post.id] = post
        return post

    def find_candidates(
        self,
        status: str,
        post_type: str,
        date_range: DateRange,
        patterns: Sequence[str],
        ) -> list[Candidate]:
        hits = [
            Candidate(id=p.id, published_at=p.published_at)
            for p in self._posts.values()
            if p.status == status and p.type == post_type
            and date_range.contains(p.published_at)
            and (not patterns or any(s in p.content for s in patterns))
        ]
        return sorted(hits, key=lambda c: c.sort_key, reverse=True)

    def get_content(self, doc_id: int) -> str | None:
        post = self._posts.get(doc_id)
        return post.content if post else None
