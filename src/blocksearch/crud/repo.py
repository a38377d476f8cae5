"""Abstract document repository consumed by the block usage search"""

from abc import ABC, abstractmethod
from typing import Sequence

from blocksearch.core.models import Candidate, DateRange


class DocumentRepo(ABC):
    @abstractmethod
    def find_candidates(
        self,
        status: str,
        post_type: str,
        date_range: DateRange,
        patterns: Sequence[str],
        ) -> list[Candidate]:
        """Return posts matching status, type, range and any pattern, newest first (ties: id desc)."""
        raise NotImplementedError

    @abstractmethod
    def get_content(self, doc_id: int) -> str | None:
        """Return the full content of a post, or None if it no longer exists."""
        raise NotImplementedError
