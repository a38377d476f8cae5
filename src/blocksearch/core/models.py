"""Block tree, date range, and search candidate models"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field


BLOCK_SHAPE_KEYS = ("attributes", "innerBlocks")


class Block(BaseModel):
    """A parsed block-editor block and its nested inner blocks."""
    name: Optional[str] = None      # None for freeform HTML between delimiters
    attrs: dict[str, Any] = Field(default_factory=dict)
    inner_blocks: list["Block"] = Field(default_factory=list)
    inner_html: str = ""

    def embedded(self) -> Iterator["Block"]:
        """Yield blocks serialized as JSON inside this block's attributes.

        Reusable and API-sourced content can carry whole blocks in attribute
        values, shaped as {"name": ..., "attributes": ..., "innerBlocks": [...]}.
        """
        yield from _blocks_in_value(self.attrs)

    def children(self) -> list["Block"]:
        return [*self.inner_blocks, *self.embedded()]


def _blocks_in_value(value: Any) -> Iterator[Block]:
    if isinstance(value, list):
        for item in value:
            yield from _blocks_in_value(item)
    elif isinstance(value, dict):
        if isinstance(value.get("name"), str) and any(k in value for k in BLOCK_SHAPE_KEYS):
            yield _block_from_json(value)
        else:
            for item in value.values():
                yield from _blocks_in_value(item)


def _block_from_json(data: dict) -> Block:
    """Convert an editor-serialized block object to a Block."""
    attrs = data.get("attributes")
    inner = data.get("innerBlocks")
    if not isinstance(inner, list):
        inner = []
    return Block(
        name=data["name"],
        attrs=attrs if isinstance(attrs, dict) else {},
        inner_blocks=[_block_from_json(b) for b in inner if isinstance(b, dict) and isinstance(b.get("name"), str)],
    )


@dataclass(frozen=True)
class DateRange:
    """Publish-date window; each bound covers its whole calendar day."""
    after:  Optional[date] = None
    before: Optional[date] = None

    def start(self) -> Optional[datetime]:
        """Inclusive lower bound: 00:00:00 on the after day."""
        return datetime.combine(self.after, time.min) if self.after else None

    def end(self) -> Optional[datetime]:
        """Exclusive upper bound: 00:00:00 on the day following before."""
        return datetime.combine(self.before + timedelta(days=1), time.min) if self.before else None

    def contains(self, ts: datetime) -> bool:
        start, end = self.start(), self.end()
        if start is not None and ts < start:
            return False
        if end is not None and ts >= end:
            return False
        return True

    @property
    def unbounded(self) -> bool:
        return self.after is None and self.before is None


@dataclass(frozen=True)
class Candidate:
    """A coarse-phase match: post id and its publish timestamp."""
    id:           int
    published_at: datetime

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return self.published_at, self.id
