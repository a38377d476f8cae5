"""Two-phase block usage search: coarse storage filter, then structural verification"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional

from blocksearch.core.errors import BlockParseError, ValidationError
from blocksearch.core.models import Block, Candidate, DateRange
from blocksearch.core.parse import BlockParser, parse_blocks
from blocksearch.core.utils.log import get_logger
from blocksearch.crud.repo import DocumentRepo


logger = get_logger(__name__)


def validate_block_name(block_name: str) -> str:
    """Reject empty or whitespace-only block names before any query runs."""
    if not isinstance(block_name, str) or not block_name.strip():
        raise ValidationError("Block name must be a non-empty string.")
    return block_name


def block_signatures(block_name: str) -> tuple[str, str]:
    """Textual markers of a block: the comment delimiter and the inline JSON name."""
    return f"<!-- wp:{block_name}", f'"name":"{block_name}"'


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Depth-first pre-order walk over blocks and everything nested in them."""
    stack = list(reversed(list(blocks)))
    while stack:
        block = stack.pop()
        yield block
        stack.extend(reversed(block.children()))


def contains_block(blocks: Iterable[Block], block_name: str) -> bool:
    return any(b.name == block_name for b in iter_blocks(blocks))


def verify_content(content: str, block_name: str, parser: Optional[BlockParser] = parse_blocks) -> bool:
    """Exact check that content embeds block_name at any nesting depth.

    Without a parser, or when the parser rejects the content, falls back to
    the substring signatures (which can match prose or a longer block name).
    """
    if parser is not None:
        try:
            return contains_block(parser(content), block_name)
        except (BlockParseError, RecursionError) as e:
            logger.warning("Block parse failed, using substring check: %s", e)
    return any(sig in content for sig in block_signatures(block_name))


def _confirm(repo: DocumentRepo, candidate: Candidate, block_name: str, parser: Optional[BlockParser]) -> bool:
    content = repo.get_content(candidate.id)
    if content is None:
        logger.info("Post %d disappeared before verification; skipping", candidate.id)
        return False
    return verify_content(content, block_name, parser)


def search_block_usage(
    block_name: str,
    date_range: DateRange,
    repo: DocumentRepo,
    parser: Optional[BlockParser] = parse_blocks,
    status: str = "publish",
    post_type: str = "post",
    workers: int = 1,
    ) -> list[int]:
    """Return ids of posts embedding block_name, newest first.

    The repository narrows posts by status, type, date range and the block's
    textual signatures; each candidate is then fetched and verified against
    its parsed block tree. QueryError from the repository propagates and no
    partial result is returned.
    """
    validate_block_name(block_name)

    candidates = repo.find_candidates(status, post_type, date_range, block_signatures(block_name))
    logger.info("Coarse filter matched %d candidate(s) for %s", len(candidates), block_name)
    if not candidates:
        return []

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            flags = pool.map(lambda c: _confirm(repo, c, block_name, parser), candidates)
            confirmed = [c for c, ok in zip(candidates, flags) if ok]
        confirmed.sort(key=lambda c: c.sort_key, reverse=True)
    else:
        confirmed = [c for c in candidates if _confirm(repo, c, block_name, parser)]

    logger.info("Verified %d of %d candidate(s)", len(confirmed), len(candidates))
    return [c.id for c in confirmed]
