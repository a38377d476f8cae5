"""Exception hierarchy for block usage search"""


class BlockSearchError(Exception):
    """Base exception for blocksearch operations."""


class QueryError(BlockSearchError):
    """Search aborted: storage unreachable or query execution failed."""


class ValidationError(QueryError):
    """Caller input rejected before any query runs (e.g. malformed date)."""


class BlockParseError(BlockSearchError):
    """Content could not be parsed into a block tree."""
