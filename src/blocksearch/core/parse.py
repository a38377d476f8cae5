"""Block-comment delimiter parsing into an explicit Block tree"""

import json
import re
from typing import Any, Callable, Optional

from blocksearch.core.errors import BlockParseError
from blocksearch.core.models import Block


BlockParser = Callable[[str], list[Block]]

DEFAULT_NAMESPACE = "core/"

DELIMITER_RE = re.compile(
    r'<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)\s+'
    r'(?P<attrs>\{.*?\}\s+)?(?P<void>/)?-->',
    re.DOTALL,
)


def _block_name(match: re.Match) -> str:
    """Full namespaced name; bare names belong to the core namespace."""
    return (match['namespace'] or DEFAULT_NAMESPACE) + match['name']


def _attrs(raw: Optional[str], name: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise BlockParseError(f"Invalid attributes for {name}: {e}") from e
    except RecursionError as e:
        raise BlockParseError(f"Attributes for {name} are nested too deeply") from e


def parse_blocks(content: str) -> list[Block]:
    """Parse block markup into top-level Blocks with nested inner blocks.

    HTML outside any block becomes a freeform Block (name None); HTML inside
    a block is kept as that block's inner_html. Blocks left open at the end
    of input are closed implicitly. Raises BlockParseError on invalid JSON
    attributes or a closing delimiter that does not match the open block.
    """
    output: list[Block] = []
    stack: list[Block] = []

    def _attach(block: Block) -> None:
        (stack[-1].inner_blocks if stack else output).append(block)

    def _html(text: str) -> None:
        if stack:
            stack[-1].inner_html += text
        elif text.strip():
            output.append(Block(inner_html=text))

    pos = 0
    for m in DELIMITER_RE.finditer(content):
        _html(content[pos:m.start()])
        pos = m.end()
        name = _block_name(m)

        if m['closer']:
            if not stack:
                raise BlockParseError(f"Closing delimiter for {name} at offset {m.start()} has no open block")
            if stack[-1].name != name:
                raise BlockParseError(
                    f"Closing delimiter for {name} at offset {m.start()} does not match open {stack[-1].name}"
                )
            _attach(stack.pop())
            continue

        block = Block(name=name, attrs=_attrs(m['attrs'], name))
        if m['void']:
            _attach(block)
        else:
            stack.append(block)

    _html(content[pos:])
    while stack:
        _attach(stack.pop())
    return output
