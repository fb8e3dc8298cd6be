"""Fenced code blocks inside Markdown bodies.

Blocks are located by character offsets into the body so a block can be
pulled out and written back without touching the surrounding text.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>[^\n]*)$")
_HL_LINES = re.compile(r"""hl_lines\s*=\s*(?:\[(?P<list>[^\]]*)\]|["'](?P<quoted>[^"']*)["'])""")
_BRACE_RANGES = re.compile(r"^\{\s*(?P<ranges>\d+(?:\s*-\s*\d+)?(?:\s*,\s*\d+(?:\s*-\s*\d+)?)*)\s*\}$")
_LINE = re.compile(r"[^\n]*\n|[^\n]+\Z")


@dataclass(frozen=True)
class CodeBlock:
    opening: str
    fence: str
    info: str
    code: str
    closing_fence: Optional[str]
    start: int
    end: int

    @property
    def closed(self) -> bool:
        return self.closing_fence is not None

    @property
    def language(self) -> Optional[str]:
        return parse_info(self.info)[0]

    @property
    def highlight(self) -> Tuple[int, ...]:
        return parse_info(self.info)[1]

    def render(self) -> str:
        """Source text of the block exactly as it appeared in the body."""
        return self.opening + self.code + (self.closing_fence or "")


def extract_code_blocks(body: str) -> List[CodeBlock]:
    blocks = []
    # only \n ends a line, unlike str.splitlines
    lines = _LINE.findall(body)
    offset = 0
    i = 0

    while i < len(lines):
        line = lines[i]
        match = _OPEN_FENCE.match(line.rstrip("\r\n"))
        # backtick fences may not carry backticks in their info string
        if not match or (match["fence"][0] == "`" and "`" in match["info"]):
            offset += len(line)
            i += 1
            continue

        start = offset
        fence = match["fence"]
        offset += len(line)
        i += 1

        code_parts = []
        closing = None
        while i < len(lines):
            candidate = lines[i]
            if _is_closing(candidate, fence):
                closing = candidate
                offset += len(candidate)
                i += 1
                break
            code_parts.append(candidate)
            offset += len(candidate)
            i += 1

        if closing is None:
            logger.debug(f"Unclosed {fence} fence starting at offset {start}")

        blocks.append(
            CodeBlock(
                opening=line,
                fence=fence,
                info=match["info"],
                code="".join(code_parts),
                closing_fence=closing,
                start=start,
                end=offset,
            )
        )

    return blocks


def embed_code_block(body: str, block: CodeBlock) -> str:
    """Write ``block`` back into the span it was extracted from."""
    return body[: block.start] + block.render() + body[block.end :]


def unbalanced_fences(body: str) -> List[CodeBlock]:
    return [block for block in extract_code_blocks(body) if not block.closed]


def parse_info(info: str) -> Tuple[Optional[str], Tuple[int, ...]]:
    """Split a fence info string into language and highlighted lines.

    Understands ``csharp {hl_lines=[2,"4-6"]}``, ``csharp{2,4-6}`` and
    ``csharp hl_lines="2 4-6"``.
    """
    info = info.strip()
    if not info:
        return None, ()

    language = re.match(r"[^\s{]*", info).group(0) or None
    rest = info[len(language or "") :].strip()

    highlight: Tuple[int, ...] = ()
    hl = _HL_LINES.search(rest)
    if hl:
        raw = hl["list"] if hl["list"] is not None else hl["quoted"]
        highlight = _expand_ranges(re.split(r"[\s,]+", raw.replace('"', "").replace("'", "")))
    else:
        braces = _BRACE_RANGES.match(rest)
        if braces:
            highlight = _expand_ranges(braces["ranges"].split(","))

    return language, highlight


def _is_closing(line: str, fence: str) -> bool:
    stripped = line.rstrip("\r\n")
    content = stripped.lstrip(" ")
    if len(stripped) - len(content) > 3:
        return False
    run = len(content) - len(content.lstrip(fence[0]))
    return run >= len(fence) and not content[run:].strip()


def _expand_ranges(items) -> Tuple[int, ...]:
    lines = set()
    for item in items:
        item = item.strip()
        if not item:
            continue
        if "-" in item:
            low, _, high = item.partition("-")
            try:
                lines.update(range(int(low), int(high) + 1))
            except ValueError:
                logger.debug(f"Ignoring bad highlight range {item!r}")
        elif item.isdigit():
            lines.add(int(item))
    return tuple(sorted(lines))
