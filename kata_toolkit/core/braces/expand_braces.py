from __future__ import annotations

import logging
from typing import Iterator

from kata_toolkit.core.errors import (
    DepthExceededError,
    InvalidArgumentError,
    MalformedPatternError,
)
from kata_toolkit.core.model import Group, Literal, Node


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64
# Parsing and expansion each use a few stack frames per nesting level.
MAX_DEPTH_LIMIT = 128


def expand_braces(pattern: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[str]:
    """Expand the brace groups of a pattern.

    Example:
      "~/{Downloads,Pictures}/*.{jpg,gif,png}" -> 6 paths
      "thumbnail.{png,jp{e,}g}" -> thumbnail.png, thumbnail.jpeg, thumbnail.jpg
      "nothing to do" -> "nothing to do"

    The pattern is parsed eagerly so malformed input fails at call time; the
    returned generator then yields each expansion exactly once. Output order
    is not part of the contract.
    """

    nodes = parse_pattern(pattern, max_depth=max_depth)
    return _expand_sequence(nodes)


def count_expansions(pattern: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """Number of strings expand_braces would yield, without enumerating them."""
    return _count_sequence(parse_pattern(pattern, max_depth=max_depth))


def parse_pattern(pattern: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Node, ...]:
    """Parse a pattern into a sequence of Literal and Group nodes.

    Policy for ambiguous input:
    - a balanced group without a top-level comma ("{}", "{a}") is literal text,
      braces included; groups nested inside it still expand.
    - empty alternatives are allowed: "{,}" gives two empty strings.
    - commas outside any group are literal.
    - an unmatched "{" or a stray "}" raises MalformedPatternError.
    - every "{" counts towards max_depth, including literal pairs without a
      comma: "{" * 65 + "}" * 65 exceeds the default depth of 64.
    """

    if not isinstance(pattern, str):
        raise InvalidArgumentError(
            code="E_PATTERN_INVALID_TYPE",
            message=f"pattern must be a string, got {type(pattern).__name__}",
            path="pattern",
        )
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise InvalidArgumentError(
            code="E_PATTERN_INVALID_MAX_DEPTH",
            message="max_depth must be an integer",
            path="max_depth",
        )
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise InvalidArgumentError(
            code="E_PATTERN_INVALID_MAX_DEPTH",
            message=f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}",
            path="max_depth",
        )

    nodes = _PatternParser(pattern, max_depth).parse()
    logger.debug("parsed pattern %r into %d node(s)", pattern, len(nodes))
    return nodes


class _PatternParser:
    def __init__(self, text: str, max_depth: int):
        self._text = text
        self._max_depth = max_depth
        self._pos = 0

    def parse(self) -> tuple[Node, ...]:
        nodes = self._parse_sequence(depth=0)
        # _parse_sequence only stops early at depth 0 on a stray "}".
        if self._pos < len(self._text):
            raise MalformedPatternError(
                code="E_PATTERN_UNMATCHED_CLOSE",
                message="'}' has no matching '{'",
                path=f"pattern[{self._pos}]",
            )
        return nodes

    def _parse_sequence(self, depth: int) -> tuple[Node, ...]:
        nodes: list[Node] = []
        buf: list[str] = []

        def flush_literal() -> None:
            if buf:
                nodes.append(Literal("".join(buf)))
                buf.clear()

        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == "{":
                flush_literal()
                nodes.extend(self._parse_group(depth + 1))
                continue
            if ch == "}":
                break
            if ch == "," and depth > 0:
                break
            buf.append(ch)
            self._pos += 1

        flush_literal()
        return tuple(nodes)

    def _parse_group(self, depth: int) -> list[Node]:
        start = self._pos
        if depth > self._max_depth:
            raise DepthExceededError(
                code="E_PATTERN_DEPTH_EXCEEDED",
                message=f"brace nesting exceeds max depth {self._max_depth}",
                path=f"pattern[{start}]",
            )

        self._pos += 1  # consume "{"
        alternatives: list[tuple[Node, ...]] = []
        while True:
            alternatives.append(self._parse_sequence(depth))
            if self._pos >= len(self._text):
                raise MalformedPatternError(
                    code="E_PATTERN_UNMATCHED_OPEN",
                    message="'{' is never closed",
                    path=f"pattern[{start}]",
                )
            closer = self._text[self._pos]
            self._pos += 1
            if closer == "}":
                break

        if len(alternatives) == 1:
            return [Literal("{"), *alternatives[0], Literal("}")]
        return [Group(tuple(alternatives))]


def _expand_sequence(nodes: tuple[Node, ...]) -> Iterator[str]:
    """Cartesian product of the nodes' expansions, one string at a time.

    Works like an odometer over generators: the generator for node k+1 is
    re-created for every choice made at node k, so only the current choice
    of each node is held in memory.
    """
    if not nodes:
        yield ""
        return

    iterators: list[Iterator[str]] = [_expand_node(nodes[0])]
    parts: list[str] = []  # current choice of every node before the last iterator
    while iterators:
        part = next(iterators[-1], None)
        if part is None:
            iterators.pop()
            if parts:
                parts.pop()
            continue
        if len(iterators) == len(nodes):
            yield "".join(parts) + part
            continue
        parts.append(part)
        iterators.append(_expand_node(nodes[len(iterators)]))


def _expand_node(node: Node) -> Iterator[str]:
    if isinstance(node, Literal):
        yield node.text
        return
    for alternative in node.alternatives:
        yield from _expand_sequence(alternative)


def _count_sequence(nodes: tuple[Node, ...]) -> int:
    total = 1
    for node in nodes:
        if isinstance(node, Group):
            total *= sum(_count_sequence(alt) for alt in node.alternatives)
    return total
