from __future__ import annotations

import logging
from collections import Counter, defaultdict, deque
from typing import Any, Iterable, Optional

from kata_toolkit.core.errors import InvalidArgumentError
from kata_toolkit.core.model import Domino


logger = logging.getLogger(__name__)


def can_dominoes_make_row(dominoes: Iterable[Any]) -> bool:
    """Return True if the tiles can be laid in one row by the usual domino rules.

    Any tile [i, j] may be turned around to [j, i]. Treating values as nodes and
    tiles as edges, a row exists iff the multigraph has an Eulerian path: zero
    or two values of odd degree, and every tile in one connected component.

      [[0,1], [1,1]] => True
      [[1,1], [2,2], [1,5], [5,6], [6,3]] => False
      [[1,3], [2,3], [1,4], [2,4], [1,5], [2,5]] => True
    """
    return _has_row(_normalize(dominoes))


def arrange_dominoes(dominoes: Iterable[Any]) -> Optional[list[Domino]]:
    """Return one valid row (tiles oriented so neighbours match), or None.

    Uses Hierholzer's algorithm, starting from an odd-degree value when there
    is one. An empty set arranges to an empty row.
    """

    tiles = _normalize(dominoes)
    if not tiles:
        return []
    if not _has_row(tiles):
        return None

    adjacency: dict[int, list[tuple[int, int]]] = defaultdict(list)
    for idx, (a, b) in enumerate(tiles):
        adjacency[a].append((b, idx))
        if a != b:
            adjacency[b].append((a, idx))

    odd = sorted(v for v, d in _degrees(tiles).items() if d % 2)
    start = odd[0] if odd else tiles[0][0]

    used = [False] * len(tiles)
    stack: list[tuple[int, Optional[Domino]]] = [(start, None)]
    row: list[Domino] = []
    while stack:
        node, via = stack[-1]
        edges = adjacency[node]
        while edges and used[edges[-1][1]]:
            edges.pop()
        if edges:
            nxt, idx = edges.pop()
            used[idx] = True
            stack.append((nxt, (node, nxt)))
        else:
            stack.pop()
            if via is not None:
                row.append(via)

    row.reverse()
    logger.debug("arranged %d domino(es) starting at %d", len(row), start)
    return row


def _normalize(dominoes: Iterable[Any]) -> list[Domino]:
    if isinstance(dominoes, (str, bytes)) or not isinstance(dominoes, Iterable):
        raise InvalidArgumentError(
            code="E_DOMINO_INVALID_SET",
            message="dominoes must be a sequence of [x, y] pairs",
            path="dominoes",
        )

    tiles: list[Domino] = []
    for i, raw in enumerate(dominoes):
        if (
            isinstance(raw, (str, bytes))
            or not isinstance(raw, (list, tuple))
            or len(raw) != 2
            or not all(isinstance(x, int) and not isinstance(x, bool) for x in raw)
        ):
            raise InvalidArgumentError(
                code="E_DOMINO_INVALID_TILE",
                message=f"tile must be a pair of integers, got {raw!r}",
                path=f"dominoes[{i}]",
            )
        tiles.append((raw[0], raw[1]))
    return tiles


def _degrees(tiles: list[Domino]) -> Counter[int]:
    degrees: Counter[int] = Counter()
    for a, b in tiles:
        # A double adds 2 to its value.
        degrees[a] += 1
        degrees[b] += 1
    return degrees


def _has_row(tiles: list[Domino]) -> bool:
    if not tiles:
        return True

    odd_count = sum(1 for d in _degrees(tiles).values() if d % 2)
    if odd_count not in (0, 2):
        return False

    neighbours: dict[int, set[int]] = defaultdict(set)
    for a, b in tiles:
        neighbours[a].add(b)
        neighbours[b].add(a)

    # Reachability from any value must cover every value that appears on a tile.
    start = tiles[0][0]
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in neighbours[cur]:
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return len(seen) == len(neighbours)
