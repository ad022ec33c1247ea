from __future__ import annotations

from kata_toolkit.core.errors import InvalidArgumentError


def get_zigzag_matrix(n: int) -> list[list[int]]:
    """Return the n x n matrix numbered along the JPEG zig-zag path.

    See https://en.wikipedia.org/wiki/JPEG#Entropy_coding

      1 => [[0]]

      2 => [[0, 1],
            [2, 3]]

      3 => [[0, 1, 5],
            [2, 4, 6],
            [3, 7, 8]]

      4 => [[0, 1, 5, 6],
            [2, 4, 7, 12],
            [3, 8, 11, 13],
            [9, 10, 14, 15]]
    """

    size = _check_size(n)
    matrix = [[0] * size for _ in range(size)]
    for value, (row, col) in enumerate(zigzag_order(size)):
        matrix[row][col] = value
    return matrix


def zigzag_order(n: int) -> list[tuple[int, int]]:
    """Return (row, col) positions of an n x n matrix in zig-zag visiting order."""
    size = _check_size(n)
    order: list[tuple[int, int]] = []
    for s in range(2 * size - 1):
        rows = range(max(0, s - size + 1), min(s, size - 1) + 1)
        # Odd anti-diagonals run downwards (row grows), even ones run upwards.
        if s % 2 == 0:
            rows = reversed(rows)
        order.extend((row, s - row) for row in rows)
    return order


def _check_size(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(
            code="E_ZIGZAG_INVALID_TYPE",
            message=f"matrix dimension must be an integer, got {type(n).__name__}",
            path="n",
        )
    if n < 0:
        raise InvalidArgumentError(
            code="E_ZIGZAG_NEGATIVE_SIZE",
            message=f"matrix dimension must be non-negative, got {n}",
            path="n",
        )
    return n
