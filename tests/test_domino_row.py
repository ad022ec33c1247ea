from collections import Counter

from kata_toolkit.core.dominoes.domino_row import arrange_dominoes, can_dominoes_make_row
from kata_toolkit.core.errors import InvalidArgumentError


DOCUMENTED_CASES = [
    ([[0, 1], [1, 1]], True),
    ([[1, 1], [2, 2], [1, 5], [5, 6], [6, 3]], False),
    ([[1, 3], [2, 3], [1, 4], [2, 4], [1, 5], [2, 5]], True),
    ([[0, 0], [0, 1], [1, 1], [0, 2], [1, 2], [2, 2], [0, 3], [1, 3], [2, 3], [3, 3]], False),
    ([[1, 1], [2, 2], [1, 2]], True),
    ([[1, 1], [0, 3], [1, 4]], False),
]


def _assert_valid_row(tiles, row):
    assert len(row) == len(tiles)
    assert Counter(tuple(sorted(t)) for t in row) == Counter(tuple(sorted(t)) for t in tiles)
    for (_, right), (left, _) in zip(row, row[1:]):
        assert right == left


def test_documented_cases():
    for tiles, expected in DOCUMENTED_CASES:
        assert can_dominoes_make_row(tiles) is expected, tiles


def test_arrange_agrees_with_feasibility():
    for tiles, expected in DOCUMENTED_CASES:
        row = arrange_dominoes(tiles)
        if expected:
            assert row is not None
            _assert_valid_row(tiles, row)
        else:
            assert row is None


def test_all_even_degrees_forms_a_row():
    tiles = [(0, 1), (1, 2), (2, 0), (0, 0)]
    assert can_dominoes_make_row(tiles)
    _assert_valid_row(tiles, arrange_dominoes(tiles))


def test_disconnected_even_degrees_fails():
    assert not can_dominoes_make_row([[1, 1], [2, 2]])
    assert arrange_dominoes([[1, 1], [2, 2]]) is None


def test_single_tile_and_empty_set():
    assert can_dominoes_make_row([[3, 4]])
    assert arrange_dominoes([[3, 4]]) in ([(3, 4)], [(4, 3)])
    assert can_dominoes_make_row([])
    assert arrange_dominoes([]) == []


def test_arrange_starts_on_odd_value():
    row = arrange_dominoes([[0, 1], [1, 1]])
    assert row == [(0, 1), (1, 1)]


def test_invalid_tile():
    for bad in ([[1, 2, 3]], [[1, "2"]], [5], [[True, 1]]):
        try:
            can_dominoes_make_row(bad)
            assert False, "expected InvalidArgumentError"
        except InvalidArgumentError as e:
            assert e.code == "E_DOMINO_INVALID_TILE"
            assert e.path == "dominoes[0]"


def test_invalid_set():
    try:
        can_dominoes_make_row(None)
        assert False, "expected InvalidArgumentError"
    except InvalidArgumentError as e:
        assert e.code == "E_DOMINO_INVALID_SET"
