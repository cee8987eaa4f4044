import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from santorini.position import ALL_POSITIONS, SENTINEL_MASK, Position, PositionSet


def _cells(*coords):
    return PositionSet.from_positions(Position.at(r, c) for r, c in coords)


def test_position_round_trips_row_and_col():
    for row in range(5):
        for col in range(5):
            position = Position.at(row, col)
            assert position.coords() == (row, col)
            assert not position.mask & SENTINEL_MASK


def test_position_rejects_cells_off_the_board():
    with pytest.raises(ValueError):
        Position.at(5, 0)
    with pytest.raises(ValueError):
        Position.at(0, -1)
    with pytest.raises(ValueError):
        Position.from_mask(1 << 5)  # padding column of row 0
    with pytest.raises(ValueError):
        Position.from_mask(0b11)


def test_neighbor_counts_and_mutual_adjacency():
    for position in ALL_POSITIONS:
        neighbors = position.get_neighbors()
        assert 3 <= len(neighbors) <= 8
        assert position not in neighbors
        for neighbor in neighbors:
            assert Position.are_neighbors(position, neighbor)
            assert position in neighbor.get_neighbors()

    assert len(Position.at(0, 0).get_neighbors()) == 3
    assert len(Position.at(0, 2).get_neighbors()) == 5
    assert len(Position.at(1, 1).get_neighbors()) == 8


def test_are_neighbors_matches_row_col_distance():
    for a in ALL_POSITIONS:
        for b in ALL_POSITIONS:
            expected = max(abs(a.row() - b.row()), abs(a.col() - b.col())) == 1
            assert Position.are_neighbors(a, b) == expected
            assert Position.are_neighbors(a, b) == Position.are_neighbors(b, a)
        assert not Position.are_neighbors(a, a)


def test_row_ends_are_not_adjacent_across_the_wrap():
    assert not Position.are_neighbors(Position.at(0, 4), Position.at(1, 0))
    assert not Position.are_neighbors(Position.at(1, 4), Position.at(2, 0))
    assert Position.at(1, 0) not in Position.at(0, 4).get_neighbors()
    assert Position.at(2, 4) not in Position.at(1, 0).get_neighbors()
    assert Position.are_neighbors(Position.at(1, 2), Position.at(2, 3))
    assert not Position.are_neighbors(Position.at(1, 2), Position.at(3, 3))


def test_set_algebra():
    a = _cells((0, 0), (1, 1), (2, 2))
    b = _cells((1, 1), (3, 3))

    assert a.union(b) == _cells((0, 0), (1, 1), (2, 2), (3, 3))
    assert a.intersection(b) == _cells((1, 1))
    assert a.difference(b) == _cells((0, 0), (2, 2))
    assert b.difference(a) == _cells((3, 3))
    assert (a | b) == a.union(b)
    assert (a & b) == a.intersection(b)
    assert (a - b) == a.difference(b)
    assert len(a) == 3
    assert Position.at(2, 2) in a
    assert Position.at(3, 3) not in a
    assert PositionSet.empty().is_empty()
    assert len(ALL_POSITIONS) == 25


def test_add_and_remove_return_new_sets():
    base = _cells((0, 0))
    grown = base.add(Position.at(4, 4))
    shrunk = grown.remove(Position.at(0, 0))

    assert base == _cells((0, 0))
    assert grown == _cells((0, 0), (4, 4))
    assert shrunk == _cells((4, 4))
    assert base.remove(Position.at(3, 3)) == base


def test_iteration_order_and_restart():
    cells = _cells((0, 1), (4, 4), (2, 0), (3, 3))

    forward = list(cells)
    backward = list(reversed(cells))

    assert [p.index for p in forward] == sorted((p.index for p in forward), reverse=True)
    assert backward == forward[::-1]
    assert list(cells) == forward


def test_cursor_moves_wrap_within_the_board():
    corner = Position.at(0, 0)
    assert corner.up() == Position.at(4, 0)
    assert corner.left() == Position.at(0, 4)
    assert corner.down() == Position.at(1, 0)
    assert corner.right() == Position.at(0, 1)

    far = Position.at(4, 4)
    assert far.down() == Position.at(0, 4)
    assert far.right() == Position.at(4, 0)

    assert Position.at(2, 0).left() == Position.at(2, 4)
    assert Position.at(2, 4).right() == Position.at(2, 0)
