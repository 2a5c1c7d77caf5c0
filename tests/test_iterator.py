import copy
import math

import numpy as np
import pytest

import flathist as fh


def make_hist():
    """Axis 0 with flow (extent 4), axis 1 without (extent 2): 8 cells."""
    return fh.HistND([fh.Regular(2, 0.0, 2.0), fh.Integer(0, 2, uoflow=False)])


def test_walk_visits_every_flat_index_once():
    h = make_hist()
    assert h.size == 8

    it = h.begin()
    end = fh.CellIterator(h, h.counts, 8)
    visited = []
    while it != end:
        visited.append(it.index)
        it.advance()

    assert visited == list(range(8))
    assert it == end
    assert it == h.end()


def test_walk_backwards():
    h = make_hist()
    it, begin = h.end(), h.begin()
    visited = []
    while it != begin:
        it.retreat()
        visited.append(it.indices())
    assert visited[0] == (-1, 1)
    assert visited[-1] == (0, 0)
    assert len(visited) == 8


def test_advance_then_retreat_returns_to_start():
    h = make_hist()
    for flat in range(1, 7):
        it = fh.CellIterator(h, h.counts, flat)
        before = it.indices()
        it.advance().retreat()
        assert it.index == flat
        assert it.indices() == before


def test_advance_is_chainable():
    h = make_hist()
    assert h.begin().advance().advance().index == 2


def test_equality_needs_same_storage_and_index():
    h = make_hist()
    a = h.begin()
    b = h.begin()
    assert a == b

    other = h.copy()
    assert h.begin() != other.begin()
    assert fh.CellIterator(h, np.zeros(h.size), 0) != a

    b.advance()
    assert a != b


def test_copy_compares_equal_until_moved():
    h = make_hist()
    it = h.begin().advance()
    c = it.copy()
    d = copy.copy(it)
    assert c == it
    assert d == it

    it.advance()
    assert c != it
    assert c.index == 1
    assert d.index == 1


def test_copy_owns_its_stride_table():
    h = make_hist()
    it = fh.CellIterator(h, h.counts, 5)
    assert it.indices() == (1, 1)
    c = it.copy()
    it.advance()
    assert it.indices() == (2, 1)
    assert c.indices() == (1, 1)
    assert c._dims is not it._dims


def test_value_reads_storage_at_flat_index():
    h = make_hist()
    h.fill_binned([0, 1, 1], [1, 1, 1])
    values = [cell.value for cell in h.cells()]
    assert values == [0, 0, 0, 0, 1, 2, 0, 0]


def test_bin_accessors():
    h = make_hist()
    it = fh.CellIterator(h, h.counts, 5)
    assert it.bin() == fh.Interval(1.0, 2.0)
    assert it.bin(0) == it.bin()
    assert it.bin(np.int64(1)) == fh.Interval(1, 2)
    assert it.bins() == (fh.Interval(1.0, 2.0), fh.Interval(1, 2))


def test_bin_of_flow_cells():
    h = make_hist()
    overflow = fh.CellIterator(h, h.counts, 2)
    underflow = fh.CellIterator(h, h.counts, 3)
    assert overflow.bin() == fh.Interval(2.0, math.inf)
    assert underflow.bin() == fh.Interval(-math.inf, 0.0)


def test_bin_returns_category_values():
    h = fh.HistND([fh.Category(["mu", "e"]), fh.Regular(1, 0.0, 1.0)])
    it = h.begin()
    assert it.bin() == "mu"
    assert it.advance().bin() == "e"
    assert it.bin(1) == fh.Interval(0.0, 1.0)


def test_bin_rejects_bad_axis():
    h = make_hist()
    it = h.begin()
    with pytest.raises(IndexError):
        it.bin(2)
    with pytest.raises(IndexError):
        it.bin(-1)


def test_repr():
    h = make_hist()
    assert repr(h.begin()) == "CellIterator(index=0, dim=2)"


def test_value_outside_storage_raises():
    h = fh.HistND([fh.Integer(0, 2)])
    h.counts[:] = [10, 11, 12, 13]
    with pytest.raises(IndexError):
        h.begin().retreat().value
    with pytest.raises(IndexError):
        h.end().value
    assert h.end().retreat().value == 13
