from __future__ import annotations

from .multi_index import MultiIndex


class CellIterator(MultiIndex):
    """
    Bidirectional cursor over every cell of a histogram, flow cells included.

    Parameters
    ----------
    histogram : HistND-like
        Provides ``axes`` and ``axis(i)``. Borrowed, must outlive the cursor.
    storage : indexable
        Value storage addressed by flat index, typically ``histogram.counts``.
        Borrowed; mutating it while cursors are live is the caller's business.
    index : int
        Starting flat index, 0 for begin and ``histogram.size`` for end.

    No bounds checks happen on ``advance``/``retreat``; the end cursor
    (``index == histogram.size``) is for comparison only.
    """

    def __init__(self, histogram, storage, index):
        super().__init__(histogram, index)
        self._histogram = histogram
        self._storage = storage

    def advance(self):
        self.increment()
        return self

    def retreat(self):
        self.decrement()
        return self

    @property
    def value(self):
        # numpy would wrap a negative index to the last cell
        if not 0 <= self._idx < len(self._storage):
            raise IndexError(f"cursor at {self._idx} does not point at a cell")
        return self._storage[self._idx]

    def bin(self, dim=0):
        """
        Bin descriptor of axis ``dim`` at the current cell.

        Returns whatever the axis yields for a signed index, e.g. an
        ``Interval`` or a category value.
        """
        return self._histogram.axis(dim)[self.idx(dim)]

    def bins(self):
        self.decode_if_stale()
        return tuple(
            self._histogram.axis(k)[d.index] for k, d in enumerate(self._dims)
        )

    def copy(self):
        out = type(self).__new__(type(self))
        out._copy_state(self)
        out._histogram = self._histogram
        out._storage = self._storage
        return out

    __copy__ = copy

    def __eq__(self, other):
        if not isinstance(other, CellIterator):
            return NotImplemented
        return self._storage is other._storage and self._idx == other._idx

    def __repr__(self):
        return f"CellIterator(index={self._idx}, dim={self.dim})"
