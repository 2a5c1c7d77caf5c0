import logging

import numpy as np

from .iterator import CellIterator
from .multi_index import encode
from .strides import build_dims, total_cells

logger = logging.getLogger(__name__)


class HistND:
    """
    N-D histogram over heterogeneous axes with flat storage.

    Parameters
    ----------
    axes : sequence of axis objects
        Ordered axes, length D. Each provides ``size``, ``extent``,
        ``index(values)`` and ``axis[i]``.
    dtype : numpy dtype-like, default float
        Storage dtype for counts.
    track_variance : bool, default False
        If True, also track sum of weights squared (sumw2) for error estimation.

    Cells, flow cells included, live in the 1-D array ``counts``. Axis 0 has
    stride 1; on a flow axis position ``size`` holds the overflow and
    ``size + 1`` the underflow.
    """

    def __init__(self, axes, dtype=float, track_variance=False):
        self._axes = tuple(axes)
        self.D = len(self._axes)
        if self.D == 0:
            raise ValueError("Need at least 1 dimension.")

        self._dims = build_dims(self._axes)
        self.size = total_cells(self._dims)
        self.shape = tuple(d.extent for d in self._dims)

        # Normalize dtype to a numpy.dtype
        self.dtype = np.dtype(dtype)

        # Storage
        self.counts = np.zeros(self.size, dtype=self.dtype)
        self.track_variance = bool(track_variance)
        if self.track_variance:
            self.sumw2 = np.zeros(self.size, dtype=float)

        # valid signed index range per axis, [lo, hi)
        self._strides = np.array([d.stride for d in self._dims], dtype=np.int64)
        self._extents = np.array(self.shape, dtype=np.int64)
        self._lo = np.array([-1 if d.has_flow else 0 for d in self._dims], dtype=np.int64)
        self._hi = np.array(
            [d.size + 1 if d.has_flow else d.size for d in self._dims], dtype=np.int64
        )
        logger.debug("created %r", self)

    # ---------- axes ----------
    @property
    def dim(self):
        return self.D

    @property
    def axes(self):
        return self._axes

    def axis(self, i=0):
        if not 0 <= i < self.D:
            raise IndexError(f"axis {i} out of range [0, {self.D})")
        return self._axes[i]

    # ---------- iteration ----------
    def begin(self):
        return CellIterator(self, self.counts, 0)

    def end(self):
        return CellIterator(self, self.counts, self.size)

    def cells(self):
        """Yield a cursor for every cell in flat order, flow cells included."""
        it, end = self.begin(), self.end()
        while it != end:
            yield it.copy()
            it.advance()

    __iter__ = cells

    def at(self, *indices):
        """Value at signed per-axis indices (-1 underflow, size overflow)."""
        return self.counts[encode(indices, self._dims)]

    def values(self, flow=False):
        """
        N-D view of counts in axis order.

        Without ``flow`` only the regular bins are returned. With it every
        dimension has ``extent`` entries, overflow at ``size`` and underflow at
        ``size + 1``.
        """
        return self._view(self.counts, flow)

    def _view(self, arr, flow):
        nd = arr.reshape(self.shape, order="F")
        if flow:
            return nd
        return nd[tuple(slice(0, d.size) for d in self._dims)]

    # ---------- filling ----------
    def _accumulate(self, bins, weights=None):
        # drop entries no cell exists for, e.g. unknown categories
        ok = np.ones_like(bins[0], dtype=bool)
        for k, b in enumerate(bins):
            ok &= (b >= self._lo[k]) & (b < self._hi[k])
        if not np.any(ok):
            return

        b_ok = [b[ok] for b in bins]

        # make scalar weights broadcastable
        if weights is None:
            w_ok = None
        else:
            w = np.asarray(weights)
            if w.ndim == 0:
                w_ok = np.full(b_ok[0].shape, float(w))
            else:
                w_ok = w[ok]

        # flatten N-D indices, negative (underflow) wraps to the last cell
        flat = np.zeros_like(b_ok[0], dtype=np.int64)
        for k in range(self.D):
            b = b_ok[k]
            flat += np.where(b < 0, b + self._extents[k], b) * self._strides[k]

        # accumulate via bincount
        add2 = None
        if w_ok is None:
            add = np.bincount(flat, minlength=self.size)
            if self.track_variance:
                add2 = add  # since w=1 => w^2=1
        else:
            add = np.bincount(flat, weights=w_ok, minlength=self.size)
            if self.track_variance:
                add2 = np.bincount(flat, weights=w_ok * w_ok, minlength=self.size)

        self.counts += add.astype(self.counts.dtype, copy=False)
        if self.track_variance and add2 is not None:
            self.sumw2 += add2

    def fill(self, *coords, mask=None, weights=None):
        """
        Fill with raw coordinates (one array or scalar per axis).
        """
        if len(coords) != self.D:
            raise ValueError(f"Expected {self.D} coordinate arrays.")
        arrs = [np.asarray(c) for c in coords]
        arrs = [a if a.ndim > 0 else a[None] for a in arrs]
        if mask is not None:
            m = np.asarray(mask)
            arrs = [a[m] for a in arrs]
            if weights is not None:
                w = np.asarray(weights)
                weights = w[m] if w.ndim > 0 else w
        bins = [np.asarray(a.index(v), dtype=np.int64) for a, v in zip(self._axes, arrs)]
        self._accumulate(bins, weights)

    def fill_binned(self, *bins, mask=None, weights=None):
        """
        Fill with precomputed signed bin indices per axis.
        """
        if len(bins) != self.D:
            raise ValueError(f"Expected {self.D} bin index arrays.")
        b = [np.asarray(bi, dtype=np.int64) for bi in bins]
        b = [bi if bi.ndim > 0 else bi[None] for bi in b]
        if mask is not None:
            m = np.asarray(mask)
            b = [bi[m] for bi in b]
            if weights is not None:
                w = np.asarray(weights)
                weights = w[m] if w.ndim > 0 else w
        self._accumulate(b, weights)

    # ---------- utilities ----------
    def errors(self, flow=False):
        """Standard deviation per bin assuming uncorrelated weights: sqrt(sumw2)."""
        if not self.track_variance:
            raise RuntimeError("Enable track_variance=True to get errors().")
        return self._view(np.sqrt(self.sumw2), flow)

    def copy(self):
        """Deep copy of the histogram structure and contents."""
        out = HistND(self._axes, dtype=self.dtype.type, track_variance=self.track_variance)
        out.counts = self.counts.copy()
        if self.track_variance:
            out.sumw2 = self.sumw2.copy()
        return out

    def __repr__(self):
        axes = ", ".join(repr(a) for a in self._axes)
        return (
            f"HistND(axes=[{axes}], "
            f"dtype={self.counts.dtype}, track_variance={self.track_variance})"
        )
