from __future__ import annotations

from typing import List, Sequence, Tuple

from .strides import Dim, build_dims, total_cells


def _remap(raw: int, d: Dim) -> int:
    # flow cells sit at size (overflow) and size + 1 (underflow)
    if d.extent != d.size and raw > d.size:
        raw -= d.extent
    return raw


def decode(index: int, dims: List[Dim]) -> None:
    """
    Write the signed per-axis bin indices of flat ``index`` into ``dims``.

    Axes are peeled off from the last (largest stride) down to axis 1;
    axis 0 takes whatever offset remains.
    """
    n = total_cells(dims)
    if not 0 <= index < n:
        raise IndexError(f"flat index {index} out of range [0, {n})")
    for d in reversed(dims[1:]):
        raw = index // d.stride
        index -= raw * d.stride
        d.index = _remap(raw, d)
    dims[0].index = _remap(index, dims[0])


def encode(indices: Sequence[int], dims: List[Dim]) -> int:
    """Flat index of the signed per-axis bin ``indices``."""
    if len(indices) != len(dims):
        raise ValueError(f"Expected {len(dims)} indices, got {len(indices)}.")
    flat = 0
    for k, (i, d) in enumerate(zip(indices, dims)):
        i = int(i)
        lo, hi = (-1, d.size + 1) if d.has_flow else (0, d.size)
        if not lo <= i < hi:
            raise IndexError(f"index {i} out of range [{lo}, {hi}) on axis {k}")
        if i < 0:
            i += d.extent
        flat += i * d.stride
    return flat


class MultiIndex:
    """
    Flat index into a histogram's storage plus its lazily decoded axis indices.

    The flat index is the only position state; the per-axis indices held in
    the stride table are recomputed on the first ``idx`` call after it moves.
    """

    def __init__(self, histogram, index: int):
        self._dims = build_dims(histogram.axes)
        self._idx = int(index)
        self._last = None

    @property
    def dim(self) -> int:
        return len(self._dims)

    @property
    def index(self) -> int:
        return self._idx

    def decode_if_stale(self) -> None:
        if self._idx != self._last:
            decode(self._idx, self._dims)
            self._last = self._idx

    def idx(self, dim: int = 0) -> int:
        """Signed bin index of axis ``dim`` at the current position."""
        self._check_dim(dim)
        self.decode_if_stale()
        return self._dims[dim].index

    def indices(self) -> Tuple[int, ...]:
        self.decode_if_stale()
        return tuple(d.index for d in self._dims)

    def increment(self) -> None:
        self._idx += 1

    def decrement(self) -> None:
        self._idx -= 1

    def _check_dim(self, dim) -> None:
        # reject negatives too, Python would silently pick an axis from the end
        if not 0 <= dim < len(self._dims):
            raise IndexError(f"axis {dim} out of range [0, {len(self._dims)})")

    def _copy_state(self, other: "MultiIndex") -> None:
        self._dims = [d.copy() for d in other._dims]
        self._idx = other._idx
        self._last = other._last
