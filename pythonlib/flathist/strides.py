import logging

logger = logging.getLogger(__name__)


class Dim:
    """
    Stride descriptor of one axis.

    Attributes
    ----------
    index : int
        Signed bin index of the last decode (-1 underflow, ``size`` overflow).
    size : int
        Number of regular bins.
    stride : int
        Flat-index distance between neighbouring bins of this axis.
    extent : int
        Number of cells of this axis, ``size + 2`` with flow bins else ``size``.
    """

    __slots__ = ("index", "size", "stride", "extent")

    def __init__(self, size, stride, extent, index=0):
        self.index = index
        self.size = size
        self.stride = stride
        self.extent = extent

    @property
    def has_flow(self):
        return self.extent != self.size

    def copy(self):
        return Dim(self.size, self.stride, self.extent, self.index)

    def __eq__(self, other):
        if not isinstance(other, Dim):
            return NotImplemented
        return (
            self.index == other.index
            and self.size == other.size
            and self.stride == other.stride
            and self.extent == other.extent
        )

    def __repr__(self):
        return (
            f"Dim(size={self.size}, stride={self.stride}, "
            f"extent={self.extent}, index={self.index})"
        )


def build_dims(axes):
    """
    Build the stride table for an ordered sequence of axes.

    Only ``size`` and ``extent`` of each axis are consulted. Axis 0 gets
    stride 1; every later axis the product of the extents before it.
    """
    dims = []
    stride = 1
    for a in axes:
        dims.append(Dim(int(a.size), stride, int(a.extent)))
        stride *= int(a.extent)
    logger.debug("stride table: %s (total cells %d)", dims, stride)
    return dims


def total_cells(dims):
    """Number of flat cells addressed by a stride table."""
    if not dims:
        return 0
    last = dims[-1]
    return last.stride * last.extent
