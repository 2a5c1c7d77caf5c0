from .strides import Dim, build_dims, total_cells
from .multi_index import MultiIndex, decode, encode
from .iterator import CellIterator
from .axes import (
    Interval,
    Identity,
    Log,
    Sqrt,
    Pow,
    Axis,
    Regular,
    Circular,
    Variable,
    Integer,
    Category,
    regular,
    regular_log,
    regular_sqrt,
    regular_pow,
    circular,
    variable,
    integer,
    category,
)
from .histNd import HistND
from .layout import axis_from_config, hist_from_config, load_layout

__all__ = [name for name in dir() if not name.startswith("_")]
