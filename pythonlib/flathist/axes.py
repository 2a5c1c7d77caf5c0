"""
Axis types consumed by the histogram container.

Each axis knows its number of regular bins (``size``), whether it carries an
underflow and overflow cell (``has_flow``), how values map to signed bin
indices (``index``) and what a bin looks like (``axis[i]``). Underflow is
index -1 and overflow index ``size``.

The ``repr`` of every axis evaluates back to an equal axis when the names of
this module are in scope.
"""

import math

import numpy as np


class Interval:
    """Half-open bin [lower, upper)."""

    __slots__ = ("lower", "upper")

    def __init__(self, lower, upper):
        self.lower = lower
        self.upper = upper

    @property
    def width(self):
        return self.upper - self.lower

    @property
    def center(self):
        return 0.5 * (self.lower + self.upper)

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.lower == other.lower and self.upper == other.upper

    def __hash__(self):
        return hash((self.lower, self.upper))

    def __repr__(self):
        return f"[{self.lower}, {self.upper})"


# ---------- transforms ----------
class Identity:
    suffix = ""

    def forward(self, x):
        return x

    def inverse(self, y):
        return y

    def __eq__(self, other):
        return type(self) is type(other)


class Log(Identity):
    suffix = "_log"

    def forward(self, x):
        return np.log(x)

    def inverse(self, y):
        return np.exp(y)


class Sqrt(Identity):
    suffix = "_sqrt"

    def forward(self, x):
        return np.sqrt(x)

    def inverse(self, y):
        return y * y


class Pow(Identity):
    suffix = "_pow"

    def __init__(self, power):
        self.power = float(power)

    def forward(self, x):
        return np.power(x, self.power)

    def inverse(self, y):
        return np.power(y, 1.0 / self.power)

    def __eq__(self, other):
        return type(self) is type(other) and self.power == other.power


# ---------- axes ----------
class Axis:
    """Base class: size, flow policy, label and bounds-checked bin access."""

    def __init__(self, size, label="", uoflow=True):
        size = int(size)
        if size <= 0:
            raise ValueError("Axis needs at least one bin.")
        self._size = size
        self._uoflow = bool(uoflow)
        self.label = label

    @property
    def size(self):
        return self._size

    @property
    def has_flow(self):
        return self._uoflow

    @property
    def extent(self):
        return self._size + 2 if self._uoflow else self._size

    def __len__(self):
        return self._size

    def __getitem__(self, i):
        i = int(i)
        lo, hi = (-1, self._size + 1) if self._uoflow else (0, self._size)
        if not lo <= i < hi:
            raise IndexError(f"bin index {i} out of range [{lo}, {hi})")
        return self._bin(i)

    def __iter__(self):
        for i in range(self._size):
            yield self._bin(i)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None

    def index(self, values):
        """Signed bin indices of ``values`` as an int64 array of the same shape."""
        raise NotImplementedError

    def _bin(self, i):
        raise NotImplementedError

    def _key(self):
        return (self._size, self._uoflow, self.label)

    def _options(self):
        out = ""
        if self.label:
            out += f", label={self.label!r}"
        if not self._uoflow:
            out += ", uoflow=False"
        return out

    def _clip(self, z):
        # z is the fractional position, NaN ends up in overflow
        z = np.asarray(z, dtype=float)
        out = np.full(z.shape, self._size, dtype=np.int64)
        inside = z < 1.0
        out[inside] = -1
        ok = inside & (z >= 0.0)
        out[ok] = np.minimum((z[ok] * self._size).astype(np.int64), self._size - 1)
        return out


class Regular(Axis):
    """
    Equidistant bins in transformed space.

    Parameters
    ----------
    bins : int
        Number of regular bins.
    lower, upper : float
        Range covered by the regular bins.
    transform : Identity, Log, Sqrt or Pow, optional
        Bins are equidistant in ``transform.forward(x)``.
    """

    def __init__(self, bins, lower, upper, label="", uoflow=True, transform=None):
        super().__init__(bins, label, uoflow)
        if not lower < upper:
            raise ValueError("lower must be smaller than upper.")
        self.transform = transform if transform is not None else Identity()
        self._lower = float(lower)
        self._upper = float(upper)
        self._min = float(self.transform.forward(self._lower))
        self._delta = float(self.transform.forward(self._upper)) - self._min
        if not np.isfinite(self._min) or not np.isfinite(self._delta):
            raise ValueError("range is not finite in transformed space.")

    def index(self, values):
        with np.errstate(invalid="ignore", divide="ignore"):
            z = (self.transform.forward(np.asarray(values, dtype=float)) - self._min) / self._delta
        return self._clip(z)

    def _edge(self, i):
        if i < 0:
            return -math.inf
        if i > self._size:
            return math.inf
        z = i / self._size
        return float(self.transform.inverse((1.0 - z) * self._min + z * (self._min + self._delta)))

    def _bin(self, i):
        return Interval(self._edge(i), self._edge(i + 1))

    def _key(self):
        return super()._key() + (self._lower, self._upper, self.transform)

    def __repr__(self):
        name = "regular" + self.transform.suffix
        out = f"{name}({self._size}, {self._lower}, {self._upper}"
        if isinstance(self.transform, Pow):
            out += f", {self.transform.power}"
        return out + self._options() + ")"


def regular(bins, lower, upper, label="", uoflow=True):
    return Regular(bins, lower, upper, label, uoflow)


def regular_log(bins, lower, upper, label="", uoflow=True):
    return Regular(bins, lower, upper, label, uoflow, transform=Log())


def regular_sqrt(bins, lower, upper, label="", uoflow=True):
    return Regular(bins, lower, upper, label, uoflow, transform=Sqrt())


def regular_pow(bins, lower, upper, power, label="", uoflow=True):
    return Regular(bins, lower, upper, label, uoflow, transform=Pow(power))


class Circular(Axis):
    """Periodic axis, values wrap around ``perimeter``. No flow bins."""

    def __init__(self, bins, phase=0.0, perimeter=2.0 * math.pi, label=""):
        super().__init__(bins, label, uoflow=False)
        if not perimeter > 0:
            raise ValueError("perimeter must be positive.")
        self.phase = float(phase)
        self.perimeter = float(perimeter)

    def index(self, values):
        with np.errstate(invalid="ignore"):
            z = (np.asarray(values, dtype=float) - self.phase) / self.perimeter
            z = z - np.floor(z)
        # tiny negative values round up to exactly 1.0
        z = np.where(z >= 1.0, 0.0, z)
        # non-finite values stay NaN and land on size, which fill drops
        return self._clip(z)

    def _bin(self, i):
        w = self.perimeter / self._size
        return Interval(self.phase + i * w, self.phase + (i + 1) * w)

    def _key(self):
        return super()._key() + (self.phase, self.perimeter)

    def __repr__(self):
        out = f"circular({self._size}"
        if self.phase != 0.0:
            out += f", phase={self.phase}"
        if self.perimeter != 2.0 * math.pi:
            out += f", perimeter={self.perimeter}"
        if self.label:
            out += f", label={self.label!r}"
        return out + ")"


circular = Circular


class Variable(Axis):
    """Bins with arbitrary, strictly increasing edges."""

    def __init__(self, edges, label="", uoflow=True):
        edges = np.array(edges, dtype=float, copy=True)
        if edges.ndim != 1 or len(edges) < 2:
            raise ValueError("Variable axis needs at least 2 edges.")
        if np.any(np.diff(edges) <= 0):
            raise ValueError("Bin edges must be strictly increasing.")
        super().__init__(len(edges) - 1, label, uoflow)
        self.edges = edges

    def index(self, values):
        # [e[i], e[i+1]), NaN sorts last and becomes overflow
        b = np.searchsorted(self.edges, np.asarray(values, dtype=float), side="right") - 1
        return np.asarray(b, dtype=np.int64)

    def _bin(self, i):
        lo = float(self.edges[i]) if i >= 0 else -math.inf
        hi = float(self.edges[i + 1]) if i + 1 <= self._size else math.inf
        return Interval(lo, hi)

    def _key(self):
        return super()._key() + (tuple(self.edges.tolist()),)

    def __repr__(self):
        edges = ", ".join(str(e) for e in self.edges.tolist())
        return f"variable({edges}" + self._options() + ")"


def variable(*edges, label="", uoflow=True):
    return Variable(edges, label, uoflow)


class Integer(Axis):
    """One bin per integer in [lower, upper)."""

    def __init__(self, lower, upper, label="", uoflow=True):
        lower, upper = int(lower), int(upper)
        if not lower < upper:
            raise ValueError("lower must be smaller than upper.")
        super().__init__(upper - lower, label, uoflow)
        self.lower = lower
        self.upper = upper

    def index(self, values):
        v = np.floor(np.asarray(values, dtype=float)) - self.lower
        out = np.full(v.shape, self._size, dtype=np.int64)
        inside = v < self._size
        out[inside] = -1
        ok = inside & (v >= 0)
        out[ok] = v[ok].astype(np.int64)
        return out

    def _bin(self, i):
        lo = self.lower + i if i >= 0 else -math.inf
        hi = self.lower + i + 1 if i < self._size else math.inf
        return Interval(lo, hi)

    def _key(self):
        return super()._key() + (self.lower,)

    def __repr__(self):
        return f"integer({self.lower}, {self.upper}" + self._options() + ")"


integer = Integer


class Category(Axis):
    """
    One bin per listed value. No flow bins; values not listed index to
    ``size`` and are dropped when filling.
    """

    def __init__(self, categories, label=""):
        categories = list(categories)
        super().__init__(len(categories), label, uoflow=False)
        self._map = {}
        for i, c in enumerate(categories):
            if c in self._map:
                raise ValueError(f"duplicate category {c!r}")
            self._map[c] = i
        self.categories = categories

    def index(self, values):
        arr = np.asarray(values)
        flat = [self._map.get(v, self._size) for v in arr.ravel().tolist()]
        return np.array(flat, dtype=np.int64).reshape(arr.shape)

    def _bin(self, i):
        return self.categories[i]

    def _key(self):
        return super()._key() + (tuple(self.categories),)

    def __repr__(self):
        cats = ", ".join(repr(c) for c in self.categories)
        out = f"category({cats}"
        if self.label:
            out += f", label={self.label!r}"
        return out + ")"


def category(*categories, label=""):
    return Category(categories, label)
