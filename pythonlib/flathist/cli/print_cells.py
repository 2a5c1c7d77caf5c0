#!/usr/bin/env python3
import argparse
import sys

import numpy as np
import yaml

from flathist.layout import load_layout
from flathist.utils.logging import setup_logger


def _load_counts(h, path):
    arr = np.load(path)
    if arr.shape == (h.size,):
        h.counts[:] = arr
    elif arr.shape == h.shape:
        h.values(flow=True)[...] = arr
    elif arr.shape == tuple(a.size for a in h.axes):
        h.values()[...] = arr
    else:
        raise ValueError(
            f"counts shape {arr.shape} matches neither {(h.size,)}, "
            f"{h.shape} nor {tuple(a.size for a in h.axes)}"
        )


def _is_flow(cell, h):
    return any(not 0 <= i < a.size for i, a in zip(cell.indices(), h.axes))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print every cell of a histogram layout with its bins and value"
    )
    parser.add_argument("layout", help="YAML layout file")
    parser.add_argument(
        "--counts", "-c", default=None, help="Optional .npy file with cell values"
    )
    parser.add_argument(
        "--no-flow", action="store_true", help="Skip underflow/overflow cells"
    )
    parser.add_argument(
        "--reverse", action="store_true", help="Walk cells from last to first"
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.verbose:
        setup_logger("flathist", level="DEBUG")

    try:
        h = load_layout(args.layout)
        if args.counts is not None:
            _load_counts(h, args.counts)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if args.verbose:
        print(f"[INFO] {h!r}")
        print(f"[INFO] N cells: {h.size}")

    if args.reverse:
        begin, it = h.begin(), h.end()
        cells = []
        while it != begin:
            cells.append(it.retreat().copy())
    else:
        cells = h.cells()

    for cell in cells:
        if args.no_flow and _is_flow(cell, h):
            continue
        bins = "  ".join(str(b) for b in cell.bins())
        print(f"{bins}  {cell.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
