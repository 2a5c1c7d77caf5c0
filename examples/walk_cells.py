import numpy as np
import flathist as fh
from pathlib import Path

here = Path(__file__).resolve().parent
h = fh.load_layout(here / "layout.yaml")

rng = np.random.default_rng(1)
pt  = rng.exponential(0.6, size=10_000)
pdg = rng.choice([211, -211, 2212, 22], size=pt.size)   # photons have no cell
h.fill(pt, pdg)

# forward walk, regular pt bins only
for cell in h.cells():
    ipt = cell.idx(0)
    if not 0 <= ipt < h.axis(0).size:
        continue
    print(f"{cell.bin(0)!s:>12}  {cell.bin(1):>5}  {cell.value:8.0f}")

# backward walk from the end sentinel
it, begin = h.end(), h.begin()
while it != begin:
    it.retreat()
    if it.idx(0) == -1:
        print(f"underflow {it.bin(1)}: {it.value:.0f}")
