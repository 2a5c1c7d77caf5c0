import flathist as fh
from flathist.strides import Dim, build_dims, total_cells


class StubAxis:
    """Only the capabilities the stride builder is allowed to use."""

    def __init__(self, size, extent):
        self.size = size
        self.extent = extent


def test_strides_are_running_product_of_extents():
    axes = [
        fh.Regular(2, 0.0, 1.0),
        fh.Integer(0, 2, uoflow=False),
        fh.Category([1, 2, 3]),
    ]
    dims = build_dims(axes)

    assert [d.stride for d in dims] == [1, 4, 8]
    assert [d.size for d in dims] == [2, 2, 3]
    assert [d.extent for d in dims] == [4, 2, 3]
    assert [d.index for d in dims] == [0, 0, 0]
    assert total_cells(dims) == 24


def test_single_axis_has_unit_stride():
    dims = build_dims([fh.Regular(3, 0.0, 3.0)])
    assert dims == [Dim(3, 1, 5)]
    assert dims[0].has_flow
    assert total_cells(dims) == 5


def test_builder_needs_only_size_and_extent():
    dims = build_dims([StubAxis(3, 3), StubAxis(4, 6), StubAxis(1, 1)])
    assert [d.stride for d in dims] == [1, 3, 18]
    assert not dims[0].has_flow
    assert dims[1].has_flow


def test_empty_axis_list():
    assert build_dims([]) == []
    assert total_cells([]) == 0


def test_dim_copy_is_independent():
    d = Dim(2, 4, 4, index=1)
    c = d.copy()
    c.index = -1
    assert d.index == 1
    assert c != d
