import numpy as np
import pytest

from rkzoo.ops import dfl, iou, nc1hwc2_to_nchw, nms
from rkzoo.types import Rect


def test_dfl_peaked_distribution_returns_peak_index():
    length = 16
    peaks = [1, 5, 0, 15]
    tensor = np.zeros(4 * length)
    for side, peak in enumerate(peaks):
        tensor[side * length + peak] = 50.0
    assert dfl(tensor) == pytest.approx(tuple(float(p) for p in peaks), abs=1e-6)


def test_dfl_uniform_distribution_is_bin_centre():
    assert dfl([0.0] * 64) == pytest.approx((7.5, 7.5, 7.5, 7.5))


def test_dfl_invariant_to_constant_shift():
    rng = np.random.default_rng(1)
    tensor = rng.normal(size=32)
    assert dfl(tensor + 3.0) == pytest.approx(dfl(tensor))


def test_iou_identical_boxes():
    box = Rect(10.0, 10.0, 20.0, 30.0)
    assert iou(box, box) == pytest.approx(1.0)


def test_iou_disjoint_boxes():
    assert iou(Rect(0.0, 0.0, 5.0, 5.0), Rect(100.0, 100.0, 5.0, 5.0)) == 0.0


def test_iou_symmetric_and_bounded():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    b = Rect(5.0, 3.0, 10.0, 12.0)
    value = iou(a, b)
    assert value == pytest.approx(iou(b, a))
    assert 0.0 < value < 1.0


def test_nms_suppresses_lower_scored_overlap():
    boxes = [Rect(0, 0, 10, 10), Rect(1, 1, 10, 10), Rect(50, 50, 10, 10)]
    scores = [0.6, 0.9, 0.5]
    classes = [0, 0, 0]
    assert nms(boxes, scores, classes, 0.5) == [1, 2]


def test_nms_keeps_overlaps_of_different_classes_ordered_by_class():
    boxes = [Rect(0, 0, 10, 10), Rect(0, 0, 10, 10)]
    scores = [0.9, 0.8]
    classes = [3, 1]
    assert nms(boxes, scores, classes, 0.5) == [1, 0]


def test_nms_threshold_one_keeps_everything():
    boxes = [Rect(0, 0, 10, 10)] * 4
    scores = [0.1, 0.4, 0.3, 0.2]
    classes = [0, 0, 0, 0]
    result = nms(boxes, scores, classes, 1.0)
    assert sorted(result) == list(range(4))
    assert [scores[i] for i in result] == sorted(scores, reverse=True)


def _to_nc1hwc2(nchw, c2):
    channels, height, width = nchw.shape
    c1 = -(-channels // c2)
    padded = np.zeros((c1 * c2, height, width), dtype=nchw.dtype)
    padded[:channels] = nchw
    return padded.reshape(c1, c2, height, width).transpose(0, 2, 3, 1).copy()


@pytest.mark.parametrize("channels,c2", [(5, 4), (8, 16), (16, 16)])
def test_nc1hwc2_round_trip(channels, c2):
    height, width = 3, 4
    nchw = np.arange(channels * height * width, dtype=np.int8).reshape(channels, height, width)
    packed = _to_nc1hwc2(nchw, c2)
    src_dims = (1, packed.shape[0], height, width, c2)
    dst_dims = (1, channels, height, width)
    result = nc1hwc2_to_nchw(packed.ravel(), src_dims, dst_dims)
    assert result.shape == (1, channels, height, width)
    assert np.array_equal(result[0], nchw)