"""YOLO object detection post-processing with DFL box decoding and NMS."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from rkzoo.ops import dfl, nc1hwc2_to_nchw, nms
from rkzoo.tensor import TensorAttr, TensorFormat, TensorType
from rkzoo.types import Rect, Size

_SUPPORTED = {
    TensorType.INT8: np.int8,
    TensorType.UINT8: np.uint8,
    TensorType.FLOAT32: np.float32,
}


@dataclass(frozen=True)
class Detection:
    """A detected object: class id, confidence and box in input coordinates."""

    id: int = -1
    score: float = 0.0
    box: Rect = field(default_factory=Rect)


def _as_array(data, dtype) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=dtype)
    return np.asarray(data, dtype=dtype)


def _planar(data, attr: TensorAttr, native: TensorAttr, dtype) -> np.ndarray:
    """Tensor as ``(channels, height * width)`` in NCHW order."""
    array = _as_array(data, dtype)
    if native.fmt is TensorFormat.NC1HWC2:
        array = nc1hwc2_to_nchw(array, native.dims, attr.dims)
    channels, height, width = attr.dims[1], attr.dims[2], attr.dims[3]
    total = height * width
    return array.ravel()[: channels * total].reshape(channels, total)


class YoloDetector:
    """Decodes YOLO outputs given as (box, score) tensor pairs, one pair per scale.

    Box tensors are ``(1, 4 * bins, H, W)`` and score tensors ``(1, classes, H, W)``.
    """

    def __init__(
        self,
        input_size: Size = Size(640, 640),
        score_thres: float = 0.25,
        nms_thres: float = 0.7,
    ) -> None:
        self.input_size = input_size
        self.score_thres = score_thres
        self.nms_thres = nms_thres

    def postprocess(
        self,
        outputs: Sequence,
        attrs: Sequence[TensorAttr],
        native_attrs: Optional[Sequence[TensorAttr]] = None,
    ) -> list[Detection]:
        """Decode every scale, then apply per-class non-maximum suppression."""
        if native_attrs is None:
            native_attrs = attrs
        tensor_type = attrs[0].type
        if tensor_type not in _SUPPORTED:
            raise ValueError(f"unsupported output tensor type: {tensor_type.value}")
        dtype = _SUPPORTED[tensor_type]

        boxes: list[Rect] = []
        scores: list[float] = []
        classes: list[int] = []
        for bunch in range(len(outputs) // 2):
            pair = slice(2 * bunch, 2 * bunch + 2)
            for box, score, cls in self._decode_bunch(
                outputs[pair], attrs[pair], native_attrs[pair], dtype
            ):
                boxes.append(box)
                scores.append(score)
                classes.append(cls)

        return [
            Detection(classes[i], scores[i], boxes[i])
            for i in nms(boxes, scores, classes, self.nms_thres)
        ]

    def _decode_bunch(self, outputs, attrs, native_attrs, dtype):
        box_attr, score_attr = attrs
        grid_w = box_attr.dims[3]
        scale = self.input_size.width / grid_w
        box_quant = box_attr.quantization
        score_quant = score_attr.quantization
        threshold = score_quant.quantize(self.score_thres, dtype)

        box_tensor = _planar(outputs[0], box_attr, native_attrs[0], dtype)
        score_tensor = _planar(outputs[1], score_attr, native_attrs[1], dtype)

        best_class = np.argmax(score_tensor, axis=0)
        best_score = score_tensor.max(axis=0)

        for position in np.flatnonzero(best_score > threshold):
            row, col = divmod(int(position), grid_w)
            left, top, right, bottom = dfl(box_quant.dequantize(box_tensor[:, position]))
            x1 = (-left + col + 0.5) * scale
            y1 = (-top + row + 0.5) * scale
            x2 = (right + col + 0.5) * scale
            y2 = (bottom + row + 0.5) * scale
            yield (
                Rect(x1, y1, x2 - x1, y2 - y1),
                float(score_quant.dequantize(best_score[position])),
                int(best_class[position]),
            )