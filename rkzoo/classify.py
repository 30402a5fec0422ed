"""Image classification post-processing: ranking class scores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from rkzoo.tensor import TensorAttr, TensorType


@dataclass(frozen=True)
class ClassScore:
    """One class index together with its score."""

    index: int = 0
    score: float = 0.0


def _as_array(data, dtype: np.dtype) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=dtype)
    return np.asarray(data, dtype=dtype).ravel()


class Classifier:
    """Turns a ``(1, classes)`` output tensor into the best-scoring classes.

    A negative ``topk``, or one larger than the number of classes, keeps
    every class.
    """

    def __init__(self, topk: int = 5) -> None:
        self.topk = topk

    def postprocess(
        self, outputs: Sequence, attrs: Sequence[TensorAttr]
    ) -> list[ClassScore]:
        """Rank the classes of the first output by descending score."""
        attr = attrs[0]
        count = attr.dims[1]

        if attr.type is TensorType.FLOAT32:
            scores = _as_array(outputs[0], np.float32)[:count]
        elif attr.type is TensorType.INT8:
            raw = _as_array(outputs[0], np.int8)[:count]
            scores = attr.quantization.dequantize(raw)
        elif attr.type is TensorType.FLOAT16:
            scores = _as_array(outputs[0], np.float16)[:count].astype(np.float32)
        else:
            raise ValueError(f"unsupported output tensor type: {attr.type.value}")

        ranked = sorted(
            (ClassScore(index, float(score)) for index, score in enumerate(scores)),
            key=lambda item: item.score,
            reverse=True,
        )
        keep = count if self.topk < 0 or self.topk > count else self.topk
        return ranked[:keep]