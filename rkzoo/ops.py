"""Post-processing operators: distribution focal loss decoding, IoU, NMS, layout conversion."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from rkzoo.types import Rect


def dfl(tensor: Sequence[float]) -> tuple[float, float, float, float]:
    """Decode four box distances from a distribution of ``4 * n`` logits.

    Each quarter is soft-maxed and its expected bin index is returned.
    """
    values = np.asarray(tensor, dtype=np.float64).ravel()
    length = values.size // 4
    if length == 0:
        return (0.0, 0.0, 0.0, 0.0)
    bins = values[: 4 * length].reshape(4, length)
    weights = np.exp(bins - bins.max(axis=1, keepdims=True))
    weights /= weights.sum(axis=1, keepdims=True)
    box = weights @ np.arange(length, dtype=np.float64)
    return tuple(float(v) for v in box)


def iou(b1: Rect, b2: Rect) -> float:
    """Intersection over union of two rectangles, counting edges inclusively."""
    xmax1 = b1.x + b1.width
    ymax1 = b1.y + b1.height
    xmax2 = b2.x + b2.width
    ymax2 = b2.y + b2.height

    w = max(0.0, min(xmax1, xmax2) - max(b1.x, b2.x) + 1.0)
    h = max(0.0, min(ymax1, ymax2) - max(b1.y, b2.y) + 1.0)
    inter = w * h
    union = (
        (xmax1 - b1.x + 1.0) * (ymax1 - b1.y + 1.0)
        + (xmax2 - b2.x + 1.0) * (ymax2 - b2.y + 1.0)
        - inter
    )
    return 0.0 if union <= 0.0 else inter / union


def nms(
    boxes: Sequence[Rect],
    scores: Sequence[float],
    classes: Sequence[int],
    threshold: float,
) -> list[int]:
    """Per-class non-maximum suppression.

    Returns kept indices grouped by ascending class id, each group ordered by
    descending score.
    """
    keep: list[int] = []
    for cls in sorted(set(classes)):
        candidates = sorted(
            (i for i, c in enumerate(classes) if c == cls),
            key=lambda i: scores[i],
            reverse=True,
        )
        survivors: list[int] = []
        for index in candidates:
            if all(iou(boxes[kept], boxes[index]) <= threshold for kept in survivors):
                survivors.append(index)
        keep.extend(survivors)
    return keep


def nc1hwc2_to_nchw(src, src_dims: Sequence[int], dst_dims: Sequence[int]) -> np.ndarray:
    """Convert the first batch of an NC1HWC2 tensor to NCHW.

    ``src_dims`` is ``(N, C1, H, W, C2)`` and ``dst_dims`` is ``(N, C, H, W)``;
    the result has shape ``(1, C, H, W)``.
    """
    c2 = int(src_dims[4])
    src_total = int(src_dims[2]) * int(src_dims[3])
    channels, height, width = (int(d) for d in dst_dims[1:4])

    flat = np.asarray(src).ravel()
    channel = np.arange(channels)[:, None]
    position = np.arange(height * width)[None, :]
    index = (channel // c2) * src_total * c2 + c2 * position + channel % c2
    return flat[index].reshape(1, channels, height, width)