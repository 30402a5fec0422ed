"""Geometry, letterbox transformation and quantization primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np


@dataclass(frozen=True)
class Size:
    """A width/height pair in pixels."""

    width: int = 0
    height: int = 0

    def area(self) -> int:
        """Number of pixels covered."""
        return self.width * self.height


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and extent."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


@dataclass(frozen=True)
class Transformation:
    """Uniform scale plus offset mapping an original image onto a target canvas."""

    scale: float = 1.0
    x_off: int = 0
    y_off: int = 0

    @classmethod
    def from_sizes(cls, src: Size, dst: Size) -> "Transformation":
        """Letterbox transformation fitting ``src`` centred inside ``dst``."""
        scale = min(dst.width / src.width, dst.height / src.height)
        x_off = int((dst.width - src.width * scale) / 2)
        y_off = int((dst.height - src.height * scale) / 2)
        return cls(scale, x_off, y_off)

    def to_original(self, rect: Rect, cast: Callable[[float], Any] = float) -> Rect:
        """Map a rectangle from target coordinates back to the original image."""
        return Rect(
            cast((rect.x - self.x_off) / self.scale),
            cast((rect.y - self.y_off) / self.scale),
            cast(rect.width / self.scale),
            cast(rect.height / self.scale),
        )

    def to_target(self, rect: Rect, cast: Callable[[float], Any] = float) -> Rect:
        """Map a rectangle from original coordinates onto the target canvas."""
        return Rect(
            cast(rect.x * self.scale + self.x_off),
            cast(rect.y * self.scale + self.y_off),
            cast(rect.width * self.scale),
            cast(rect.height * self.scale),
        )


@dataclass(frozen=True)
class Quantization:
    """Affine quantization parameters: ``real = (q - zp) * scale``."""

    scale: float = 1.0
    zp: int = 0

    def dequantize(self, value):
        """Convert a quantized scalar or array to real values."""
        if isinstance(value, np.ndarray):
            return (value.astype(np.float32) - self.zp) * np.float32(self.scale)
        return (float(value) - self.zp) * self.scale

    def quantize(self, value: float, dtype=np.float32):
        """Quantize a real value into ``dtype``, truncating toward zero for integers.

        Integer results are clamped to the range of ``dtype``.
        """
        target = np.dtype(dtype)
        raw = value / self.scale + self.zp
        if target.kind in "iu":
            info = np.iinfo(target)
            return target.type(min(max(math.trunc(raw), int(info.min)), int(info.max)))
        return target.type(raw)