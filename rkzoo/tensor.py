"""Tensor descriptions, input preparation and timing records for inference."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

import numpy as np

from rkzoo.types import Quantization, Size


class TensorType(Enum):
    """Element type of a model tensor."""

    FLOAT32 = "FP32"
    FLOAT16 = "FP16"
    INT8 = "INT8"
    UINT8 = "UINT8"
    INT16 = "INT16"
    UINT16 = "UINT16"
    INT32 = "INT32"
    UINT32 = "UINT32"
    INT64 = "INT64"
    BOOL = "BOOL"

    @property
    def dtype(self) -> np.dtype:
        """The matching numpy dtype."""
        return np.dtype(_NUMPY_TYPES[self])


_NUMPY_TYPES = {
    TensorType.FLOAT32: np.float32,
    TensorType.FLOAT16: np.float16,
    TensorType.INT8: np.int8,
    TensorType.UINT8: np.uint8,
    TensorType.INT16: np.int16,
    TensorType.UINT16: np.uint16,
    TensorType.INT32: np.int32,
    TensorType.UINT32: np.uint32,
    TensorType.INT64: np.int64,
    TensorType.BOOL: np.bool_,
}


class TensorFormat(Enum):
    """Memory layout of a model tensor."""

    NCHW = "NCHW"
    NHWC = "NHWC"
    NC1HWC2 = "NC1HWC2"
    UNDEFINED = "UNDEFINED"


@dataclass
class TensorAttr:
    """Shape, layout and quantization details of one model tensor."""

    name: str = ""
    dims: tuple = field(default_factory=tuple)
    type: TensorType = TensorType.FLOAT32
    fmt: TensorFormat = TensorFormat.UNDEFINED
    index: int = 0
    size: int = 0
    w_stride: int = 0
    h_stride: int = 0
    size_with_stride: int = 0
    scale: float = 1.0
    zp: int = 0

    def __post_init__(self) -> None:
        self.dims = tuple(int(d) for d in self.dims)

    @property
    def quantization(self) -> Quantization:
        """Quantization parameters of this tensor."""
        return Quantization(self.scale, self.zp)

    def describe(self) -> str:
        """One-line human-readable summary."""
        dims = " ".join(str(d) for d in self.dims)
        return (
            f"name: {self.name}, dim: [{dims}], dtype: {self.type.value}, "
            f"format: {self.fmt.value}, size: {self.size}, wstride: {self.w_stride}, "
            f"hstride: {self.h_stride}, stride_size: {self.size_with_stride}, "
            f"scale: {self.scale:f}, zp: {self.zp}"
        )


@dataclass
class TimeCost:
    """Durations of the stages of one prediction, in microseconds; -1 when not run."""

    preprocess: int = -1
    inference: int = -1
    postprocess: int = -1


def input_size(attr: TensorAttr) -> Size:
    """Spatial size expected by an input tensor; empty for unknown layouts."""
    if attr.fmt is TensorFormat.NCHW:
        return Size(attr.dims[3], attr.dims[2])
    if attr.fmt is TensorFormat.NHWC:
        return Size(attr.dims[2], attr.dims[1])
    return Size()


def assign_input(data: Union[bytes, bytearray, memoryview, np.ndarray]) -> np.ndarray:
    """Shift unsigned 8-bit pixels into the signed range by subtracting 128."""
    if isinstance(data, np.ndarray):
        raw = np.ascontiguousarray(data, dtype=np.uint8).ravel()
    else:
        raw = np.frombuffer(data, dtype=np.uint8)
    return (raw - np.uint8(128)).view(np.int8)


def dump_tensor_info(tag: str, attrs: Iterable[TensorAttr]) -> str:
    """Text block describing ``attrs`` under a ``tag:`` heading."""
    return "\n".join([f"{tag}:", *(attr.describe() for attr in attrs)])