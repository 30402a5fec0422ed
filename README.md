# rkzoo

Post-processing for the raw output tensors of neural-network models:
top-k image classification and YOLO (DFL-head) object detection, together with
the geometry, quantization and tensor-layout helpers they need.

Everything works on plain NumPy arrays or byte buffers, so tensors can come
from any runtime, a saved dump or a test fixture.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `rkzoo.types`

- `Size(width, height)` with `area()`.
- `Rect(x, y, width, height)`: top-left corner and extent.
- `Transformation(scale, x_off, y_off)`: a uniform scale plus offset.
  `Transformation.from_sizes(src, dst)` builds the letterbox transformation
  that fits `src` centred inside `dst`. `to_original(rect, cast=float)` maps a
  rectangle from target coordinates back to the original image, and
  `to_target(rect, cast=float)` does the reverse; `cast` is applied to every
  field (pass `int` to truncate).
- `Quantization(scale, zp)`: `dequantize(value)` computes
  `(value - zp) * scale` for a scalar or an array; `quantize(value, dtype)`
  computes `value / scale + zp`, truncating toward zero and clamping to the
  range of integer dtypes.

### `rkzoo.ops`

- `dfl(tensor)`: decodes four box distances from `4 * n` logits by applying a
  softmax to each quarter and taking its expected bin index.
- `iou(b1, b2)`: intersection over union of two `Rect`s, counting edges
  inclusively (widths and heights get `+ 1`).
- `nms(boxes, scores, classes, threshold)`: per-class non-maximum
  suppression. Returns the kept indices grouped by ascending class id, each
  group in descending score order; a box is dropped when its IoU with a kept
  box of the same class exceeds `threshold`.
- `nc1hwc2_to_nchw(src, src_dims, dst_dims)`: converts the first batch of an
  `(N, C1, H, W, C2)` tensor to an array of shape `(1, C, H, W)`.

### `rkzoo.label`

`Label` is a `list` of class names. `Label(path)` or `label.load(path)` reads
one name per non-empty line of a UTF-8 text file, replacing any names already
held. `label.name(index)` returns the name, or the index itself as text when
it is out of range.

### `rkzoo.tensor`

- `TensorType` and `TensorFormat` enums; `TensorType.dtype` gives the NumPy
  dtype.
- `TensorAttr`: name, dims, type, format, strides, size and quantization
  (`scale`, `zp`) of one tensor, with a `quantization` property and
  `describe()` returning a one-line summary.
- `TimeCost(preprocess, inference, postprocess)`: stage durations in
  microseconds, `-1` when a stage was not run.
- `input_size(attr)`: the spatial `Size` of an NCHW or NHWC input tensor, an
  empty `Size()` for other layouts.
- `assign_input(data)`: shifts `uint8` pixel data into `int8` by subtracting
  128 (wrapping), returning a flat `int8` array.
- `dump_tensor_info(tag, attrs)`: a text block with a `tag:` heading and one
  `describe()` line per tensor.

### `rkzoo.classify`

`Classifier(topk=5).postprocess(outputs, attrs)` reads the first output, a
`(1, classes)` tensor of type FLOAT32, INT8 (dequantized with the tensor's
scale and zero point) or FLOAT16, and returns `ClassScore(index, score)`
items in descending score order. A negative `topk`, or one larger than the
number of classes, keeps every class. Other tensor types raise `ValueError`.

### `rkzoo.detect`

`YoloDetector(input_size=Size(640, 640), score_thres=0.25, nms_thres=0.7)`
decodes outputs given as (box, score) tensor pairs, one pair per scale: box
tensors `(1, 4 * bins, H, W)` and score tensors `(1, classes, H, W)`.
`postprocess(outputs, attrs, native_attrs=None)` picks the best class per grid
cell, keeps cells whose score is above the (quantized) score threshold,
decodes the box with `dfl`, and runs `nms`. Tensors whose native attribute
is NC1HWC2 are converted to NCHW first; `native_attrs` defaults to `attrs`.
Supported types are INT8, UINT8 and FLOAT32; others raise `ValueError`.
Results are `Detection(id, score, box)` with boxes in model-input coordinates.

## Example

```python
from rkzoo.label import Label
from rkzoo.types import Rect, Size, Transformation

labels = Label("coco_80_labels.txt")

trans = Transformation.from_sizes(Size(1280, 720), Size(640, 640))
box = trans.to_original(Rect(100.0, 200.0, 50.0, 40.0), int)
print(labels.name(0), labels.name(1000), box)
```

## What this package does not do

It does not load models or run inference on any device, read or resize
images, draw boxes, or display results, and it provides no command-line
programs. It takes output tensors and their attributes that were obtained
elsewhere and turns them into class rankings and detections.