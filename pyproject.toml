[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rkzoo"
version = "0.1.0"
description = "Post-processing for NPU model outputs: top-k classification and YOLO detection decoding with DFL, NMS and layout conversion"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["yolo", "object-detection", "classification", "nms", "quantization", "npu"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rkzoo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
