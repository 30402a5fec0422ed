"""Post-processing for classification and YOLO detection model outputs."""

__version__ = "0.1.0"
__all__ = ["types", "ops", "label", "tensor", "classify", "detect"]