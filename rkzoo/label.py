"""Class label lists loaded from text files."""

from __future__ import annotations

import os
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class Label(list):
    """A list of class names, one per non-empty line of a label file."""

    def __init__(self, path: Optional[PathLike] = None) -> None:
        super().__init__()
        if path is not None:
            self.load(path)

    def load(self, path: PathLike) -> None:
        """Replace the current names with those read from ``path``."""
        with open(path, encoding="utf-8") as stream:
            names = [line.rstrip("\r\n") for line in stream]
        self[:] = [name for name in names if name]

    def name(self, index: int) -> str:
        """Name for ``index``, or the index itself as text when unknown."""
        if 0 <= index < len(self):
            return self[index]
        return str(index)