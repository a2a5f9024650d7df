# python/blockmesh/textures.py
# Minimal texture handles for block model materials, built from numpy arrays or paths
# Exists so materials can carry a texture without loading or uploading anything
# RELEVANT FILES: python/blockmesh/material.py, python/blockmesh/_validate.py, tests/test_material.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from ._validate import validate_array

ArrayLike = Union[np.ndarray, "np.typing.NDArray[np.uint8]"]
TextureSource = Union["Tex", str, Path, ArrayLike]

logger = logging.getLogger(__name__)


@dataclass
class Tex:
    path: Optional[Path]
    data: Optional[np.ndarray]
    srgb: bool = True

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        """``(width, height)`` in pixels, or None for path-only textures."""
        if self.data is None:
            return None
        h, w = self.data.shape[:2]
        return int(w), int(h)

    @property
    def has_alpha(self) -> bool:
        if self.data is None:
            return False
        return bool((self.data[..., 3] < 255).any())


def _ensure_rgba8(arr: np.ndarray) -> np.ndarray:
    if not isinstance(arr, np.ndarray):
        raise TypeError("texture must be a numpy array")

    if arr.dtype != np.uint8:
        raise TypeError("texture dtype must be uint8")

    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError("texture must be (H,W,3|4)")

    validate_array(arr, "texture", min_size=1, require_contiguous=False)
    arr = np.ascontiguousarray(arr)

    if arr.shape[2] == 3:
        h, w, _ = arr.shape
        rgba = np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., :3] = arr
        rgba[..., 3] = 255
        return rgba
    return arr.copy()


def load_texture(source: TextureSource, srgb: bool = True) -> Tex:
    """Wrap a texture from a numpy array or a file path.

    Paths are kept as path-only handles; pixel data is never read from disk here.
    """
    if isinstance(source, Tex):
        return source
    if isinstance(source, (str, Path)):
        logger.warning(f"Texture {source} is path-only; no pixel data attached")
        return Tex(path=Path(source), data=None, srgb=srgb)

    arr = _ensure_rgba8(np.asarray(source))
    arr.flags.writeable = False
    return Tex(path=None, data=arr, srgb=srgb)
