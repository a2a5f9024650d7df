# python/blockmesh/errors.py
# Error kinds raised while turning block models into mesh buffers
# Exists so callers can tell malformed model input apart from other ValueErrors
# RELEVANT FILES: python/blockmesh/model.py, python/blockmesh/geometry.py, tests/test_model.py

from __future__ import annotations

from typing import Optional


class InvalidModel(ValueError):
    """Raised when a block model cannot be converted into geometry.

    ``path`` points at the offending value, e.g. ``elements[0].faces.up.rotation``.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
