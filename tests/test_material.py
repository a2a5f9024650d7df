# tests/test_material.py
# Tests for texture handles and the block model material wrapper
# Exists to ensure textures are coerced to RGBA8 and material settings validate
# RELEVANT FILES: python/blockmesh/material.py, python/blockmesh/textures.py, python/blockmesh/config.py

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest

from blockmesh import BlockModelMaterial, MaterialParams, Tex, load_texture


def _rgb(h: int = 16, w: int = 16) -> np.ndarray:
    return np.full((h, w, 3), 128, dtype=np.uint8)


def test_load_texture_rgb_to_rgba() -> None:
    tex = load_texture(_rgb(8, 4))
    assert tex.data.shape == (8, 4, 4)
    assert tex.data.dtype == np.uint8
    assert (tex.data[..., 3] == 255).all()
    assert tex.size == (4, 8)
    assert tex.srgb is True
    assert tex.has_alpha is False


def test_load_texture_copies_rgba() -> None:
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    tex = load_texture(rgba, srgb=False)
    rgba[0, 0, 3] = 7
    assert tex.data[0, 0, 3] == 0
    assert tex.has_alpha is True
    assert tex.srgb is False
    with pytest.raises(ValueError):
        tex.data[0, 0, 0] = 1


def test_load_texture_path_only(caplog: pytest.LogCaptureFixture, tmp_path: Path) -> None:
    path = tmp_path / "stone.png"
    with caplog.at_level(logging.WARNING, logger="blockmesh.textures"):
        tex = load_texture(path)
    assert tex.path == path
    assert tex.data is None
    assert tex.size is None
    assert "path-only" in caplog.text


def test_load_texture_passthrough() -> None:
    tex = Tex(path=None, data=None)
    assert load_texture(tex) is tex


@pytest.mark.parametrize(
    "array,error",
    [
        (np.zeros((4, 4, 3), dtype=np.float32), TypeError),
        (np.zeros((4, 4), dtype=np.uint8), ValueError),
        (np.zeros((4, 4, 2), dtype=np.uint8), ValueError),
        (np.zeros((0, 4, 4), dtype=np.uint8), ValueError),
    ],
)
def test_load_texture_rejects_bad_arrays(array: np.ndarray, error: type) -> None:
    with pytest.raises(error):
        load_texture(array)


def test_material_defaults() -> None:
    material = BlockModelMaterial.from_texture(_rgb())
    assert material.filter == "nearest"
    assert material.transparent is True
    assert material.alpha_test == pytest.approx(0.5)
    assert material.side == "front"
    assert isinstance(material.texture, Tex)


def test_material_coerces_texture_in_constructor() -> None:
    material = BlockModelMaterial(texture=_rgb())  # type: ignore[arg-type]
    assert material.texture.data.shape == (16, 16, 4)


def test_material_custom_params() -> None:
    params = MaterialParams(filter="linear", transparent=False, alpha_test=0.0, side="double")
    material = BlockModelMaterial.from_texture(_rgb(), params)
    assert material.filter == "linear"
    assert material.transparent is False
    assert material.alpha_test == 0.0
    assert material.side == "double"


def test_material_validation() -> None:
    with pytest.raises(ValueError, match="alpha_test too large"):
        BlockModelMaterial.from_texture(_rgb(), MaterialParams(alpha_test=2.0))
    with pytest.raises(ValueError, match="Unknown texture filter"):
        BlockModelMaterial.from_texture(_rgb(), MaterialParams(filter="anisotropic"))


def test_material_with_texture_keeps_params() -> None:
    material = BlockModelMaterial.from_texture(_rgb(), MaterialParams(side="back"), srgb=False)
    swapped = material.with_texture(np.zeros((32, 32, 4), dtype=np.uint8))
    assert swapped.side == "back"
    assert swapped.texture.size == (32, 32)
    assert swapped.texture.srgb is False
    assert material.texture.size == (16, 16)


def test_material_to_dict() -> None:
    data = BlockModelMaterial.from_texture(_rgb(8, 8)).to_dict()
    assert data == {
        "filter": "nearest",
        "transparent": True,
        "alpha_test": 0.5,
        "side": "front",
        "texture": {"path": None, "size": (8, 8), "srgb": True},
    }


def test_material_explicit_none_params() -> None:
    material = BlockModelMaterial(_rgb(), None)  # type: ignore[arg-type]
    assert material.params == MaterialParams()
    assert material.filter == "nearest"
