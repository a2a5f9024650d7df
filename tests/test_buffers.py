# tests/test_buffers.py
# Tests for the attribute/index buffer sink and the block model geometry built on it
# Exists to ensure attached buffers keep their item sizes, dtypes, and read-only state
# RELEVANT FILES: python/blockmesh/geometry.py, python/blockmesh/_validate.py, tests/test_geometry.py

import numpy as np
import pytest

from blockmesh import (
    BlockModelGeometry,
    BufferAttribute,
    BufferGeometry,
    GeometryParams,
    InvalidModel,
    Model,
)


def test_buffer_attribute_count_and_matrix() -> None:
    attr = BufferAttribute([0.0, 1.0, 2.0, 3.0, 4.0, 5.0], 3, dtype=np.float32)
    assert attr.count == 2
    assert len(attr) == 2
    assert attr.dtype == np.float32
    np.testing.assert_array_equal(attr.to_matrix(), [[0, 1, 2], [3, 4, 5]])
    assert "count=2" in repr(attr)


def test_buffer_attribute_rejects_ragged_length() -> None:
    with pytest.raises(ValueError, match="not a multiple of item_size 3"):
        BufferAttribute([0.0, 1.0], 3)


def test_buffer_attribute_rejects_bad_item_size() -> None:
    with pytest.raises(ValueError, match="item_size too small"):
        BufferAttribute([0.0], 0)


def test_buffer_attribute_rejects_non_numeric() -> None:
    with pytest.raises(ValueError, match="numeric dtype"):
        BufferAttribute(["a", "b"], 1)


def test_buffer_attribute_copies_and_freezes() -> None:
    source = np.zeros(6, dtype=np.float32)
    attr = BufferAttribute(source, 2)
    source[0] = 9.0
    assert attr.array[0] == 0.0
    assert source.flags.writeable
    with pytest.raises(ValueError):
        attr.array[0] = 1.0


def test_buffer_geometry_attributes() -> None:
    geometry = BufferGeometry()
    assert geometry.vertex_count == 0
    assert geometry.index is None
    geometry.set_attribute("position", BufferAttribute(np.zeros(9, dtype=np.float32), 3))
    assert geometry.has_attribute("position")
    assert not geometry.has_attribute("uv")
    assert geometry.vertex_count == 3
    assert geometry.triangle_count == 1
    with pytest.raises(KeyError):
        geometry.get_attribute("uv")
    with pytest.raises(TypeError):
        geometry.attributes["uv"] = BufferAttribute([0.0, 0.0], 2)  # type: ignore[index]
    with pytest.raises(TypeError):
        geometry.set_attribute("uv", np.zeros(2))  # type: ignore[arg-type]


def test_buffer_geometry_index_rules() -> None:
    geometry = BufferGeometry()
    geometry.set_index(np.array([0, 1, 2, 0, 2, 3], dtype=np.uint16))
    assert geometry.index.count == 6
    assert geometry.triangle_count == 2
    with pytest.raises(ValueError, match="unsigned"):
        geometry.set_index(np.array([0, 1, 2], dtype=np.int32))
    with pytest.raises(ValueError, match="item_size 1"):
        geometry.set_index(BufferAttribute(np.array([0, 1, 2, 3], dtype=np.uint16), 2))


def test_bounding_box() -> None:
    geometry = BlockModelGeometry(
        {"elements": [{"from": [2, 0, 4], "to": [14, 8, 12], "faces": {"up": {}, "down": {}}}]}
    )
    lo, hi = geometry.compute_bounding_box()
    np.testing.assert_array_equal(lo, [2, 0, 4])
    np.testing.assert_array_equal(hi, [14, 8, 12])
    with pytest.raises(ValueError, match="empty"):
        BlockModelGeometry({"elements": []}).compute_bounding_box()


def test_block_model_geometry_attaches_buffers(cube_model: dict) -> None:
    geometry = BlockModelGeometry(cube_model)
    assert isinstance(geometry.model, Model)
    assert set(geometry.attributes) == {"position", "uv"}
    assert geometry.get_attribute("position").item_size == 3
    assert geometry.get_attribute("uv").item_size == 2
    assert geometry.index.dtype == np.uint16
    assert geometry.vertex_count == 24
    assert geometry.triangle_count == 12
    assert geometry.get_attribute("uv").count == geometry.vertex_count


def test_block_model_geometry_params(cube_model: dict) -> None:
    geometry = BlockModelGeometry(cube_model, GeometryParams(index_format="uint32", compute_normals=True))
    assert geometry.index.dtype == np.uint32
    assert geometry.has_attribute("normal")
    assert geometry.get_attribute("normal").count == 24


def test_block_model_geometry_invalid_model() -> None:
    with pytest.raises(InvalidModel):
        BlockModelGeometry({"elements": [{"from": [0, 0, 0], "faces": {}}]})


def test_block_model_geometry_invalid_params(cube_model: dict) -> None:
    with pytest.raises(ValueError, match="Unknown index format"):
        BlockModelGeometry(cube_model, GeometryParams(index_format="uint8"))
