# python/blockmesh/geometry.py
# Cuboid-to-triangle geometry builder plus the attribute/index buffer sink it feeds
# Exists to unroll block model elements into position, uv, and index buffers without a renderer
# RELEVANT FILES: python/blockmesh/model.py, python/blockmesh/mesh.py, python/blockmesh/config.py, tests/test_geometry.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from ._validate import validate_array, validate_numeric_parameter
from .config import GeometryParams
from .errors import InvalidModel
from .model import ArrayVector3, ArrayVector4, FaceName, Model, ModelSource, Rotation, load_model

logger = logging.getLogger(__name__)

Selector = Tuple[int, int, int]
FaceVertexMap = Tuple[Selector, Selector, Selector, Selector]

# Per-axis corner selectors: 0 takes ``from``, 1 takes ``to``. Winding is outward-facing.
VERTEX_MAP: Mapping[FaceName, FaceVertexMap] = MappingProxyType(
    {
        FaceName.WEST: ((0, 0, 0), (0, 1, 0), (0, 1, 1), (0, 0, 1)),
        FaceName.EAST: ((1, 0, 1), (1, 1, 1), (1, 1, 0), (1, 0, 0)),
        FaceName.DOWN: ((0, 0, 0), (0, 0, 1), (1, 0, 1), (1, 0, 0)),
        FaceName.UP: ((0, 1, 1), (0, 1, 0), (1, 1, 0), (1, 1, 1)),
        FaceName.NORTH: ((1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 0)),
        FaceName.SOUTH: ((0, 0, 1), (0, 1, 1), (1, 1, 1), (1, 0, 1)),
    }
)

FACE_NORMALS: Mapping[FaceName, ArrayVector3] = MappingProxyType(
    {
        FaceName.WEST: (-1.0, 0.0, 0.0),
        FaceName.EAST: (1.0, 0.0, 0.0),
        FaceName.DOWN: (0.0, -1.0, 0.0),
        FaceName.UP: (0.0, 1.0, 0.0),
        FaceName.NORTH: (0.0, 0.0, -1.0),
        FaceName.SOUTH: (0.0, 0.0, 1.0),
    }
)

# (x1, y1, z1, x2, y2, z2, units) -> (u1, v1, u2, v2)
_GENERATED_UVS: Mapping[FaceName, Callable[..., ArrayVector4]] = MappingProxyType(
    {
        FaceName.WEST: lambda x1, y1, z1, x2, y2, z2, n: (z1, n - y2, z2, n - y1),
        FaceName.EAST: lambda x1, y1, z1, x2, y2, z2, n: (n - z2, n - y2, n - z1, n - y1),
        FaceName.DOWN: lambda x1, y1, z1, x2, y2, z2, n: (x1, n - z2, x2, n - z1),
        FaceName.UP: lambda x1, y1, z1, x2, y2, z2, n: (x1, z1, x2, z2),
        FaceName.NORTH: lambda x1, y1, z1, x2, y2, z2, n: (n - x2, n - y2, n - x1, n - y1),
        FaceName.SOUTH: lambda x1, y1, z1, x2, y2, z2, n: (x1, n - y2, x2, n - y1),
    }
)

# Two triangles per quad, both sharing the diagonal from local vertex 0 to 2.
_QUAD_INDICES = np.array([0, 2, 1, 0, 3, 2], dtype=np.int64)


@dataclass(frozen=True, eq=False)
class GeometryBuffers:
    """Flat buffers produced by :func:`compute_attributes`."""

    positions: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray
    normals: Optional[np.ndarray] = None

    @property
    def vertex_count(self) -> int:
        return int(self.positions.size // 3)

    @property
    def triangle_count(self) -> int:
        return int(self.indices.size // 3)


def _read_only(arr: np.ndarray) -> np.ndarray:
    flat = arr.reshape(-1)
    flat.flags.writeable = False
    return flat


def rotated_vertex_map(rotation: Union[Rotation, int], corners: FaceVertexMap) -> FaceVertexMap:
    """Cyclically shift a face's corner order so it starts at ``rotation / 90``."""
    shift = Rotation.parse(rotation).shift
    a, b, c, d = corners
    ordered = (a, b, c, d)
    return ordered[shift:] + ordered[:shift]  # type: ignore[return-value]


def generated_uvs(
    face: Union[FaceName, str],
    from_: ArrayVector3,
    to: ArrayVector3,
    units: float = 16.0,
) -> ArrayVector4:
    """Derive a face's uv rectangle from the element extents on that face's plane."""
    x1, y1, z1 = from_
    x2, y2, z2 = to
    return _GENERATED_UVS[FaceName.parse(face)](x1, y1, z1, x2, y2, z2, units)


def normalized_uvs(uv: ArrayVector4, units: float = 16.0) -> ArrayVector4:
    """Scale a uv rectangle to [0, 1], flipping the v coordinates."""
    return tuple(
        (units - coordinate if i % 2 else coordinate) / units
        for i, coordinate in enumerate(uv)
    )  # type: ignore[return-value]


def compute_attributes(
    model: ModelSource,
    *,
    units: float = 16.0,
    index_dtype: Any = np.uint16,
    compute_normals: bool = False,
) -> GeometryBuffers:
    """Unroll every face of every element into vertex, uv, and index buffers.

    Each face contributes 4 vertices, 4 uv pairs, and 6 indices, emitted in
    element order and then in the element's face order.

    Raises
    ------
    InvalidModel
        If the model is malformed or has more vertices than ``index_dtype`` can address.
    """
    model = load_model(model)
    units = float(validate_numeric_parameter(units, "units", min_val=0.0, exclusive_min=True))
    index_dtype = np.dtype(index_dtype)
    if index_dtype.kind != "u":
        raise ValueError(f"index_dtype must be an unsigned integer type, got {index_dtype}")

    face_count = model.face_count
    vertex_count = 4 * face_count
    max_vertices = int(np.iinfo(index_dtype).max) + 1
    if vertex_count > max_vertices:
        raise InvalidModel(
            f"model needs {vertex_count} vertices but {index_dtype.name} indices address at most {max_vertices}"
        )

    positions = np.empty((vertex_count, 3), dtype=np.float32)
    uvs = np.empty((vertex_count, 2), dtype=np.float32)
    indices = np.empty((face_count, 6), dtype=index_dtype)
    normals = np.empty((vertex_count, 3), dtype=np.float32) if compute_normals else None

    f = 0
    for element in model.elements:
        lo = np.asarray(element.from_, dtype=np.float64)
        hi = np.asarray(element.to, dtype=np.float64)
        for name, face in element.faces:
            i = 4 * f
            indices[f] = i + _QUAD_INDICES

            selectors = np.asarray(rotated_vertex_map(face.rotation, VERTEX_MAP[name]))
            positions[i:i + 4] = np.where(selectors == 0, lo, hi)

            face_uvs = face.uv if face.uv is not None else generated_uvs(name, element.from_, element.to, units)
            u1, v1, u2, v2 = normalized_uvs(face_uvs, units)
            uvs[i:i + 4] = ((u1, v2), (u1, v1), (u2, v1), (u2, v2))

            if normals is not None:
                normals[i:i + 4] = FACE_NORMALS[name]
            f += 1

    logger.debug(
        f"Built block model geometry: {len(model.elements)} elements, {face_count} faces, {vertex_count} vertices"
    )
    return GeometryBuffers(
        positions=_read_only(positions),
        uvs=_read_only(uvs),
        indices=_read_only(indices),
        normals=None if normals is None else _read_only(normals),
    )


class BufferAttribute:
    """A flat numeric array interpreted as ``item_size``-component items."""

    def __init__(self, array: Any, item_size: int, dtype: Any = None) -> None:
        item_size = int(validate_numeric_parameter(item_size, "item_size", min_val=1, expected_type=int))
        arr = np.array(array, dtype=dtype).reshape(-1)
        validate_array(arr, "attribute array", ndim=1)
        if arr.size % item_size:
            raise ValueError(f"attribute array length {arr.size} is not a multiple of item_size {item_size}")
        arr.flags.writeable = False
        self.array = arr
        self.item_size = item_size

    @property
    def count(self) -> int:
        return int(self.array.size // self.item_size)

    @property
    def dtype(self) -> np.dtype:
        return self.array.dtype

    def to_matrix(self) -> np.ndarray:
        return self.array.reshape(-1, self.item_size)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"BufferAttribute(count={self.count}, item_size={self.item_size}, dtype={self.dtype})"


class BufferGeometry:
    """Named attribute buffers plus an optional index buffer."""

    def __init__(self) -> None:
        self._attributes: Dict[str, BufferAttribute] = {}
        self._index: Optional[BufferAttribute] = None

    @property
    def attributes(self) -> Mapping[str, BufferAttribute]:
        return MappingProxyType(self._attributes)

    @property
    def index(self) -> Optional[BufferAttribute]:
        return self._index

    def set_attribute(self, name: str, attribute: BufferAttribute) -> "BufferGeometry":
        if not isinstance(attribute, BufferAttribute):
            raise TypeError(f"attribute '{name}' must be a BufferAttribute")
        self._attributes[name] = attribute
        return self

    def get_attribute(self, name: str) -> BufferAttribute:
        return self._attributes[name]

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def set_index(self, index: Union[BufferAttribute, np.ndarray]) -> "BufferGeometry":
        if not isinstance(index, BufferAttribute):
            index = BufferAttribute(index, 1)
        if index.item_size != 1:
            raise ValueError("index buffer must have item_size 1")
        if index.dtype.kind != "u":
            raise ValueError(f"index buffer must have an unsigned integer dtype, got {index.dtype}")
        self._index = index
        return self

    @property
    def vertex_count(self) -> int:
        if "position" not in self._attributes:
            return 0
        return self._attributes["position"].count

    @property
    def triangle_count(self) -> int:
        if self._index is None:
            return self.vertex_count // 3
        return self._index.count // 3

    def compute_bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(min, max)`` corners of the ``position`` attribute."""
        positions = self.get_attribute("position").to_matrix()
        if positions.shape[0] == 0:
            raise ValueError("cannot compute bounding box of empty geometry")
        return (
            positions.min(axis=0).astype(np.float32),
            positions.max(axis=0).astype(np.float32),
        )


class BlockModelGeometry(BufferGeometry):
    """Geometry built once from a block model; buffers are read-only afterwards."""

    def __init__(self, model: ModelSource, params: Optional[GeometryParams] = None) -> None:
        super().__init__()
        params = params if params is not None else GeometryParams()
        params.validate()
        self.model: Model = load_model(model)
        self.params = params

        buffers = compute_attributes(
            self.model,
            units=params.units,
            index_dtype=params.index_dtype,
            compute_normals=params.compute_normals,
        )
        self.set_attribute("position", BufferAttribute(buffers.positions, 3))
        self.set_attribute("uv", BufferAttribute(buffers.uvs, 2))
        if buffers.normals is not None:
            self.set_attribute("normal", BufferAttribute(buffers.normals, 3))
        self.set_index(BufferAttribute(buffers.indices, 1))
