"""
Block model mesh: a drawable pairing of block geometry with a material

Provides:
1. BlockModelMesh, which binds a BlockModelGeometry to a BlockModelMaterial
2. MeshBuffers export with structured (N, 3) / (M, 3) arrays for consumers
   that do not speak the flat attribute-buffer interface
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .config import BlockMeshConfig, ConfigSource, load_config, split_config_overrides
from .geometry import BlockModelGeometry, FACE_NORMALS, VERTEX_MAP
from .material import BlockModelMaterial
from .model import ModelSource
from .textures import TextureSource

logger = logging.getLogger(__name__)


@dataclass
class MeshBuffers:
    """Structured mesh arrays: one row per vertex and one row per triangle."""

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        if self.indices.ndim == 2:
            return int(self.indices.shape[0])
        return int(self.indices.size // 3)


class BlockModelMesh:
    """
    Drawable unit made of block model geometry and a material.

    The mesh only composes its parts; buffers stay owned by the geometry.
    """

    def __init__(self, geometry: BlockModelGeometry, material: BlockModelMaterial):
        if not isinstance(geometry, BlockModelGeometry):
            raise TypeError("geometry must be a BlockModelGeometry")
        if not isinstance(material, BlockModelMaterial):
            raise TypeError("material must be a BlockModelMaterial")
        self.geometry = geometry
        self.material = material

    @classmethod
    def from_model(
        cls,
        model: ModelSource,
        texture: TextureSource,
        config: ConfigSource = None,
        **overrides,
    ) -> "BlockModelMesh":
        """
        Build geometry and material for ``model`` in one step.

        Args:
            model: Model value or decoded model mapping
            texture: Texture handle, RGBA/RGB uint8 array, or path
            config: BlockMeshConfig, mapping, JSON path, or None for defaults
            **overrides: Flat config overrides such as ``units`` or ``filter``

        Returns:
            BlockModelMesh wrapping the built geometry and material

        Raises:
            InvalidModel: If the model is malformed
            ValueError: If the configuration is invalid
            TypeError: If an override keyword is not recognized
        """
        overrides, remaining = split_config_overrides(overrides)
        if remaining:
            raise TypeError(f"unexpected keyword arguments: {sorted(remaining)}")
        cfg: BlockMeshConfig = load_config(config, overrides or None)
        geometry = BlockModelGeometry(model, cfg.geometry)
        material = BlockModelMaterial.from_texture(texture, cfg.material)
        mesh = cls(geometry, material)
        logger.debug(f"Created {mesh!r}")
        return mesh

    @property
    def vertex_count(self) -> int:
        return self.geometry.vertex_count

    @property
    def triangle_count(self) -> int:
        return self.geometry.triangle_count

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.geometry.compute_bounding_box()

    def to_mesh_buffers(self) -> MeshBuffers:
        """Export structured arrays; normals are flat per face when not already attached."""
        positions = self.geometry.get_attribute("position").to_matrix().astype(np.float32)
        uvs = self.geometry.get_attribute("uv").to_matrix().astype(np.float32)
        if self.geometry.has_attribute("normal"):
            normals = self.geometry.get_attribute("normal").to_matrix().astype(np.float32)
        else:
            normals = _flat_normals(self.geometry)
        index = self.geometry.index
        indices = (
            np.empty((0, 3), dtype=np.uint32)
            if index is None
            else index.array.astype(np.uint32).reshape(-1, 3)
        )
        return MeshBuffers(positions=positions, normals=normals, uvs=uvs, indices=indices)

    def __repr__(self) -> str:
        return (f"BlockModelMesh(vertices={self.vertex_count}, "
                f"triangles={self.triangle_count}, filter={self.material.filter!r})")


def _flat_normals(geometry: BlockModelGeometry) -> np.ndarray:
    normals = [
        FACE_NORMALS[name]
        for element in geometry.model.elements
        for name, _ in element.faces
        for _ in range(len(VERTEX_MAP[name]))
    ]
    if not normals:
        return np.empty((0, 3), dtype=np.float32)
    return np.asarray(normals, dtype=np.float32)


def create_cube_model(size: float = 16.0, uv: Optional[Tuple[float, float, float, float]] = None) -> dict:
    """
    Create a single full-cube model mapping with all six faces, for testing.

    Returns:
        Decoded model mapping suitable for load_model()
    """
    face = {} if uv is None else {"uv": list(uv)}
    return {
        "elements": [
            {
                "from": [0.0, 0.0, 0.0],
                "to": [size, size, size],
                "faces": {name.value: dict(face) for name in FACE_NORMALS},
            }
        ]
    }
