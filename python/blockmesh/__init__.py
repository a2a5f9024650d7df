# python/blockmesh/__init__.py
# Public Python API for converting block models into mesh buffers
# Exists to re-export the geometry builder, model types, wrappers, and config loader
# RELEVANT FILES: python/blockmesh/geometry.py, python/blockmesh/model.py, python/blockmesh/mesh.py, tests/test_api.py

from .errors import InvalidModel
from .model import (
    ArrayVector3,
    ArrayVector4,
    Element,
    Face,
    FaceName,
    Model,
    Rotation,
    is_array_vector3,
    is_array_vector4,
    is_model,
    is_model_element,
    is_model_face,
    load_model,
)
from .config import (
    BlockMeshConfig,
    GeometryParams,
    MaterialParams,
    load_config,
    split_config_overrides,
)
from .geometry import (
    BlockModelGeometry,
    BufferAttribute,
    BufferGeometry,
    GeometryBuffers,
    compute_attributes,
)
from .textures import Tex, load_texture
from .material import BlockModelMaterial
from .mesh import BlockModelMesh, MeshBuffers

__version__ = "0.1.0"

__all__ = [
    "InvalidModel",
    "ArrayVector3",
    "ArrayVector4",
    "Element",
    "Face",
    "FaceName",
    "Model",
    "Rotation",
    "is_array_vector3",
    "is_array_vector4",
    "is_model",
    "is_model_element",
    "is_model_face",
    "load_model",
    "BlockMeshConfig",
    "GeometryParams",
    "MaterialParams",
    "load_config",
    "split_config_overrides",
    "BlockModelGeometry",
    "BufferAttribute",
    "BufferGeometry",
    "GeometryBuffers",
    "compute_attributes",
    "Tex",
    "load_texture",
    "BlockModelMaterial",
    "BlockModelMesh",
    "MeshBuffers",
    "__version__",
]
