# python/blockmesh/material.py
# Material wrapper binding a block texture to its sampling and alpha settings
# Exists to provide a simple material surface for block meshes without GPU coupling
# RELEVANT FILES: python/blockmesh/textures.py, python/blockmesh/config.py, python/blockmesh/mesh.py, tests/test_material.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .config import MaterialParams
from .textures import Tex, TextureSource, load_texture


@dataclass
class BlockModelMaterial:
    texture: Tex
    params: Optional[MaterialParams] = field(default_factory=MaterialParams)

    def __post_init__(self) -> None:
        self.texture = load_texture(self.texture)
        if self.params is None:
            self.params = MaterialParams()
        self.params.validate()

    @classmethod
    def from_texture(
        cls,
        texture: TextureSource,
        params: Optional[MaterialParams] = None,
        *,
        srgb: bool = True,
    ) -> "BlockModelMaterial":
        return cls(
            texture=load_texture(texture, srgb=srgb),
            params=params if params is not None else MaterialParams(),
        )

    @property
    def filter(self) -> str:
        return self.params.filter

    @property
    def transparent(self) -> bool:
        return self.params.transparent

    @property
    def alpha_test(self) -> float:
        return self.params.alpha_test

    @property
    def side(self) -> str:
        return self.params.side

    def with_texture(self, texture: TextureSource) -> "BlockModelMaterial":
        return replace(self, texture=load_texture(texture, srgb=self.texture.srgb))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.params.to_dict())
        data["texture"] = {
            "path": None if self.texture.path is None else str(self.texture.path),
            "size": self.texture.size,
            "srgb": self.texture.srgb,
        }
        return data
