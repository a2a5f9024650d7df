# python/blockmesh/model.py
# Typed block model values (elements, faces, rotations) plus shape predicates
# Exists to turn decoded model mappings into checked values before geometry is built
# RELEVANT FILES: python/blockmesh/geometry.py, python/blockmesh/errors.py, tests/test_model.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvalidModel

ArrayVector3 = Tuple[float, float, float]
ArrayVector4 = Tuple[float, float, float, float]
ModelSource = Union["Model", Mapping[str, Any]]


class FaceName(str, Enum):
    WEST = "west"
    EAST = "east"
    DOWN = "down"
    UP = "up"
    NORTH = "north"
    SOUTH = "south"

    @classmethod
    def parse(cls, value: Any, path: Optional[str] = None) -> "FaceName":
        if isinstance(value, FaceName):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(f.value for f in cls)
            raise InvalidModel(f"unknown face name {value!r} (expected one of: {names})", path) from None


class Rotation(IntEnum):
    """Texture rotation of a face, in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270

    @property
    def shift(self) -> int:
        return self.value // 90

    @classmethod
    def parse(cls, value: Any, path: Optional[str] = None) -> "Rotation":
        if isinstance(value, Rotation):
            return value
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidModel(f"rotation must be one of 0, 90, 180, 270; got {value!r}", path)
        try:
            return cls(value)
        except ValueError:
            raise InvalidModel(f"rotation must be one of 0, 90, 180, 270; got {value!r}", path) from None


@dataclass(frozen=True)
class Face:
    rotation: Rotation = Rotation.R0
    uv: Optional[ArrayVector4] = None
    texture: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Any, path: str = "face") -> "Face":
        if not isinstance(data, Mapping):
            raise InvalidModel("face must be a mapping", path)
        uv = data.get("uv")
        texture = data.get("texture")
        rotation = data.get("rotation")
        if texture is not None and not isinstance(texture, str):
            raise InvalidModel("texture must be a string", f"{path}.texture")
        return cls(
            rotation=Rotation.parse(0 if rotation is None else rotation, f"{path}.rotation"),
            uv=None if uv is None else _to_vector(uv, 4, f"{path}.uv"),
            texture=texture,
        )


@dataclass(frozen=True)
class Element:
    """One cuboid of a block model.

    ``faces`` keeps the input's face order; geometry is emitted in that order.
    """

    from_: ArrayVector3
    to: ArrayVector3
    faces: Tuple[Tuple[FaceName, Face], ...] = ()

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def face(self, name: Union[FaceName, str]) -> Optional[Face]:
        key = FaceName.parse(name)
        for face_name, face in self.faces:
            if face_name is key:
                return face
        return None

    @classmethod
    def from_mapping(cls, data: Any, path: str = "element") -> "Element":
        if not isinstance(data, Mapping):
            raise InvalidModel("element must be a mapping", path)
        for key in ("from", "to"):
            if key not in data:
                raise InvalidModel(f"missing '{key}' coordinates", path)
        faces_data = data.get("faces", {})
        if not isinstance(faces_data, Mapping):
            raise InvalidModel("faces must be a mapping", f"{path}.faces")
        faces = []
        seen = set()
        for name, face_data in faces_data.items():
            face_path = f"{path}.faces.{name}"
            face_name = FaceName.parse(name, face_path)
            if face_name in seen:
                raise InvalidModel("duplicate face", face_path)
            seen.add(face_name)
            faces.append((face_name, Face.from_mapping(face_data, face_path)))
        return cls(
            from_=_to_vector(data["from"], 3, f"{path}.from"),
            to=_to_vector(data["to"], 3, f"{path}.to"),
            faces=tuple(faces),
        )

    def to_dict(self) -> Dict[str, Any]:
        faces: Dict[str, Any] = {}
        for name, face in self.faces:
            entry: Dict[str, Any] = {}
            if face.rotation is not Rotation.R0:
                entry["rotation"] = int(face.rotation)
            if face.uv is not None:
                entry["uv"] = list(face.uv)
            if face.texture is not None:
                entry["texture"] = face.texture
            faces[name.value] = entry
        return {"from": list(self.from_), "to": list(self.to), "faces": faces}


@dataclass(frozen=True)
class Model:
    elements: Tuple[Element, ...] = field(default_factory=tuple)

    @property
    def face_count(self) -> int:
        return sum(element.face_count for element in self.elements)

    @classmethod
    def from_mapping(cls, data: Any) -> "Model":
        if not isinstance(data, Mapping):
            raise InvalidModel("model must be a mapping")
        elements = data.get("elements", [])
        if isinstance(elements, (str, bytes)) or not isinstance(elements, Sequence):
            raise InvalidModel("elements must be a sequence", "elements")
        return cls(
            elements=tuple(
                Element.from_mapping(element, f"elements[{idx}]") for idx, element in enumerate(elements)
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"elements": [element.to_dict() for element in self.elements]}


def load_model(source: ModelSource) -> Model:
    if isinstance(source, Model):
        return source
    if isinstance(source, Mapping):
        return Model.from_mapping(source)
    raise TypeError("model must be a Model or a mapping")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _to_vector(value: Any, size: int, path: str) -> Tuple[float, ...]:
    if not is_array_vector(value, size):
        raise InvalidModel(f"expected a sequence of {size} finite numbers, got {value!r}", path)
    return tuple(float(v) for v in value)


def is_array_vector(value: Any, size: int) -> bool:
    if not isinstance(value, (list, tuple)) or len(value) != size:
        return False
    return all(_is_number(v) and math.isfinite(v) for v in value)


def is_array_vector3(value: Any) -> bool:
    return is_array_vector(value, 3)


def is_array_vector4(value: Any) -> bool:
    return is_array_vector(value, 4)


def is_model_face(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if "uv" in value and not is_array_vector4(value["uv"]):
        return False
    if "rotation" in value:
        rotation = value["rotation"]
        if not _is_number(rotation) or rotation not in (0, 90, 180, 270):
            return False
    if "texture" in value and not isinstance(value["texture"], str):
        return False
    return True


def is_model_element(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if not (is_array_vector3(value.get("from")) and is_array_vector3(value.get("to"))):
        return False
    faces = value.get("faces")
    if not isinstance(faces, Mapping):
        return False
    names = {f.value for f in FaceName}
    return all(name in names and is_model_face(face) for name, face in faces.items())


def is_model(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    elements = value.get("elements")
    return isinstance(elements, (list, tuple)) and all(is_model_element(e) for e in elements)
