# python/blockmesh/config.py
# Geometry and material configuration parsing for block model meshes
# Exists to give one validated place for texture units, index format, and sampling settings
# RELEVANT FILES: python/blockmesh/geometry.py, python/blockmesh/material.py, python/blockmesh/mesh.py, tests/test_config.py
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, Union

import numpy as np

from ._validate import validate_numeric_parameter

ConfigSource = Union["BlockMeshConfig", Mapping[str, Any], str, Path, None]

logger = logging.getLogger(__name__)

_INDEX_FORMATS: Dict[str, str] = {
    "uint16": "uint16",
    "u16": "uint16",
    "short": "uint16",
    "uint32": "uint32",
    "u32": "uint32",
    "int": "uint32",
}

_TEXTURE_FILTERS: Dict[str, str] = {
    "nearest": "nearest",
    "point": "nearest",
    "pixelated": "nearest",
    "linear": "linear",
    "bilinear": "linear",
    "smooth": "linear",
}

_SIDES: Dict[str, str] = {
    "front": "front",
    "frontside": "front",
    "back": "back",
    "backside": "back",
    "double": "double",
    "doubleside": "double",
    "both": "double",
}


def _normalize_key(value: Any) -> str:
    return "".join(
        c
        for c in str(value).strip().lower()
        if c not in {"-", "_", " ", "."}
    )


def _normalize_choice(value: Any, mapping: Mapping[str, str], label: str) -> str:
    key = _normalize_key(value)
    if key not in mapping:
        raise ValueError(f"Unknown {label}: {value!r}")
    return mapping[key]


def _to_bool(value: Any, label: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        key = _normalize_key(value)
        if key in {"true", "yes", "on", "1"}:
            return True
        if key in {"false", "no", "off", "0"}:
            return False
    raise TypeError(f"{label} must be a boolean")


@dataclass
class GeometryParams:
    units: float = 16.0
    index_format: str = "uint16"
    compute_normals: bool = False

    @property
    def index_dtype(self) -> np.dtype:
        return np.dtype(self.index_format)

    def to_dict(self) -> dict:
        return {
            "units": self.units,
            "index_format": self.index_format,
            "compute_normals": self.compute_normals,
        }

    def validate(self) -> None:
        validate_numeric_parameter(self.units, "geometry.units", min_val=0.0, exclusive_min=True)
        if self.index_format not in _INDEX_FORMATS.values():
            raise ValueError(f"Unknown index format: {self.index_format!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["GeometryParams"] = None) -> "GeometryParams":
        base = copy.deepcopy(default) if default is not None else cls()
        if "units" in data:
            base.units = float(validate_numeric_parameter(data["units"], "geometry.units", min_val=0.0, exclusive_min=True))
        if "index_format" in data:
            base.index_format = _normalize_choice(data["index_format"], _INDEX_FORMATS, "index format")
        if "compute_normals" in data:
            base.compute_normals = _to_bool(data["compute_normals"], "geometry.compute_normals")
        return base


@dataclass
class MaterialParams:
    filter: str = "nearest"
    transparent: bool = True
    alpha_test: float = 0.5
    side: str = "front"

    def to_dict(self) -> dict:
        return {
            "filter": self.filter,
            "transparent": self.transparent,
            "alpha_test": self.alpha_test,
            "side": self.side,
        }

    def validate(self) -> None:
        validate_numeric_parameter(self.alpha_test, "material.alpha_test", min_val=0.0, max_val=1.0)
        if self.filter not in _TEXTURE_FILTERS.values():
            raise ValueError(f"Unknown texture filter: {self.filter!r}")
        if self.side not in _SIDES.values():
            raise ValueError(f"Unknown material side: {self.side!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["MaterialParams"] = None) -> "MaterialParams":
        base = copy.deepcopy(default) if default is not None else cls()
        if "filter" in data:
            base.filter = _normalize_choice(data["filter"], _TEXTURE_FILTERS, "texture filter")
        if "transparent" in data:
            base.transparent = _to_bool(data["transparent"], "material.transparent")
        if "alpha_test" in data:
            base.alpha_test = float(
                validate_numeric_parameter(data["alpha_test"], "material.alpha_test", min_val=0.0, max_val=1.0)
            )
        if "side" in data:
            base.side = _normalize_choice(data["side"], _SIDES, "material side")
        return base


@dataclass
class BlockMeshConfig:
    geometry: GeometryParams = field(default_factory=GeometryParams)
    material: MaterialParams = field(default_factory=MaterialParams)

    def to_dict(self) -> dict:
        return {
            "geometry": self.geometry.to_dict(),
            "material": self.material.to_dict(),
        }

    def copy(self) -> "BlockMeshConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        self.geometry.validate()
        self.material.validate()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["BlockMeshConfig"] = None) -> "BlockMeshConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        if "geometry" in data:
            if isinstance(data["geometry"], Mapping):
                base.geometry = GeometryParams.from_mapping(data["geometry"], base.geometry)
            else:
                raise TypeError("geometry must be a mapping")
        if "material" in data:
            if isinstance(data["material"], Mapping):
                base.material = MaterialParams.from_mapping(data["material"], base.material)
            else:
                raise TypeError("material must be a mapping")
        return base


def _load_from_path(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        return json.loads(text)
    raise ValueError(f"Unsupported config file format: {path}")


def _build_override_mapping(overrides: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for key, value in overrides.items():
        if key in {"units", "texture_units"}:
            out.setdefault("geometry", {})["units"] = value
        elif key in {"index_format", "index_type"}:
            out.setdefault("geometry", {})["index_format"] = value
        elif key in {"normals", "compute_normals"}:
            out.setdefault("geometry", {})["compute_normals"] = value
        elif key in {"filter", "texture_filter"}:
            out.setdefault("material", {})["filter"] = value
        elif key == "transparent":
            out.setdefault("material", {})["transparent"] = value
        elif key == "alpha_test":
            out.setdefault("material", {})["alpha_test"] = value
        elif key == "side":
            out.setdefault("material", {})["side"] = value
        # Unrecognized keys are left to split_config_overrides callers.
    return out


_RECOGNIZED_OVERRIDES = frozenset(
    {
        "units",
        "texture_units",
        "index_format",
        "index_type",
        "normals",
        "compute_normals",
        "filter",
        "texture_filter",
        "transparent",
        "alpha_test",
        "side",
    }
)


def load_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> BlockMeshConfig:
    if isinstance(config, BlockMeshConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = BlockMeshConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        path = Path(config)
        logger.debug(f"Loading block mesh config from {path}")
        cfg = BlockMeshConfig.from_mapping(_load_from_path(path))
    elif config is None:
        cfg = BlockMeshConfig()
    else:
        raise TypeError("config must be BlockMeshConfig, mapping, path, or None")

    if overrides:
        merged = _build_override_mapping(overrides)
        if merged:
            cfg = BlockMeshConfig.from_mapping(merged, cfg)
    cfg.validate()
    logger.debug(f"Block mesh config: {cfg.to_dict()}")
    return cfg


def split_config_overrides(kwargs: MutableMapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    overrides: Dict[str, Any] = {}
    remaining: Dict[str, Any] = {}
    for key, value in list(kwargs.items()):
        if key in _RECOGNIZED_OVERRIDES:
            overrides[key] = kwargs.pop(key)
        else:
            remaining[key] = value
    return overrides, remaining
