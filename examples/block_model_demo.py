#!/usr/bin/env python3
"""
Block model to mesh buffers using blockmesh

Builds geometry for a block model JSON file (or a built-in full cube), wraps it
with a texture material and writes the structured buffers to an .npz archive.

Usage:
    python block_model_demo.py --model stone_slab.json --texture stone.png --output slab.npz
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

# Prefer the in-repo Python package path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "python"))

try:
    from PIL import Image
except ImportError:
    Image = None

import blockmesh
from blockmesh.mesh import create_cube_model


def _load_texture_array(path: Path) -> np.ndarray:
    if Image is None:
        print("Pillow is required to read textures: pip install blockmesh[examples]")
        sys.exit(1)
    with Image.open(path) as img:
        return np.asarray(img.convert("RGBA"), dtype=np.uint8)


def main() -> int:
    parser = argparse.ArgumentParser(description="Convert a block model into mesh buffers")
    parser.add_argument("--model", type=Path, help="Block model JSON (defaults to a full cube)")
    parser.add_argument("--texture", type=Path, help="Texture image (defaults to a checkerboard)")
    parser.add_argument("--config", type=Path, help="blockmesh config JSON")
    parser.add_argument("--normals", action="store_true", help="Attach flat per-face normals")
    parser.add_argument("--output", type=Path, default=Path("block_mesh.npz"))
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.model is not None:
        data = json.loads(args.model.read_text(encoding="utf-8"))
        if not blockmesh.is_model(data):
            print(f"{args.model} does not look like a block model; validating anyway")
    else:
        data = create_cube_model()

    if args.texture is not None:
        texture = _load_texture_array(args.texture)
    else:
        checker = (np.indices((16, 16)).sum(axis=0) % 2).astype(np.uint8) * 255
        texture = np.dstack([checker, checker, checker])

    try:
        mesh = blockmesh.BlockModelMesh.from_model(data, texture, config=args.config, normals=args.normals)
    except blockmesh.InvalidModel as exc:
        print(f"Invalid model: {exc}")
        return 1

    buffers = mesh.to_mesh_buffers()
    np.savez(
        args.output,
        positions=buffers.positions,
        normals=buffers.normals,
        uvs=buffers.uvs,
        indices=buffers.indices,
    )
    print(f"{mesh!r}")
    print(f"Saved {args.output.resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
