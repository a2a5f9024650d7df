# Ensure `import blockmesh` works from a fresh clone:
# put repo/python on sys.path so the package is importable without prior install.
import sys
from pathlib import Path

import pytest


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _ensure_python_path():
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


_ensure_python_path()


@pytest.fixture
def cube_model() -> dict:
    """Full 16-unit cube with all six faces in canonical order."""
    return {
        "elements": [
            {
                "from": [0, 0, 0],
                "to": [16, 16, 16],
                "faces": {
                    "west": {},
                    "east": {},
                    "down": {},
                    "up": {},
                    "north": {},
                    "south": {},
                },
            }
        ]
    }


@pytest.fixture
def slab_model() -> dict:
    """Bottom half slab with explicit uvs and rotations on some faces."""
    return {
        "elements": [
            {
                "from": [0, 0, 0],
                "to": [16, 8, 16],
                "faces": {
                    "down": {"uv": [0, 0, 16, 16], "texture": "#bottom"},
                    "up": {"uv": [0, 0, 16, 16], "rotation": 90, "texture": "#top"},
                    "north": {"uv": [0, 8, 16, 16], "texture": "#side"},
                    "south": {"uv": [0, 8, 16, 16], "texture": "#side"},
                    "west": {"uv": [0, 8, 16, 16], "rotation": 180, "texture": "#side"},
                    "east": {"uv": [0, 8, 16, 16], "rotation": 270, "texture": "#side"},
                },
            }
        ]
    }
