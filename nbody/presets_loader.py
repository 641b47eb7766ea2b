#!/usr/bin/env python3
"""
Scene template JSON loading.

Templates live in nbody/templates/*.json. Users can drop their own files there
(or point the loader at another directory) and they'll be picked up.

Schema
======
{
  "name": "Human-friendly scene name",
  "description": "Optional description",
  "scale": 120.0,                    # optional, pixels per world unit
  "bodies": [
    {
      "name": "Primary",
      "mass": 5.0,
      "position": [0.0, 0.0],
      "velocity": [0.0, 0.0],
      "color": [255, 204, 0]         # optional
    }
  ]
}

Body entries with missing fields, non-numeric values or non-positive mass are
skipped. A file that cannot be read or parsed loads as an empty scene.
"""
import json
import os
from typing import List, Optional, Tuple

from .data_models import Body
from .vector_utils import clamp

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
DEFAULT_COLOR = (200, 200, 255)


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _coerce_color(c) -> Tuple[int, int, int]:
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError):
        return DEFAULT_COLOR
    return (clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255))


def list_templates(directory: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(directory):
        return items
    for fn in sorted(os.listdir(directory)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(directory, fn)) or {}
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_template(file_name: str, directory: str = TEMPLATES_DIR) -> Tuple[List[Body], Optional[float], str]:
    """
    Load a template JSON by file name.
    Returns (bodies, scale, display_name)
    """
    data = _read_json(os.path.join(directory, file_name)) or {}
    display_name = data.get("name") or os.path.splitext(file_name)[0]
    scale = data.get("scale")
    try:
        scale = float(scale) if scale is not None else None
    except (TypeError, ValueError):
        scale = None

    bodies: List[Body] = []
    for i, b in enumerate(data.get("bodies", [])):
        try:
            bodies.append(Body(
                name=str(b.get("name", f"Body {i + 1}")),
                mass=float(b["mass"]),
                position=(float(b["position"][0]), float(b["position"][1])),
                velocity=(float(b["velocity"][0]), float(b["velocity"][1])),
                color=_coerce_color(b.get("color", DEFAULT_COLOR)),
            ))
        except (AttributeError, KeyError, TypeError, ValueError, IndexError):
            continue
    return bodies, scale, display_name
