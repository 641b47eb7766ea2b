#!/usr/bin/env python3
"""
Built-in scenarios.

Each builder returns a fresh list of bodies in dimensionless units (G = 1).
SCENARIOS maps the scenario key to (display name, builder, view scale in pixels
per world unit).
"""
import colorsys
import random
from typing import Callable, Dict, List, Optional, Tuple

from .data_models import Body
from .vector_utils import clamp, vec_scale


def random_color(rng: random.Random) -> Tuple[int, int, int]:
    """Random hue at fixed saturation/lightness so bodies stay visible on a dark background."""
    hue = rng.randrange(360) / 360.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.6, 0.7)
    return (int(r * 255), int(g * 255), int(b * 255))


def dim_color(color: Tuple[int, int, int], factor: float) -> Tuple[int, int, int]:
    """Scale an RGB color toward black; factor 1 keeps it, 0 gives black."""
    f = clamp(factor, 0.0, 1.0)
    return (int(color[0] * f), int(color[1] * f), int(color[2] * f))


def template_figure_eight(rng: Optional[random.Random] = None) -> List[Body]:
    """Equal-mass figure-eight periodic solution (Chenciner-Montgomery).
    r1 = (0.97000436, -0.24308753), r2 = -r1, r3 = 0
    v3 = -2 * (0.4662036850, 0.4323657300), v1 = v2 = -v3 / 2
    """
    p1 = (0.97000436, -0.24308753)
    v1 = (0.4662036850, 0.4323657300)
    v3 = (-2 * v1[0], -2 * v1[1])

    return [
        Body("A", 1.0, p1, vec_scale(v3, -0.5), (255, 65, 54)),
        Body("B", 1.0, vec_scale(p1, -1.0), vec_scale(v3, -0.5), (46, 204, 64)),
        Body("C", 1.0, (0.0, 0.0), v3, (0, 116, 217)),
    ]


def template_pythagorean(rng: Optional[random.Random] = None) -> List[Body]:
    """Burrau's problem: masses 3, 4, 5 at rest on the vertices of a 3-4-5 triangle."""
    return [
        Body("3", 3.0, (1.0, 3.0), (0.0, 0.0), (255, 133, 27)),
        Body("4", 4.0, (-2.0, -1.0), (0.0, 0.0), (177, 13, 201)),
        Body("5", 5.0, (1.0, -1.0), (0.0, 0.0), (0, 31, 63)),
    ]


def template_random(rng: Optional[random.Random] = None, count: int = 5) -> List[Body]:
    rng = rng or random.Random()
    bodies = []
    for i in range(count):
        pos = ((rng.random() - 0.5) * 4, (rng.random() - 0.5) * 4)
        vel = ((rng.random() - 0.5) * 0.5, (rng.random() - 0.5) * 0.5)
        mass = rng.random() + 0.5
        bodies.append(Body(f"R{i + 1}", mass, pos, vel, random_color(rng)))
    return bodies


def template_solar(rng: Optional[random.Random] = None) -> List[Body]:
    """A heavy star with two planets on roughly circular orbits."""
    return [
        Body("Star", 10.0, (0.0, 0.0), (0.0, 0.0), (255, 220, 0)),
        Body("Planet 1", 1.0, (3.0, 0.0), (0.0, 1.8), (57, 204, 204)),
        Body("Planet 2", 2.0, (5.0, 0.0), (0.0, 1.4), (240, 18, 190)),
    ]


def template_empty(rng: Optional[random.Random] = None) -> List[Body]:
    return []


ScenarioBuilder = Callable[[Optional[random.Random]], List[Body]]

SCENARIOS: Dict[str, Tuple[str, ScenarioBuilder, float]] = {
    "figure8": ("Figure-eight (3 body)", template_figure_eight, 250.0),
    "pythagorean": ("Pythagorean (Burrau)", template_pythagorean, 80.0),
    "random": ("Random cluster", template_random, 150.0),
    "solar": ("Star and planets", template_solar, 100.0),
    "empty": ("Empty", template_empty, 150.0),
}
