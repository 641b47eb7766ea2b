#!/usr/bin/env python3
"""
Data models for the gravity sandbox.

This module defines the core Body dataclass shared between physics, rendering, and UI.

Units and usage
- Dimensionless units with G = 1: position, velocity and mass are plain floats.
- Only mass, position and velocity take part in the integration. name, color and
  trail are presentation metadata owned by the shell.
- trail stores recent positions to render motion paths; it is only appended to
  after a full integration step has been written back.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from .constants import TRAIL_MAX_POINTS, TRAIL_MIN_SPACING
from .vector_utils import vec_len, vec_sub


@dataclass
class Body:
    """
    A point mass in the simulation.

    Fields:
    - name: Identifier for the body
    - mass: Mass, strictly positive
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy)
    - color: RGB tuple used for rendering
    - trail: Deque of recent positions, capped FIFO by its maxlen
    """
    name: str
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    color: Tuple[int, int, int] = (200, 200, 255)
    trail: Deque[Tuple[float, float]] = field(default_factory=lambda: deque(maxlen=TRAIL_MAX_POINTS))

    def __post_init__(self):
        self.mass = float(self.mass)
        if not math.isfinite(self.mass) or self.mass <= 0.0:
            raise ValueError(f"Body {self.name!r} must have a positive finite mass, got {self.mass}")
        self.position = (float(self.position[0]), float(self.position[1]))
        self.velocity = (float(self.velocity[0]), float(self.velocity[1]))

    def record_trail_point(self, min_spacing: float = TRAIL_MIN_SPACING) -> bool:
        """
        Append the current position to the trail if it moved far enough.

        Returns True when a point was recorded.
        """
        if self.trail and vec_len(vec_sub(self.position, self.trail[-1])) <= min_spacing:
            return False
        self.trail.append(self.position)
        return True
