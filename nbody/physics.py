#!/usr/bin/env python3
"""
Core Physics for the gravity sandbox

Responsibilities
- Compute the time derivative of a flattened state vector under softened, pairwise
  Newtonian gravity.
- Provide diagnostics (kinetic/potential/total energy, momentum, center of mass)
  used to judge integrator accuracy.

Units and conventions
- Dimensionless units, G = 1 by default.
- State vectors use the layout of nbody.state_vector: (x, y, vx, vy) per body.

Numerical notes
- Softening: a constant is added to r^2 (not eps^2) in the force denominator:
      a_i = sum_j G * m_j * r_ij / (|r_ij|^2 + softening)^(3/2)
  This removes the singularity at zero separation at the cost of slightly weakening
  the force at every separation.
- The potential used by the diagnostics, -G m_i m_j / sqrt(r^2 + softening), is the
  one this force derives from, so total energy is conserved by the exact flow and
  any drift measures integration error.
- Complexity: O(N^2) per derivative evaluation (direct summation). N is expected
  to stay in the tens.
"""

import math
from typing import List, Sequence, Tuple

from .constants import DEFAULT_SOFTENING, G
from .data_models import Body
from .state_vector import COMPONENTS_PER_BODY


class GravityModel:
    """
    Softened N-body gravity acting on flattened state vectors.

    The model knows nothing about Body objects; masses are passed in alongside the
    state so the same evaluator serves every RK4 stage.
    """

    def __init__(self, g: float = G, softening: float = DEFAULT_SOFTENING):
        """
        Args:
            g: Gravitational constant
            softening: Additive term in the squared-distance denominator (>= 0)
        """
        self.g = float(g)
        self.softening = max(0.0, float(softening))

    def set_softening(self, softening: float) -> None:
        """Update the softening term (clamped to >= 0)."""
        self.softening = max(0.0, float(softening))

    def derivatives(self, state: Sequence[float], masses: Sequence[float]) -> List[float]:
        """
        Time derivative of state, in the same layout.

        Position slots receive the velocity; velocity slots receive the summed
        acceleration from every other body. Self-interaction is skipped.

        Args:
            state: Flattened (x, y, vx, vy) vector.
            masses: Mass of each body, same order as the state.

        Returns:
            List of the same length as state.
        """
        n = len(masses)
        deriv = [0.0] * len(state)
        g = self.g
        soft = self.softening

        for i in range(n):
            ki = i * COMPONENTS_PER_BODY
            deriv[ki] = state[ki + 2]
            deriv[ki + 1] = state[ki + 3]

            xi = state[ki]
            yi = state[ki + 1]
            ax, ay = 0.0, 0.0
            for j in range(n):
                if i == j:
                    continue
                kj = j * COMPONENTS_PER_BODY
                dx = state[kj] - xi
                dy = state[kj + 1] - yi
                dist_sq = dx * dx + dy * dy
                f = g * masses[j] / (dist_sq + soft) ** 1.5
                ax += f * dx
                ay += f * dy

            deriv[ki + 2] = ax
            deriv[ki + 3] = ay

        return deriv


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(0.5 * b.mass * (b.velocity[0] ** 2 + b.velocity[1] ** 2) for b in bodies)


def potential_energy(bodies: Sequence[Body], g: float = G, softening: float = DEFAULT_SOFTENING) -> float:
    """Softened pairwise potential energy, each pair counted once."""
    total = 0.0
    n = len(bodies)
    for i in range(n):
        bi = bodies[i]
        for j in range(i + 1, n):
            bj = bodies[j]
            dx = bj.position[0] - bi.position[0]
            dy = bj.position[1] - bi.position[1]
            total -= g * bi.mass * bj.mass / math.sqrt(dx * dx + dy * dy + softening)
    return total


def total_energy(bodies: Sequence[Body], g: float = G, softening: float = DEFAULT_SOFTENING) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, g, softening)


def total_momentum(bodies: Sequence[Body]) -> Tuple[float, float]:
    px = sum(b.mass * b.velocity[0] for b in bodies)
    py = sum(b.mass * b.velocity[1] for b in bodies)
    return (px, py)


def center_of_mass(bodies: Sequence[Body]) -> Tuple[float, float]:
    """Mass-weighted mean position; the origin for an empty system."""
    m_total = sum(b.mass for b in bodies)
    if m_total <= 0:
        return (0.0, 0.0)
    cx = sum(b.mass * b.position[0] for b in bodies) / m_total
    cy = sum(b.mass * b.position[1] for b in bodies) / m_total
    return (cx, cy)
