#!/usr/bin/env python3
"""
Packing of a body list into a flat state vector and back.

Layout: for body i the slice state[4*i:4*i+4] holds (x, y, vx, vy), in the order
of the body list at the moment of flattening. Vectors are rebuilt every step and
never persisted.
"""
from typing import List, Sequence

from .data_models import Body

COMPONENTS_PER_BODY = 4


def body_count(state: Sequence[float]) -> int:
    return len(state) // COMPONENTS_PER_BODY


def flatten(bodies: Sequence[Body]) -> List[float]:
    """Return (x, y, vx, vy) for each body, concatenated in list order."""
    state: List[float] = []
    for b in bodies:
        state.extend((b.position[0], b.position[1], b.velocity[0], b.velocity[1]))
    return state


def unflatten(state: Sequence[float], bodies: Sequence[Body]) -> None:
    """
    Overwrite each body's position and velocity from its slot in state.

    Only called once per integration step, after the RK4 combination.
    """
    for i, b in enumerate(bodies):
        k = i * COMPONENTS_PER_BODY
        b.position = (state[k], state[k + 1])
        b.velocity = (state[k + 2], state[k + 3])
