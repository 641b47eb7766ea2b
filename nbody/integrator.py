#!/usr/bin/env python3
"""
Fixed-step classical RK4 over the flattened state of all bodies.

Workflow of one step:
1) s0 = flatten(bodies)
2) k1 at s0, k2 at s0 + dt/2*k1, k3 at s0 + dt/2*k2, k4 at s0 + dt*k3
3) s = s0 + dt/6 * (k1 + 2*k2 + 2*k3 + k4)
4) single write-back into the bodies, then trail bookkeeping

The step size never adapts; callers wanting smoother motion call step several
times per frame with the same dt.
"""
from typing import List, Optional, Sequence

from .constants import TRAIL_MIN_SPACING
from .data_models import Body
from .physics import GravityModel
from .state_vector import flatten, unflatten

_DEFAULT_MODEL = GravityModel()


def _offset(state: Sequence[float], k: Sequence[float], h: float) -> List[float]:
    return [s + h * d for s, d in zip(state, k)]


def rk4_state(state: Sequence[float], masses: Sequence[float], dt: float,
              model: GravityModel) -> List[float]:
    """Return the state advanced by one RK4 step; the input is left untouched."""
    half = dt * 0.5
    k1 = model.derivatives(state, masses)
    k2 = model.derivatives(_offset(state, k1, half), masses)
    k3 = model.derivatives(_offset(state, k2, half), masses)
    k4 = model.derivatives(_offset(state, k3, dt), masses)

    sixth = dt / 6.0
    return [
        s + sixth * (a + 2.0 * b + 2.0 * c + d)
        for s, a, b, c, d in zip(state, k1, k2, k3, k4)
    ]


def step(bodies: Sequence[Body], dt: float, model: Optional[GravityModel] = None,
         paused: bool = False, min_spacing: float = TRAIL_MIN_SPACING) -> None:
    """
    Advance bodies in place by one fixed RK4 step of size dt.

    Trails are only touched after the write-back, and not at all while paused.
    An empty body list is a no-op.
    """
    if not bodies:
        return
    model = model or _DEFAULT_MODEL

    masses = [b.mass for b in bodies]
    unflatten(rk4_state(flatten(bodies), masses, dt, model), bodies)

    if paused:
        return
    for b in bodies:
        b.record_trail_point(min_spacing)
