#!/usr/bin/env python3
"""
Simulation state and the explicit stepping contract.

The integrator is a pure function of (bodies, dt) plus a paused flag for trail
recording. Everything long-lived (dt, sub-step count, softening, pause flag, view
scale) sits in a SimulationContext that is passed in explicitly, so a test harness,
a render loop or a batch driver can all drive the same Simulation.
"""
import random
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_DT,
    DEFAULT_PIXELS_PER_UNIT,
    DEFAULT_SOFTENING,
    G,
    LAUNCH_MASS_RANGE,
    LAUNCH_VELOCITY_GAIN,
    SUBSTEPS_PER_FRAME,
    TRAIL_MAX_POINTS,
    TRAIL_MIN_SPACING,
)
from .data_models import Body
from .integrator import step
from .physics import GravityModel, total_energy, total_momentum
from .presets import SCENARIOS, random_color
from .vector_utils import vec_scale, vec_sub


@dataclass
class SimulationContext:
    dt: float = DEFAULT_DT
    substeps: int = SUBSTEPS_PER_FRAME
    paused: bool = False
    softening: float = DEFAULT_SOFTENING
    g: float = G
    trail_length: int = TRAIL_MAX_POINTS
    trail_min_spacing: float = TRAIL_MIN_SPACING
    scale: float = DEFAULT_PIXELS_PER_UNIT  # pixels per world unit for the viewer


class Simulation:
    """
    Owns the body list and advances it with fixed RK4 steps.

    Bodies must not be added or removed while advance() is running; the shell
    serializes access.
    """

    def __init__(self, context: Optional[SimulationContext] = None, rng: Optional[random.Random] = None):
        self.context = context or SimulationContext()
        self.rng = rng or random.Random()
        self.model = GravityModel(self.context.g, self.context.softening)
        self.bodies: List[Body] = []
        self.time = 0.0
        self.steps_taken = 0
        self.initial_energy: Optional[float] = None
        self.scenario: Optional[str] = None
        self.launched = 0

    def _apply_context(self) -> None:
        """Push context changes made since the last call into the model and the trails."""
        ctx = self.context
        if self.model.g != ctx.g or self.model.softening != ctx.softening:
            self.model.g = float(ctx.g)
            self.model.set_softening(ctx.softening)
            ctx.softening = self.model.softening
            if self.bodies:
                self.initial_energy = self.energy()
        for b in self.bodies:
            if b.trail.maxlen != ctx.trail_length:
                b.trail = deque(b.trail, maxlen=ctx.trail_length)

    # ---- stepping ----------------------------------------------------

    def advance(self, steps: int, dt: Optional[float] = None) -> None:
        """Call the RK4 stepper exactly `steps` times with a fixed dt."""
        if steps < 0:
            raise ValueError(f"steps must be >= 0, got {steps}")
        dt = self.context.dt if dt is None else float(dt)
        self._apply_context()
        for _ in range(steps):
            step(self.bodies, dt, self.model,
                 paused=self.context.paused,
                 min_spacing=self.context.trail_min_spacing)
            self.time += dt
            self.steps_taken += 1

    def advance_frame(self) -> int:
        """
        One frame of the driving loop: `substeps` separate fixed steps when running.

        Returns the number of steps taken.
        """
        if self.context.paused:
            return 0
        self.advance(self.context.substeps)
        return self.context.substeps

    # ---- body management --------------------------------------------

    def _reset_clock(self) -> None:
        self._apply_context()
        self.time = 0.0
        self.steps_taken = 0
        self.initial_energy = self.energy() if self.bodies else None

    def replace_bodies(self, bodies: List[Body]) -> None:
        self.bodies = list(bodies)
        for b in self.bodies:
            b.trail = deque(maxlen=self.context.trail_length)
        self._reset_clock()

    def add_body(self, body: Body) -> None:
        body.trail = deque(body.trail, maxlen=self.context.trail_length)
        self.bodies.append(body)
        self.initial_energy = self.energy()

    def clear(self) -> None:
        self.bodies = []
        self.scenario = None
        self._reset_clock()

    def clear_trails(self) -> None:
        for b in self.bodies:
            b.trail.clear()

    def load_scenario(self, name: str) -> None:
        """Replace all bodies with a built-in scenario and unpause."""
        if name not in SCENARIOS:
            raise ValueError(f"Unknown scenario: {name}")
        _, builder, scale = SCENARIOS[name]
        self.load_scene(builder(self.rng), scale, name)

    def load_scene(self, bodies: List[Body], scale: Optional[float] = None, name: Optional[str] = None) -> None:
        """Install a prepared body list (e.g. from a JSON template) and unpause."""
        self.context.paused = False
        if scale is not None and scale > 0:
            self.context.scale = float(scale)
        self.scenario = name
        self.replace_bodies(bodies)

    def launch_body(self, drag_start: Tuple[float, float], drag_end: Tuple[float, float],
                    mass: Optional[float] = None) -> Body:
        """
        Slingshot launch: the body appears at drag_start and flies opposite to the pull.

        velocity = (drag_start - drag_end) * LAUNCH_VELOCITY_GAIN
        """
        if mass is None:
            lo, hi = LAUNCH_MASS_RANGE
            mass = lo + self.rng.random() * (hi - lo)
        velocity = vec_scale(vec_sub(drag_start, drag_end), LAUNCH_VELOCITY_GAIN)
        self.launched += 1
        body = Body(f"Launched {self.launched}", mass, drag_start, velocity, random_color(self.rng))
        self.add_body(body)
        return body

    # ---- configuration ----------------------------------------------

    def toggle_pause(self) -> bool:
        self.context.paused = not self.context.paused
        return self.context.paused

    def set_softening(self, value: float) -> None:
        self.context.softening = max(0.0, float(value))
        self._apply_context()

    def set_trail_length(self, length: int) -> None:
        """Resize every trail, keeping its most recent points."""
        self.context.trail_length = max(1, int(length))
        self._apply_context()

    # ---- diagnostics -------------------------------------------------

    def energy(self) -> float:
        return total_energy(self.bodies, self.model.g, self.model.softening)

    def momentum(self) -> Tuple[float, float]:
        return total_momentum(self.bodies)

    def relative_energy_drift(self) -> Optional[float]:
        """|E - E0| / |E0| since the scene was loaded, or None when undefined."""
        self._apply_context()
        if not self.bodies or not self.initial_energy:
            return None
        return abs(self.energy() - self.initial_energy) / abs(self.initial_energy)
