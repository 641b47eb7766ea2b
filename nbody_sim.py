#!/usr/bin/env python3
"""
Gravity sandbox application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that wraps an nbody Simulation; all access
  is guarded by a re-entrant lock so the two loops never touch the bodies at once.
- Provides slingshot body launching in the viewport and scenario, template and
  integrator controls in the Dear PyGui panel.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  stepping physics (a fixed number of RK4 sub-steps per frame), and drawing.
- The UI class runs in the main thread via Dear PyGui. It updates readouts on a periodic
  frame callback and invokes SimulationController methods as needed; these are lock-protected.
- The integrator itself is single-threaded and lock-free; the lock only serializes the shell.

Running
1) Install: `pip install -e .`
2) Run: `gravity-sandbox` (or `python nbody_sim.py`)

Viewport controls
- Left-drag: pull back and release to launch a body (slingshot)
- Right/Middle-drag: pan | Wheel: zoom | Space: pause | C: clear | 1-4: scenarios
"""

import math
import threading
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from nbody.camera import Camera2D
from nbody.constants import (
    BACKGROUND_COLOR,
    GHOST_COLOR,
    GLOW_DIM,
    GLOW_WIDTH_PX,
    HUD_COLOR,
    MAX_SUBSTEPS,
    MIN_BODY_RADIUS_PX,
    SAFE_COORD_LIMIT,
    SLINGSHOT_COLOR,
    TARGET_FPS,
    TRAIL_FADE_ALPHA,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from nbody.data_models import Body
from nbody.presets import SCENARIOS, dim_color
from nbody.presets_loader import list_templates, load_template
from nbody.simulation import Simulation, SimulationContext
from nbody.vector_utils import clamp

SCENARIO_KEYS = {
    pygame.K_1: "figure8",
    pygame.K_2: "pythagorean",
    pygame.K_3: "random",
    pygame.K_4: "solar",
}

# ============================================================
# Simulation Controller (Shared State)
# ============================================================

class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, context: Optional[SimulationContext] = None):
        self.lock = threading.RLock()
        self.sim = Simulation(context)
        self.running = True  # app running
        self.show_trails = True
        self.last_event_msg: Optional[str] = None
        self.view_reset_pending = True  # renderer re-frames the camera on next frame

    @property
    def context(self) -> SimulationContext:
        return self.sim.context

    def _post(self, msg: str) -> None:
        self.last_event_msg = msg

    def advance_frame(self) -> int:
        with self.lock:
            return self.sim.advance_frame()

    def step_once(self) -> None:
        """Single fixed step; trails stay untouched while paused."""
        with self.lock:
            self.sim.advance(1)

    def toggle_pause(self) -> bool:
        with self.lock:
            paused = self.sim.toggle_pause()
            self._post("Paused." if paused else "Running.")
            return paused

    def load_scenario(self, name: str) -> None:
        with self.lock:
            self.sim.load_scenario(name)
            self.view_reset_pending = True
            self._post(f"Loaded scenario: {SCENARIOS[name][0]}")

    def load_scene(self, bodies: List[Body], scale: Optional[float], name: str) -> None:
        with self.lock:
            self.sim.load_scene(bodies, scale, name)
            self.view_reset_pending = True
            self._post(f"Loaded template: {name} ({len(bodies)} bodies)")

    def clear(self) -> None:
        with self.lock:
            self.sim.clear()
            self._post("Cleared all bodies.")

    def clear_trails(self) -> None:
        with self.lock:
            self.sim.clear_trails()

    def launch_body(self, start: Tuple[float, float], end: Tuple[float, float]) -> Body:
        with self.lock:
            body = self.sim.launch_body(start, end)
            self._post(f"Launched {body.name} (m={body.mass:.2f})")
            return body

    def set_dt(self, dt: float) -> None:
        with self.lock:
            self.context.dt = max(1e-5, float(dt))

    def set_substeps(self, n: int) -> None:
        with self.lock:
            self.context.substeps = int(clamp(int(n), 1, MAX_SUBSTEPS))

    def set_softening(self, val: float) -> None:
        with self.lock:
            self.sim.set_softening(val)

    def snapshot(self):
        """Copy what the renderer needs so drawing happens outside the lock."""
        with self.lock:
            return [
                (b.position, b.mass, b.color, list(b.trail)) for b in self.sim.bodies
            ], self.context.paused

    def stats(self):
        with self.lock:
            return {
                "bodies": len(self.sim.bodies),
                "time": self.sim.time,
                "steps": self.sim.steps_taken,
                "energy": self.sim.energy() if self.sim.bodies else 0.0,
                "drift": self.sim.relative_energy_drift(),
                "momentum": self.sim.momentum(),
                "paused": self.context.paused,
            }

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps physics, draws bodies, trails and the slingshot guide.
    Handles launch dragging, camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.fade = None
        self.clock = None
        self.drag_start_world: Optional[Tuple[float, float]] = None
        self.drag_current_world: Optional[Tuple[float, float]] = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Sandbox - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.surface.fill(BACKGROUND_COLOR)
        self.fade = make_fade_surface((VIEW_WIDTH, VIEW_HEIGHT))
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        while self.running and self.sim.running:
            with self.sim.lock:
                if self.sim.view_reset_pending:
                    self.camera.reset(self.sim.context.scale)
                    self.sim.view_reset_pending = False

            self.handle_events()

            # Fixed sub-steps per frame; nothing happens while paused
            self.sim.advance_frame()

            self.draw()
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.surface.fill(BACKGROUND_COLOR)
                self.fade = make_fade_surface((event.w, event.h))
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.toggle_pause()
                elif event.key == pygame.K_c:
                    self.sim.clear()
                elif event.key in SCENARIO_KEYS:
                    self.sim.load_scenario(SCENARIO_KEYS[event.key])

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.drag_start_world = self.camera.screen_to_world(event.pos)
                    self.drag_current_world = self.drag_start_world
                elif event.button in (2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and self.drag_start_world is not None:
                    end = self.camera.screen_to_world(event.pos)
                    self.sim.launch_body(self.drag_start_world, end)
                    self.drag_start_world = None
                    self.drag_current_world = None
                elif event.button in (2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                if self.drag_start_world is not None:
                    self.drag_current_world = self.camera.screen_to_world(event.pos)
                elif self.dragging_background:
                    dx = event.pos[0] - self.drag_start_screen[0]
                    dy = event.pos[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = event.pos

    def _to_screen(self, world):
        """Screen point for drawing, or None when off-limits or non-finite."""
        try:
            return _safe_point(self.camera.world_to_screen(world))
        except (ValueError, OverflowError):
            return None

    def draw(self):
        surf = self.surface
        # Translucent wash instead of a clear so recent frames linger as fading streaks
        surf.blit(self.fade, (0, 0))

        bodies, paused = self.sim.snapshot()
        show_trails = self.sim.show_trails

        if show_trails:
            for _, _, color, trail in bodies:
                pts = [p for p in (self._to_screen(t) for t in trail) if p]
                if len(pts) > 1:
                    pygame.draw.aalines(surf, color, False, pts)

        for position, mass, color, _ in bodies:
            sp = self._to_screen(position)
            if sp is None:
                continue
            r = max(MIN_BODY_RADIUS_PX, int(math.sqrt(mass) * 4))
            gfxdraw.filled_circle(surf, sp[0], sp[1], r, color)
            gfxdraw.aacircle(surf, sp[0], sp[1], r, color)
            gfxdraw.aacircle(surf, sp[0], sp[1], r + GLOW_WIDTH_PX, dim_color(color, GLOW_DIM))

        if self.drag_start_world is not None and self.drag_current_world is not None:
            start = self._to_screen(self.drag_start_world)
            current = self._to_screen(self.drag_current_world)
            if start and current:
                draw_dashed_line(surf, SLINGSHOT_COLOR, start, current)
                gfxdraw.filled_circle(surf, start[0], start[1], 6, GHOST_COLOR)

        draw_text(surf, "Left-drag: launch | Right/Middle-drag: pan | Wheel: zoom | Space: pause | C: clear | 1-4: scenarios", 10, 10, HUD_COLOR)
        draw_text(surf, f"Bodies: {len(bodies)}  [{'Paused' if paused else 'Running'}]", 10, 30, HUD_COLOR)

        pygame.display.flip()

def make_fade_surface(size):
    fade = pygame.Surface(size, pygame.SRCALPHA)
    fade.fill((*BACKGROUND_COLOR, TRAIL_FADE_ALPHA))
    return fade

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt):
    x, y = pt
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

def draw_dashed_line(surface, color, start, end, dash=5, width=2):
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return
    ux, uy = dx / length, dy / length
    d = 0.0
    while d < length:
        e = min(d + dash, length)
        a = (start[0] + ux * d, start[1] + uy * d)
        b = (start[0] + ux * e, start[1] + uy * e)
        pygame.draw.line(surface, color, a, b, width)
        d += 2 * dash

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: scenarios, JSON templates, integrator controls, readouts.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.status_msg_id = None
        self.stats_id = None
        self._template_map = {}
        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Gravity Sandbox - Controls', width=460, height=520)

        ctx = self.sim.context
        with dpg.window(label="Controls", width=440, height=500, pos=(10, 10), tag="main_window"):
            dpg.add_text("Scenarios")
            with dpg.group(horizontal=True):
                for key, (display, _, _) in SCENARIOS.items():
                    if key == "empty":
                        continue
                    dpg.add_button(label=display, callback=lambda s, a, u: self._load_scenario(u), user_data=key)

            with dpg.group(horizontal=True):
                dpg.add_text("Template:")
                self._template_map = {display: fn for fn, display in list_templates()}
                items = list(self._template_map.keys())
                dpg.add_combo(items, default_value=items[0] if items else "", width=240, tag="template_combo")
                dpg.add_button(label="Load", callback=lambda: self._load_template(dpg.get_value("template_combo")))

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Clear", callback=self._clear)
                dpg.add_checkbox(label="Trails", default_value=True, callback=self._toggle_trails)
            dpg.add_slider_float(label="dt", min_value=0.001, max_value=0.05, default_value=ctx.dt, width=260,
                                 callback=lambda s, a, u: self.sim.set_dt(a), tag="dt_slider")
            dpg.add_slider_int(label="Sub-steps / frame", min_value=1, max_value=MAX_SUBSTEPS, default_value=ctx.substeps,
                               width=260, callback=lambda s, a, u: self.sim.set_substeps(a), tag="substeps_slider")
            dpg.add_slider_float(label="Softening", min_value=0.0, max_value=1.0, default_value=ctx.softening, width=260,
                                 callback=lambda s, a, u: self.sim.set_softening(a), tag="softening_slider")

            dpg.add_separator()
            self.stats_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("Ready.")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _load_scenario(self, key: str):
        try:
            self.sim.load_scenario(key)
        except ValueError as e:
            self._set_error(str(e))

    def _load_template(self, display: str):
        fn = self._template_map.get(display)
        if fn is None:
            self._set_error(f"No template named {display!r}")
            return
        bodies, scale, name = load_template(fn)
        if not bodies:
            self._set_error(f"Template {name!r} has no valid bodies")
            return
        self.sim.load_scene(bodies, scale, name)

    def _toggle_play(self):
        self.sim.toggle_pause()

    def _step_once(self):
        self.sim.step_once()
        self._set_status("Stepped once.")

    def _clear(self):
        self.sim.clear()

    def _toggle_trails(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_trails = bool(value)
        if not value:
            self.sim.clear_trails()
        self._set_status(f"Trails {'ON' if value else 'OFF'}.")

    def _sync_ui_with_sim(self):
        """Periodic readout refresh and event message relay from the viewport thread."""
        s = self.sim.stats()
        drift = "n/a" if s["drift"] is None else f"{s['drift']:.2e}"
        dpg.set_value(self.stats_id,
                      f"Bodies: {s['bodies']}   t = {s['time']:.3f}   steps: {s['steps']}\n"
                      f"Energy: {s['energy']:.6f}   drift: {drift}\n"
                      f"Momentum: ({s['momentum'][0]:.3e}, {s['momentum'][1]:.3e})"
                      f"{'   [Paused]' if s['paused'] else ''}")
        with self.sim.lock:
            msg = self.sim.last_event_msg
            self.sim.last_event_msg = None
        if msg:
            self._set_status(msg)
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def main():
    sim = SimulationController()
    sim.load_scenario("figure8")

    renderer = PygameRenderer(sim)
    renderer.start()

    UI(sim)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()
