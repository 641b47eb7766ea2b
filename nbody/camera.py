#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.
"""
from typing import Optional, Tuple
from .constants import (
    DEFAULT_PIXELS_PER_UNIT,
    MIN_PIXELS_PER_UNIT,
    MAX_PIXELS_PER_UNIT,
    VIEW_WIDTH,
    VIEW_HEIGHT,
)
from .vector_utils import clamp


class Camera2D:
    """
    Simple 2D camera that maps world coordinates to screen pixels.

    scale is in pixels per world unit; the world origin sits at the viewport
    center plus the pan offset.
    """

    def __init__(self, center=(0.0, 0.0), scale=DEFAULT_PIXELS_PER_UNIT):
        self.center = [center[0], center[1]]
        self.scale = clamp(scale, MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def reset(self, scale: float) -> None:
        self.center = [0.0, 0.0]
        self.scale = clamp(scale, MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) * self.scale + self.viewport_size[0] / 2
        py = (pos[1] - cy) * self.scale + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) / self.scale + cx
        wy = (screen[1] - self.viewport_size[1] / 2) / self.scale + cy
        return (wx, wy)

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.scale = clamp(self.scale * factor, MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)
        if pivot_screen is not None and before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.center[0] -= dx_pixels / self.scale
        self.center[1] -= dy_pixels / self.scale
