#!/usr/bin/env python3
"""
Shared constants for the gravity sandbox (dimensionless units, G = 1).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physics
G = 1.0
DEFAULT_SOFTENING = 0.1  # added to r^2 in the force denominator; a stability knob, not a physical constant
DEFAULT_DT = 0.015  # simulation time per RK4 step
SUBSTEPS_PER_FRAME = 4  # fixed RK4 calls per rendered frame
MAX_SUBSTEPS = 32

# Trails
TRAIL_MAX_POINTS = 150
TRAIL_MIN_SPACING = 0.05  # world units between recorded trail points

# Slingshot launch
LAUNCH_VELOCITY_GAIN = 2.0
LAUNCH_MASS_RANGE = (0.5, 1.0)

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (11, 12, 16)
TRAIL_FADE_ALPHA = 77  # per-frame background wash; older strokes fade out over a few frames
GLOW_WIDTH_PX = 2
GLOW_DIM = 0.5
HUD_COLOR = (200, 200, 200)
SLINGSHOT_COLOR = (255, 255, 255)
GHOST_COLOR = (180, 180, 180)
MIN_BODY_RADIUS_PX = 3

# Camera zoom bounds (pixels per world unit)
DEFAULT_PIXELS_PER_UNIT = 150.0
MIN_PIXELS_PER_UNIT = 5.0
MAX_PIXELS_PER_UNIT = 5000.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
