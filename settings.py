import os

import numpy as np

# =========================
# Window
# =========================
WIDTH = int(os.getenv("BDV_WIDTH", "1100"))
HEIGHT = int(os.getenv("BDV_HEIGHT", "700"))
FPS = int(os.getenv("BDV_FPS", "60"))
CAPTION = "Beta Decay Viz (Learning Tool)"

# Empty -> fresh entropy each launch
SEED = os.getenv("BDV_SEED", "")

# =========================
# Logging
# =========================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# =========================
# Colors
# =========================
BG_COLOR = (12, 14, 18)
ARENA_FILL = (16, 18, 24)
ARENA_OUTLINE = (70, 80, 95)
TEXT_COLOR = (230, 230, 230)
PANEL_FILL = (10, 12, 16, 200)
PANEL_OUTLINE = (80, 90, 110, 180)
TOOLTIP_FILL = (10, 12, 16, 230)
TOOLTIP_OUTLINE = (90, 100, 125, 200)

NEUTRON_COLOR = (160, 210, 255)
PROTON_COLOR = (255, 120, 150)
ELECTRON_COLOR = (240, 210, 80)
ANTINU_COLOR = (120, 190, 255)

MOMENTUM_ARROW_COLOR = (150, 150, 150, 220)
SPIN_ARROW_COLOR = (235, 235, 235, 220)
SPIN_ONLY_ARROW_COLOR = (230, 230, 230, 220)

# =========================
# Arena & anchors
# =========================
ARENA_LEFT, ARENA_TOP = 60.0, 60.0
ARENA_WIDTH, ARENA_HEIGHT = 980.0, 580.0
ORIGIN_INSET = 140.0        # neutron sits this far in from the left wall
PROTON_OFFSET = 40.0        # proton drawn to the right of the neutron
NEUTRON_DRAW_R = 18.0
PROTON_DRAW_R = 14.0

# =========================
# Decay kinematics
# =========================
PARTICLE_SPEED = 260.0
ELECTRON_RADIUS = 8.0
ANTINU_RADIUS = 6.0
ANGLE_JITTER = 0.35         # radians either side of +x
EVENT_DURATION = 3.0        # simulated seconds before auto-respawn

# Trails
TRAIL_INTERVAL = 0.02       # simulated seconds between samples
TRAIL_MAX = 70

# =========================
# Controls
# =========================
BIAS_DEFAULT = 0.85
BIAS_MIN = 0.01
BIAS_MAX = 0.99
BIAS_STEP = 0.02
STEP_DT = 1.0 / 60.0

# =========================
# Teaching thresholds
# =========================
CLAIM_THRESHOLD = -0.2      # spin dot below this reads as "opposite"

# Hover radii
NEUTRON_HIT_R = 24.0
PROTON_HIT_R = 20.0
ELECTRON_HIT_R = 18.0
ANTINU_HIT_R = 16.0
ARROW_HIT_DIST = 8.0

# Swirl (orbital placeholder)
SWIRL_BASE_R = 22.0
SWIRL_R_PER_L = 10.0
SWIRL_HIT_BAND = 14.0
SWIRL_POINTS = 140
SWIRL_SPIN_RATE = 2.2

# Arrows
SPIN_ONLY_ARROW_LEN = 55.0
MOMENTUM_ARROW_LEN = 60.0
SPIN_ARROW_LEN = 48.0
SPIN_ARROW_OFFSET = 10.0
ARROW_HEAD = 10.0

# Trail alpha ramp (oldest -> newest)
TRAIL_ALPHA_MIN = 40
TRAIL_ALPHA_SPAN = 140


def make_rng(seed=None):
    """Build the shared random source; ``seed`` falls back to ``SEED``."""
    if seed is None:
        seed = SEED
    if seed == "":
        return np.random.default_rng()
    return np.random.default_rng(int(seed))
