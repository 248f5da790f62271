from collections import deque
from typing import NamedTuple

import numpy as np

from settings import TRAIL_INTERVAL, TRAIL_MAX
from vecmath import normalize


class Arena(NamedTuple):
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    @property
    def centery(self):
        return self.top + self.height * 0.5


class Particle:
    """A moving point body: kinematics, fixed spin axis and a sampled trail."""

    __slots__ = ("name", "pos", "vel", "spin", "radius", "color", "trail", "trail_timer")

    def __init__(self, name, pos, vel, spin, radius, color):
        self.name = name
        self.pos = np.array(pos, dtype=float)
        self.vel = np.array(vel, dtype=float)
        self.spin = normalize(spin)
        self.radius = float(radius)
        self.color = color
        self.trail = deque(maxlen=TRAIL_MAX)
        self.trail_timer = 0.0

    def update(self, dt, arena):
        if dt <= 0:
            return

        self.pos += self.vel * dt

        # time-gated sampling keeps trail density independent of FPS
        self.trail_timer += dt
        if self.trail_timer >= TRAIL_INTERVAL:
            self.trail_timer = 0.0
            self.trail.append(self.pos.copy())

        # elastic walls, each axis on its own
        r = self.radius
        if self.pos[0] < arena.left + r:
            self.pos[0] = arena.left + r
            self.vel[0] = -self.vel[0]
        if self.pos[0] > arena.right - r:
            self.pos[0] = arena.right - r
            self.vel[0] = -self.vel[0]
        if self.pos[1] < arena.top + r:
            self.pos[1] = arena.top + r
            self.vel[1] = -self.vel[1]
        if self.pos[1] > arena.bottom - r:
            self.pos[1] = arena.bottom - r
            self.vel[1] = -self.vel[1]

        self.spin = normalize(self.spin)
