"""
Per-frame teaching overlay: readings, arrows, the orbital swirl and hover tips.

Nothing here is cached between frames. The loop calls ``evaluate``,
``build_arrows``/``segments_for`` and ``resolve_tooltip`` every frame and
throws the results away afterwards.
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from decay_event import policy_for
from settings import (ANTINU_HIT_R, ARROW_HEAD, ARROW_HIT_DIST, CLAIM_THRESHOLD,
                      ELECTRON_HIT_R, MOMENTUM_ARROW_COLOR, MOMENTUM_ARROW_LEN,
                      NEUTRON_HIT_R, PROTON_HIT_R, SPIN_ARROW_COLOR, SPIN_ARROW_OFFSET,
                      SPIN_ONLY_ARROW_COLOR, SWIRL_BASE_R, SWIRL_HIT_BAND, SWIRL_POINTS,
                      SWIRL_R_PER_L, SWIRL_SPIN_RATE)
from vecmath import dist2, dot, length, normalize, perpendicular, point_segment_distance, sign


# =========================
# Readings
# =========================
class Readings(NamedTuple):
    spin_dot: float
    claim_looks_true: bool
    electron_helicity: int
    antineutrino_helicity: int


def helicity(particle):
    """sign(spin . momentum); +1 right-handed, -1 left-handed."""
    return sign(dot(normalize(particle.spin), normalize(particle.vel)))


def evaluate(event, threshold=CLAIM_THRESHOLD):
    # claim under test: "the neutrino spins opposite the electron"
    spin_dot = dot(normalize(event.electron.spin), normalize(event.antineutrino.spin))
    return Readings(
        spin_dot=spin_dot,
        claim_looks_true=spin_dot < threshold,
        electron_helicity=helicity(event.electron),
        antineutrino_helicity=helicity(event.antineutrino),
    )


# =========================
# Arrows & hit segments
# =========================
class SegmentKind(Enum):
    MOMENTUM = auto()
    SPIN = auto()


class AnnotatedSegment(NamedTuple):
    start: np.ndarray
    end: np.ndarray
    kind: SegmentKind


@dataclass
class Arrow:
    origin: np.ndarray
    direction: np.ndarray
    length: float
    color: Tuple[int, ...]
    kind: SegmentKind

    @property
    def tip(self):
        return self.origin + self.direction * self.length

    def head(self, size=ARROW_HEAD):
        """The two barb end points of the arrow head."""
        to = self.tip
        side = perpendicular(self.direction) * (size * 0.55)
        back = to - self.direction * size
        return back + side, back - side

    def segment(self):
        return AnnotatedSegment(self.origin.copy(), self.tip, self.kind)


def build_arrows(particle, mode) -> List[Arrow]:
    policy = policy_for(mode)
    mom_dir = normalize(particle.vel)
    spin_dir = normalize(particle.spin)

    if not policy.show_momentum:
        return [Arrow(particle.pos.copy(), spin_dir, policy.spin_arrow_len,
                      SPIN_ONLY_ARROW_COLOR, SegmentKind.SPIN)]

    # spin arrow nudged sideways so it never hides the momentum arrow
    offset = perpendicular(mom_dir) * SPIN_ARROW_OFFSET
    return [
        Arrow(particle.pos.copy(), mom_dir, MOMENTUM_ARROW_LEN,
              MOMENTUM_ARROW_COLOR, SegmentKind.MOMENTUM),
        Arrow(particle.pos + offset, spin_dir, policy.spin_arrow_len,
              SPIN_ARROW_COLOR, SegmentKind.SPIN),
    ]


def segments_for(arrows):
    return [a.segment() for a in arrows]


# =========================
# Orbital swirl
# =========================
class SwirlSpec(NamedTuple):
    center: np.ndarray
    radius: float
    turns: float
    color: Tuple[int, int, int, int]
    phase: float


def swirl_radius(orbital_deficit):
    return SWIRL_BASE_R + SWIRL_R_PER_L * abs(orbital_deficit)


def swirl_spec(center, event, mode, t) -> Optional[SwirlSpec]:
    """Swirl parameters, or None when the mode hides it or spins already balance."""
    L = event.orbital_deficit
    if not policy_for(mode).show_swirl or L == 0:
        return None
    mag = abs(L)
    return SwirlSpec(
        center=np.asarray(center, dtype=float),
        radius=swirl_radius(L),
        turns=2.0 + 0.5 * mag,
        color=(230, 120, 120, min(255, 40 + mag * 20)),
        phase=t * SWIRL_SPIN_RATE * (1.0 if L > 0 else -1.0),
    )


def swirl_points(spec, points=SWIRL_POINTS):
    """Polyline (points+1, 2) for a wobbling spiral around ``spec.center``."""
    a = np.linspace(0.0, 2.0 * math.pi * spec.turns, points + 1) + spec.phase
    rr = spec.radius + np.sin(a * 1.2) * 5.0
    xs = spec.center[0] + np.cos(a) * rr
    ys = spec.center[1] + np.sin(a) * rr
    return np.column_stack((xs, ys))


# =========================
# Tooltips
# =========================
class TooltipKind(Enum):
    NEUTRON = auto()
    PROTON = auto()
    ELECTRON = auto()
    ANTINEUTRINO = auto()
    SWIRL = auto()
    MOMENTUM = auto()
    SPIN = auto()


TOOLTIP_TEXT = {
    TooltipKind.NEUTRON: (
        "Neutron",
        "This is the neutron before it breaks.\n\n"
        "Think of it like:\n"
        "  - One heavy ball\n"
        "  - Sitting still\n"
        "  - About to split\n\n"
        "It does nothing else here except exist as the starting point.\n"
        "It does not move because we are not teaching neutron motion,\n"
        "only what comes out of it.",
    ),
    TooltipKind.PROTON: (
        "Proton",
        "This is the proton after the break.\n\n"
        "Think:\n"
        "  - Neutron turns into a proton\n"
        "  - Proton is heavy\n"
        "  - So it barely moves\n\n"
        "In real life it can move, but we keep it still so it doesn't distract you.\n"
        "Red means: the heavy leftover.",
    ),
    TooltipKind.ELECTRON: (
        "Electron (e-)",
        "This is the electron.\n\n"
        "Think:\n"
        "  - A tiny piece that shoots out fast\n"
        "  - Light\n"
        "  - Easy to move\n\n"
        "The yellow glow just helps your eyes track it.",
    ),
    TooltipKind.ANTINEUTRINO: (
        "Anti-neutrino",
        "This is the anti-neutrino.\n\n"
        "Think:\n"
        "  - Even tinier than the electron\n"
        "  - Almost invisible in real life\n"
        "  - Flies off very fast\n\n"
        "It usually goes roughly the opposite way from the electron.",
    ),
    TooltipKind.SWIRL: (
        "Swirl (extra angular momentum)",
        "This swirl means:\n"
        "\"Something is missing if you only count spins.\"\n\n"
        "When the spins do not add up, motion must carry the extra turning.\n"
        "No swirl: spins alone work.\n"
        "Swirl: spins alone do not work.",
    ),
    TooltipKind.MOMENTUM: (
        "Momentum arrow",
        "This arrow means:\n"
        "\"Which way is this thing moving?\"",
    ),
    TooltipKind.SPIN: (
        "Spin arrow",
        "This arrow means:\n"
        "\"Which way is this thing spinning?\"\n\n"
        "This is the important one for the misconception.",
    ),
}

SEGMENT_TOOLTIPS = {
    SegmentKind.MOMENTUM: TooltipKind.MOMENTUM,
    SegmentKind.SPIN: TooltipKind.SPIN,
}


class Tooltip(NamedTuple):
    kind: TooltipKind
    title: str
    body: str
    pos: Tuple[float, float]


def make_tooltip(kind, mouse):
    title, body = TOOLTIP_TEXT[kind]
    return Tooltip(kind, title, body, (float(mouse[0]), float(mouse[1])))


def hit_circle(mouse, center, r):
    return dist2(mouse, center) <= r * r


def resolve_tooltip(mouse, neutron_pos, proton_pos, event, mode, segments) -> Optional[Tooltip]:
    """
    Pick the single element under the pointer, first match wins:
    neutron, proton, electron, anti-nu, swirl ring (Mode 3), then arrows
    in drawing order.
    """
    circles = (
        (neutron_pos, NEUTRON_HIT_R, TooltipKind.NEUTRON),
        (proton_pos, PROTON_HIT_R, TooltipKind.PROTON),
        (event.electron.pos, ELECTRON_HIT_R, TooltipKind.ELECTRON),
        (event.antineutrino.pos, ANTINU_HIT_R, TooltipKind.ANTINEUTRINO),
    )
    for center, r, kind in circles:
        if hit_circle(mouse, center, r):
            return make_tooltip(kind, mouse)

    if policy_for(mode).show_swirl:
        # thin ring around the neutron, not a filled disc
        d = length(np.asarray(mouse, dtype=float) - np.asarray(neutron_pos, dtype=float))
        if abs(d - swirl_radius(event.orbital_deficit)) < SWIRL_HIT_BAND:
            return make_tooltip(TooltipKind.SWIRL, mouse)

    for seg in segments:
        if point_segment_distance(mouse, seg.start, seg.end) < ARROW_HIT_DIST:
            return make_tooltip(SEGMENT_TOOLTIPS[seg.kind], mouse)

    return None
