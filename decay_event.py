"""
Toy beta-minus decay events: n -> p + e- + anti-nu.

Each event owns an electron and an anti-neutrino flying back to back from
the neutron. The proton and neutron are not modelled beyond a spin label.
``orbital_deficit`` is the integer the spin labels fail to balance, i.e.
the share that would have to come from orbital motion.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from particle import Particle
from settings import (ANGLE_JITTER, ANTINU_COLOR, ANTINU_RADIUS, ELECTRON_COLOR,
                      ELECTRON_RADIUS, EVENT_DURATION, PARTICLE_SPEED,
                      SPIN_ARROW_LEN, SPIN_ONLY_ARROW_LEN)
from vecmath import normalize, sign, vec


class Mode(IntEnum):
    SPIN_ONLY = 1           # "spins always cancel" shortcut
    SPIN_AND_MOTION = 2     # momentum + helicity
    FULL_CONSERVATION = 3   # orbital placeholder shown


@dataclass(frozen=True)
class ModePolicy:
    title: str
    force_spin_opposition: bool
    show_momentum: bool
    show_swirl: bool
    spin_arrow_len: float
    seeing: str


MODE_POLICIES = {
    Mode.SPIN_ONLY: ModePolicy(
        title="MODE 1: Spin only (textbook shortcut)",
        force_spin_opposition=True,
        show_momentum=False,
        show_swirl=False,
        spin_arrow_len=SPIN_ONLY_ARROW_LEN,
        seeing="What you are seeing: ONLY spin arrows. Motion is hidden, so the shortcut seems valid.",
    ),
    Mode.SPIN_AND_MOTION: ModePolicy(
        title="MODE 2: Add motion (helicity appears)",
        force_spin_opposition=False,
        show_momentum=True,
        show_swirl=False,
        spin_arrow_len=SPIN_ARROW_LEN,
        seeing="What you are seeing: momentum (gray) and spin (white). Helicity depends on BOTH.",
    ),
    Mode.FULL_CONSERVATION: ModePolicy(
        title="MODE 3: Full conservation (orbital placeholder shown)",
        force_spin_opposition=False,
        show_momentum=True,
        show_swirl=True,
        spin_arrow_len=SPIN_ARROW_LEN,
        seeing=("What you are seeing: when spins do not balance, the swirl indicates "
                "extra angular momentum from motion."),
    ),
}


def policy_for(mode):
    return MODE_POLICIES[Mode(mode)]


def orbital_deficit(neutron_sign, proton_sign, electron_spin, antinu_spin):
    """L_needed = s_n - (s_p + sign(e.y) + sign(nu.y))."""
    s_e = sign(electron_spin[1])
    s_nu = sign(antinu_spin[1])
    return neutron_sign - (proton_sign + s_e + s_nu)


class DecayEvent:
    __slots__ = ("electron", "antineutrino", "proton_spin_sign", "neutron_spin_sign",
                 "orbital_deficit", "time_alive", "duration")

    def __init__(self, electron, antineutrino, proton_spin_sign, neutron_spin_sign=1,
                 duration=EVENT_DURATION):
        self.electron = electron
        self.antineutrino = antineutrino
        self.proton_spin_sign = int(proton_spin_sign)
        self.neutron_spin_sign = int(neutron_spin_sign)
        # fixed for the event's lifetime
        self.orbital_deficit = orbital_deficit(self.neutron_spin_sign, self.proton_spin_sign,
                                               electron.spin, antineutrino.spin)
        self.time_alive = 0.0
        self.duration = float(duration)

    @property
    def expired(self):
        return self.time_alive >= self.duration

    def particles(self):
        return (self.electron, self.antineutrino)


def generate(origin, left_hand_bias, mode, rng):
    """
    Build a fresh event at ``origin``.

    All randomness comes from ``rng`` (a ``numpy.random.Generator`` or
    anything with ``uniform``/``random``/``integers``): the angular jitter,
    the electron handedness draw and the proton spin label.
    """
    policy = policy_for(mode)

    # mostly rightward electron, anti-nu exactly opposite
    a = float(rng.uniform(-ANGLE_JITTER, ANGLE_JITTER))
    dir_e = normalize(vec(math.cos(a), math.sin(a)))
    dir_nu = -dir_e

    left_handed = float(rng.random()) < left_hand_bias
    spin_e = -dir_e if left_handed else dir_e.copy()
    # anti-nu is right-handed by construction
    spin_nu = dir_nu.copy()

    proton_sign = 1 if int(rng.integers(0, 2)) else -1

    if policy.force_spin_opposition:
        # Mode 1 shows perfectly opposed spins whatever the helicities were
        spin_nu = -spin_e

    electron = Particle("e-", origin, dir_e * PARTICLE_SPEED, spin_e,
                        ELECTRON_RADIUS, ELECTRON_COLOR)
    antineutrino = Particle("anti-nu", origin, dir_nu * PARTICLE_SPEED, spin_nu,
                            ANTINU_RADIUS, ANTINU_COLOR)
    return DecayEvent(electron, antineutrino, proton_sign)
