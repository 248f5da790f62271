"""
Simulation state, event lifecycle and the discrete-input state machine.

The adapter turns raw key presses into ``Command`` values and feeds them to
``Controller.handle``; everything the loop mutates lives on ``ControlState``
or ``EventLifecycle``, so there is no module-level simulation state.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from decay_event import Mode, generate
from overlay import evaluate
from settings import BIAS_DEFAULT, BIAS_MAX, BIAS_MIN, BIAS_STEP, STEP_DT

logger = logging.getLogger(__name__)


class Command(Enum):
    SPIN_ONLY = auto()
    SPIN_AND_MOTION = auto()
    FULL_CONSERVATION = auto()
    NEW_DECAY = auto()
    BIAS_UP = auto()
    BIAS_DOWN = auto()
    TOGGLE_PAUSE = auto()
    STEP = auto()
    TOGGLE_HELP = auto()
    QUIT = auto()


MODE_COMMANDS = {
    Command.SPIN_ONLY: Mode.SPIN_ONLY,
    Command.SPIN_AND_MOTION: Mode.SPIN_AND_MOTION,
    Command.FULL_CONSERVATION: Mode.FULL_CONSERVATION,
}


def clamp(x, lo, hi):
    return lo if x < lo else (hi if x > hi else x)


@dataclass
class ControlState:
    mode: Mode = Mode.SPIN_ONLY
    left_hand_bias: float = BIAS_DEFAULT
    paused: bool = False
    step_once: bool = False
    show_help: bool = True
    t: float = 0.0

    def frame_dt(self, real_dt):
        """Simulated seconds for this frame: wall time, zero, or one fixed step."""
        if not self.paused:
            return real_dt
        if self.step_once:
            self.step_once = False
            return STEP_DT
        return 0.0


class EventLifecycle:
    """Owns the single live decay event and replaces it wholesale."""

    def __init__(self, origin, arena, rng, left_hand_bias=BIAS_DEFAULT, mode=Mode.SPIN_ONLY):
        self.origin = origin
        self.arena = arena
        self.rng = rng
        self.spawn_count = 0
        self.event = None
        self.respawn(left_hand_bias, mode)

    def respawn(self, left_hand_bias, mode):
        self.event = generate(self.origin, left_hand_bias, mode, self.rng)
        self.spawn_count += 1
        logger.debug("decay #%d: mode=%s bias=%.2f L_needed=%d",
                     self.spawn_count, Mode(mode).name, left_hand_bias,
                     self.event.orbital_deficit)
        return self.event

    def advance(self, dt, left_hand_bias, mode):
        """Age the event, respawn on expiry, then integrate. True if respawned."""
        if dt <= 0:
            return False
        respawned = False
        self.event.time_alive += dt
        if self.event.expired:
            self.respawn(left_hand_bias, mode)
            respawned = True
        for p in self.event.particles():
            p.update(dt, self.arena)
        return respawned


class Controller:
    def __init__(self, lifecycle, state=None):
        self.lifecycle = lifecycle
        self.state = state if state is not None else ControlState()
        self.running = True

    @property
    def event(self):
        return self.lifecycle.event

    def regenerate(self):
        return self.lifecycle.respawn(self.state.left_hand_bias, self.state.mode)

    def handle(self, command):
        state = self.state
        if command in MODE_COMMANDS:
            state.mode = MODE_COMMANDS[command]
            logger.info("mode -> %s", state.mode.name)
            self.regenerate()
        elif command is Command.NEW_DECAY:
            self.regenerate()
        elif command is Command.BIAS_UP:
            state.left_hand_bias = clamp(state.left_hand_bias + BIAS_STEP, BIAS_MIN, BIAS_MAX)
            logger.debug("left-hand bias %.2f", state.left_hand_bias)
            self.regenerate()
        elif command is Command.BIAS_DOWN:
            state.left_hand_bias = clamp(state.left_hand_bias - BIAS_STEP, BIAS_MIN, BIAS_MAX)
            logger.debug("left-hand bias %.2f", state.left_hand_bias)
            self.regenerate()
        elif command is Command.TOGGLE_PAUSE:
            state.paused = not state.paused
            logger.debug("paused=%s", state.paused)
        elif command is Command.STEP:
            # only meaningful while paused
            if state.paused:
                state.step_once = True
        elif command is Command.TOGGLE_HELP:
            state.show_help = not state.show_help
        elif command is Command.QUIT:
            self.running = False

    def tick(self, real_dt):
        """Advance one frame and return the fresh ``Readings``."""
        dt = self.state.frame_dt(real_dt)
        self.state.t += dt
        self.lifecycle.advance(dt, self.state.left_hand_bias, self.state.mode)
        return evaluate(self.lifecycle.event)
