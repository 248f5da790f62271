import numpy as np
import pytest

from conftest import FixedRng
from decay_event import Mode, generate
from overlay import (TOOLTIP_TEXT, AnnotatedSegment, SegmentKind, TooltipKind, build_arrows,
                     evaluate, helicity, resolve_tooltip, segments_for, swirl_points,
                     swirl_radius, swirl_spec)
from particle import Particle
from vecmath import length, vec

NEUTRON = vec(200.0, 350.0)
PROTON = vec(240.0, 350.0)


def make_event(mode=Mode.FULL_CONSERVATION, rng=None):
    rng = rng or FixedRng(angle=0.0, u01=0.0, proton_bit=1)
    return generate(NEUTRON, 0.85, mode, rng)


def place(ev, e_pos, nu_pos):
    ev.electron.pos = vec(*e_pos)
    ev.antineutrino.pos = vec(*nu_pos)
    return ev


class TestReadings:
    def test_spin_only_claim_true(self, rng, origin):
        r = evaluate(generate(origin, 0.85, Mode.SPIN_ONLY, rng))
        assert r.spin_dot == pytest.approx(-1.0)
        assert r.claim_looks_true

    def test_right_handed_electron_keeps_spins_opposed(self, origin):
        ev = generate(origin, 0.5, Mode.SPIN_AND_MOTION, FixedRng(angle=0.0, u01=0.9))
        r = evaluate(ev)
        # e- spin along +x, anti-nu spin along -x: still opposite
        assert r.electron_helicity == 1
        assert r.antineutrino_helicity == 1
        assert r.claim_looks_true

    def test_left_handed_electron_aligns_spins(self, origin):
        ev = generate(origin, 0.5, Mode.SPIN_AND_MOTION, FixedRng(angle=0.0, u01=0.0))
        r = evaluate(ev)
        assert r.electron_helicity == -1
        assert r.spin_dot == pytest.approx(1.0)
        assert not r.claim_looks_true

    def test_threshold_band(self, origin):
        ev = make_event()
        ev.electron.spin = vec(1.0, 0.0)
        ev.antineutrino.spin = vec(-0.1, 1.0)
        assert not evaluate(ev).claim_looks_true
        assert evaluate(ev, threshold=0.0).claim_looks_true

    def test_helicity_zero_counts_positive(self):
        p = Particle("e-", (0, 0), (1.0, 0.0), (0.0, 1.0), 8, (0, 0, 0))
        assert helicity(p) == 1
        p.vel = vec(0.0, 0.0)
        assert helicity(p) == 1


class TestArrows:
    def test_spin_only_emits_one_spin_arrow(self):
        ev = make_event(Mode.SPIN_ONLY)
        arrows = build_arrows(ev.electron, Mode.SPIN_ONLY)
        assert [a.kind for a in arrows] == [SegmentKind.SPIN]
        assert arrows[0].length == 55.0
        assert np.array_equal(arrows[0].origin, ev.electron.pos)

    @pytest.mark.parametrize("mode", [Mode.SPIN_AND_MOTION, Mode.FULL_CONSERVATION])
    def test_motion_modes_emit_momentum_and_offset_spin(self, mode):
        ev = make_event(mode)
        mom, spin = build_arrows(ev.electron, mode)
        assert mom.kind is SegmentKind.MOMENTUM and mom.length == 60.0
        assert spin.kind is SegmentKind.SPIN and spin.length == 48.0
        # electron moves along +x, so the spin arrow sits 10 units along +y
        assert spin.origin == pytest.approx(ev.electron.pos + vec(0.0, 10.0))

    def test_segments_match_arrows(self):
        ev = make_event()
        arrows = build_arrows(ev.antineutrino, Mode.FULL_CONSERVATION)
        segs = segments_for(arrows)
        assert [s.kind for s in segs] == [a.kind for a in arrows]
        assert segs[0].end == pytest.approx(arrows[0].origin + arrows[0].direction * 60.0)

    def test_arrow_head_is_symmetric(self):
        ev = make_event()
        arrow = build_arrows(ev.electron, Mode.SPIN_AND_MOTION)[0]
        h1, h2 = arrow.head(10.0)
        assert length(h1 - arrow.tip) == pytest.approx(length(h2 - arrow.tip))
        assert (h1 + h2) / 2 == pytest.approx(arrow.tip - arrow.direction * 10.0)


class TestSwirl:
    def test_hidden_outside_mode_three(self):
        ev = make_event(Mode.SPIN_AND_MOTION)
        ev.orbital_deficit = 2
        assert swirl_spec(NEUTRON, ev, Mode.SPIN_AND_MOTION, 1.0) is None

    def test_hidden_when_balanced(self):
        ev = make_event()
        ev.orbital_deficit = 0
        assert swirl_spec(NEUTRON, ev, Mode.FULL_CONSERVATION, 1.0) is None

    def test_parameters(self):
        ev = make_event()
        ev.orbital_deficit = -2
        spec = swirl_spec(NEUTRON, ev, Mode.FULL_CONSERVATION, 1.0)
        assert spec.radius == 42.0
        assert spec.turns == 3.0
        assert spec.phase == pytest.approx(-2.2)
        assert spec.color == (230, 120, 120, 80)

    def test_points_stay_near_radius(self):
        ev = make_event()
        ev.orbital_deficit = 2
        spec = swirl_spec(NEUTRON, ev, Mode.FULL_CONSERVATION, 0.5)
        pts = swirl_points(spec, points=140)
        assert pts.shape == (141, 2)
        r = np.hypot(pts[:, 0] - NEUTRON[0], pts[:, 1] - NEUTRON[1])
        assert r.min() >= spec.radius - 5.0 - 1e-9
        assert r.max() <= spec.radius + 5.0 + 1e-9


class TestResolveTooltip:
    def far_event(self, mode=Mode.FULL_CONSERVATION):
        return place(make_event(mode), (700.0, 200.0), (900.0, 500.0))

    def test_nothing_under_pointer(self):
        ev = self.far_event()
        assert resolve_tooltip(vec(500.0, 600.0), NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, []) is None

    def test_bodies(self):
        ev = self.far_event()
        cases = [
            (NEUTRON + vec(23.0, 0.0), TooltipKind.NEUTRON),
            (PROTON + vec(15.0, 0.0), TooltipKind.PROTON),
            (vec(700.0, 217.0), TooltipKind.ELECTRON),
            (vec(900.0, 515.0), TooltipKind.ANTINEUTRINO),
        ]
        for mouse, kind in cases:
            tip = resolve_tooltip(mouse, NEUTRON, PROTON, ev, Mode.SPIN_AND_MOTION, [])
            assert tip.kind is kind
            assert (tip.title, tip.body) == TOOLTIP_TEXT[kind]
            assert tip.pos == (mouse[0], mouse[1])

    def test_neutron_beats_proton_where_they_overlap(self):
        ev = self.far_event()
        mouse = NEUTRON + vec(20.0, 0.0)  # also within 20 of the proton
        tip = resolve_tooltip(mouse, NEUTRON, PROTON, ev, Mode.SPIN_ONLY, [])
        assert tip.kind is TooltipKind.NEUTRON

    def test_neutron_beats_momentum_arrow(self):
        ev = self.far_event()
        seg = AnnotatedSegment(NEUTRON - vec(50.0, 0.0), NEUTRON + vec(50.0, 0.0), SegmentKind.MOMENTUM)
        tip = resolve_tooltip(NEUTRON + vec(0.0, 2.0), NEUTRON, PROTON, ev, Mode.SPIN_AND_MOTION, [seg])
        assert tip.kind is TooltipKind.NEUTRON

    def test_swirl_ring_only_in_mode_three(self):
        ev = self.far_event()
        ev.orbital_deficit = 2
        on_ring = NEUTRON + vec(0.0, -swirl_radius(2))
        tip = resolve_tooltip(on_ring, NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, [])
        assert tip.kind is TooltipKind.SWIRL
        assert resolve_tooltip(on_ring, NEUTRON, PROTON, ev, Mode.SPIN_AND_MOTION, []) is None

    def test_swirl_is_a_band_not_a_disc(self):
        ev = self.far_event()
        ev.orbital_deficit = 4  # ring radius 62
        inside = NEUTRON + vec(0.0, -30.0)
        assert resolve_tooltip(inside, NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, []) is None
        edge = NEUTRON + vec(0.0, -(62.0 + 13.5))
        assert resolve_tooltip(edge, NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, []).kind is TooltipKind.SWIRL
        past = NEUTRON + vec(0.0, -(62.0 + 14.5))
        assert resolve_tooltip(past, NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, []) is None

    def test_swirl_beats_arrows(self):
        ev = self.far_event()
        ev.orbital_deficit = 2
        on_ring = NEUTRON + vec(0.0, -42.0)
        seg = AnnotatedSegment(on_ring - vec(30.0, 0.0), on_ring + vec(30.0, 0.0), SegmentKind.SPIN)
        tip = resolve_tooltip(on_ring, NEUTRON, PROTON, ev, Mode.FULL_CONSERVATION, [seg])
        assert tip.kind is TooltipKind.SWIRL

    def test_first_segment_in_drawing_order_wins(self):
        ev = self.far_event()
        a = AnnotatedSegment(vec(400.0, 100.0), vec(460.0, 100.0), SegmentKind.MOMENTUM)
        b = AnnotatedSegment(vec(400.0, 104.0), vec(460.0, 104.0), SegmentKind.SPIN)
        mouse = vec(430.0, 103.0)
        assert resolve_tooltip(mouse, NEUTRON, PROTON, ev, Mode.SPIN_AND_MOTION, [a, b]).kind is TooltipKind.MOMENTUM
        assert resolve_tooltip(mouse, NEUTRON, PROTON, ev, Mode.SPIN_AND_MOTION, [b, a]).kind is TooltipKind.SPIN

    def test_segment_band_is_strict(self):
        ev = self.far_event()
        seg = AnnotatedSegment(vec(400.0, 100.0), vec(460.0, 100.0), SegmentKind.SPIN)
        assert resolve_tooltip(vec(430.0, 108.0), NEUTRON, PROTON, ev, Mode.SPIN_ONLY, [seg]) is None
        assert resolve_tooltip(vec(430.0, 107.9), NEUTRON, PROTON, ev, Mode.SPIN_ONLY, [seg]).kind is TooltipKind.SPIN

    def test_every_kind_has_text(self):
        for kind in TooltipKind:
            title, body = TOOLTIP_TEXT[kind]
            assert title and body
