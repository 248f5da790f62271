import logging
import sys

import pygame

from controls import Command, Controller, EventLifecycle
from hud import help_lines, hud_lines
from logging_setup import setup_logging
from overlay import build_arrows, resolve_tooltip, segments_for, swirl_points, swirl_spec
from particle import Arena
from settings import (ARENA_FILL, ARENA_HEIGHT, ARENA_LEFT, ARENA_OUTLINE, ARENA_TOP,
                      ARENA_WIDTH, ARROW_HEAD, BG_COLOR, CAPTION, FPS, HEIGHT,
                      NEUTRON_COLOR, NEUTRON_DRAW_R, ORIGIN_INSET, PANEL_FILL,
                      PANEL_OUTLINE, PROTON_COLOR, PROTON_DRAW_R, PROTON_OFFSET,
                      TEXT_COLOR, TOOLTIP_FILL, TOOLTIP_OUTLINE, TRAIL_ALPHA_MIN,
                      TRAIL_ALPHA_SPAN, WIDTH, make_rng)
from vecmath import vec

logger = logging.getLogger(__name__)

# =========================
# Input
# =========================
KEY_BINDINGS = {
    pygame.K_1: Command.SPIN_ONLY,
    pygame.K_2: Command.SPIN_AND_MOTION,
    pygame.K_3: Command.FULL_CONSERVATION,
    pygame.K_SPACE: Command.NEW_DECAY,
    pygame.K_UP: Command.BIAS_UP,
    pygame.K_DOWN: Command.BIAS_DOWN,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_n: Command.STEP,
    pygame.K_h: Command.TOGGLE_HELP,
    pygame.K_ESCAPE: Command.QUIT,
}

LABELS = {"e-": "Electron", "anti-nu": "Anti-neutrino"}


def commands_from_events(events):
    """Translate raw pygame events into core commands; unbound keys are dropped."""
    for event in events:
        if event.type == pygame.QUIT:
            yield Command.QUIT
        elif event.type == pygame.KEYDOWN:
            cmd = KEY_BINDINGS.get(event.key)
            if cmd is not None:
                yield cmd


def build_world(rng):
    arena = Arena(ARENA_LEFT, ARENA_TOP, ARENA_WIDTH, ARENA_HEIGHT)
    origin = vec(arena.left + ORIGIN_INSET, arena.centery)
    proton_pos = origin + vec(PROTON_OFFSET, 0.0)
    controller = Controller(EventLifecycle(origin, arena, rng))
    return arena, origin, proton_pos, controller


# =========================
# Drawing helpers
# =========================
def load_font(size):
    try:
        return pygame.font.SysFont("arial,dejavusans", size)
    except pygame.error as exc:
        logger.warning("no font available (%s); running without text", exc)
        return None


def ipt(p):
    return (int(p[0]), int(p[1]))


def draw_text(surface, text, x, y, font, color=TEXT_COLOR):
    surface.blit(font.render(text, True, color), (x, y))


def draw_lines_of_text(surface, lines, x, y, font, color=TEXT_COLOR):
    step = font.get_linesize()
    for i, line in enumerate(lines):
        if line:
            draw_text(surface, line, x, y + i * step, font, color)


def draw_label(surface, text, center, font):
    img = font.render(text, True, (245, 245, 245))
    surface.blit(img, img.get_rect(center=ipt(center)))


def draw_glow_circle(layer, center, r, color):
    for i in range(5, 0, -1):
        pygame.draw.circle(layer, (*color[:3], 18 * i), ipt(center), int(r + i * 6))
    pygame.draw.circle(layer, color[:3], ipt(center), int(r))


def draw_trail(layer, particle):
    pts = list(particle.trail)
    if len(pts) < 2:
        return
    n = len(pts) - 1
    for i in range(n):
        t = (i + 1) / n
        col = (*particle.color[:3], int(TRAIL_ALPHA_MIN + TRAIL_ALPHA_SPAN * t))
        pygame.draw.line(layer, col, ipt(pts[i]), ipt(pts[i + 1]), 2)


def draw_arrow(layer, arrow):
    to = arrow.tip
    h1, h2 = arrow.head(ARROW_HEAD)
    pygame.draw.line(layer, arrow.color, ipt(arrow.origin), ipt(to), 2)
    pygame.draw.line(layer, arrow.color, ipt(to), ipt(h1), 2)
    pygame.draw.line(layer, arrow.color, ipt(to), ipt(h2), 2)


def draw_swirl(layer, spec):
    pts = [ipt(p) for p in swirl_points(spec)]
    pygame.draw.lines(layer, spec.color, False, pts, 2)


def draw_panel(surface, rect, fill=PANEL_FILL, outline=PANEL_OUTLINE):
    panel = pygame.Surface(rect.size, pygame.SRCALPHA)
    panel.fill(fill)
    pygame.draw.rect(panel, outline, panel.get_rect(), 1)
    surface.blit(panel, rect.topleft)


def draw_tooltip_box(surface, tip, title_font, body_font):
    pad = 10
    body = tip.body.split("\n")
    w = max([title_font.size(tip.title)[0]] + [body_font.size(s)[0] for s in body]) + pad * 2
    h = title_font.get_linesize() + body_font.get_linesize() * len(body) + pad * 3

    x, y = tip.pos[0] + 16, tip.pos[1] + 16
    # keep the box inside the window
    x = max(10, min(x, WIDTH - 20 - w))
    y = max(10, min(y, HEIGHT - 20 - h))

    rect = pygame.Rect(int(x), int(y), int(w), int(h))
    draw_panel(surface, rect, TOOLTIP_FILL, TOOLTIP_OUTLINE)
    draw_text(surface, tip.title, rect.x + pad, rect.y + pad, title_font, (240, 240, 240))
    draw_lines_of_text(surface, body, rect.x + pad, rect.y + pad * 2 + title_font.get_linesize(),
                       body_font, (220, 220, 220))


# =========================
# Main
# =========================
def main():
    setup_logging()
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(CAPTION)
    clock = pygame.time.Clock()

    font = load_font(16)
    label_font = load_font(14)
    has_font = font is not None and label_font is not None

    # translucent layer for glows, trails, arrows and the swirl
    layer = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)

    arena, origin, proton_pos, controller = build_world(make_rng())
    state = controller.state
    arena_rect = pygame.Rect(int(arena.left), int(arena.top), int(arena.width), int(arena.height))
    logger.info("started: %dx%d @ %d fps, mode %s", WIDTH, HEIGHT, FPS, state.mode.name)

    while controller.running:
        real_dt = clock.tick(FPS) / 1000.0

        # ---- input (drain everything before physics)
        for cmd in commands_from_events(pygame.event.get()):
            controller.handle(cmd)
        if not controller.running:
            break

        # ---- simulate
        readings = controller.tick(real_dt)
        event = controller.event
        mouse = vec(*pygame.mouse.get_pos())

        arrows = []
        for p in event.particles():
            arrows.extend(build_arrows(p, state.mode))
        segments = segments_for(arrows)
        swirl = swirl_spec(origin, event, state.mode, state.t)
        tip = resolve_tooltip(mouse, origin, proton_pos, event, state.mode, segments)

        # ---- draw
        screen.fill(BG_COLOR)
        pygame.draw.rect(screen, ARENA_FILL, arena_rect)
        pygame.draw.rect(screen, ARENA_OUTLINE, arena_rect, 2)

        layer.fill((0, 0, 0, 0))
        draw_glow_circle(layer, origin, NEUTRON_DRAW_R, NEUTRON_COLOR)
        draw_glow_circle(layer, proton_pos, PROTON_DRAW_R, PROTON_COLOR)
        if swirl is not None:
            draw_swirl(layer, swirl)
        for p in event.particles():
            draw_trail(layer, p)
        for p in event.particles():
            draw_glow_circle(layer, p.pos, p.radius, p.color)
        for a in arrows:
            draw_arrow(layer, a)
        screen.blit(layer, (0, 0))

        if has_font:
            draw_label(screen, "Neutron", origin + vec(0, -30), label_font)
            draw_label(screen, "Proton", proton_pos + vec(0, -26), label_font)
            for p in event.particles():
                draw_label(screen, LABELS.get(p.name, p.name), p.pos + vec(0, -22), label_font)

            top = pygame.Rect(arena_rect.x + 10, arena_rect.y + 10, arena_rect.w - 20, 140)
            draw_panel(screen, top)
            draw_lines_of_text(screen, hud_lines(state, readings), top.x + 10, top.y + 8, font)

            if state.show_help:
                bottom = pygame.Rect(arena_rect.x + 10, arena_rect.bottom - 120, arena_rect.w - 20, 110)
                draw_panel(screen, bottom)
                draw_lines_of_text(screen, help_lines(state, event, readings),
                                   bottom.x + 10, bottom.y + 8, font)

            # tooltip last, on top of everything
            if tip is not None:
                draw_tooltip_box(screen, tip, font, label_font)

        pygame.display.flip()

    logger.info("shutting down (mode %s, %d decays shown)", state.mode.name,
                controller.lifecycle.spawn_count)
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
