"""
Frame Rendering
================
Draws a simulation Snapshot: entities on the braille canvas, HUD and
overlay boxes as text.
"""

from .engine import (
    GameRenderer,
    NEON_CYAN, NEON_YELLOW, NEON_ORANGE, NEON_RED,
    GRAY_LIGHT, GRAY_MED, GRAY_DARK, WHITE
)
from .snapshot import Snapshot


MESSAGE_POINTS = 'points'
MESSAGE_PAUSE = 'Paused'
MESSAGE_PAUSE_INSTRUCTIONS = 'Press P to continue'
MESSAGE_GAME_OVER = 'Game Over'
MESSAGE_GAME_OVER_INSTRUCTIONS = 'Press ENTER to start a new game'
MESSAGE_CONTROLS = 'A/D: Turn  W: Thrust  SPACE: Shoot  P: Pause  Q: Quit'

# Asteroid outline colour per damage band
DAMAGE_BAND_COLORS = (WHITE, NEON_YELLOW, NEON_ORANGE, NEON_RED)

ALERT_WIDTH = 40
ALERT_HEIGHT = 7


def particle_color(alpha: float, dimmed: bool = False) -> int:
    """Fade particles through the gray ramp as they lose alpha."""
    if dimmed:
        alpha *= 0.5
    if alpha > 0.6:
        return WHITE
    if alpha > 0.3:
        return GRAY_LIGHT
    if alpha > 0.15:
        return GRAY_MED
    return GRAY_DARK


def render_entities(renderer: GameRenderer, snap: Snapshot):
    """Draw particles, projectiles, asteroids and the ship."""
    dimmed = snap.game_over

    for particle in snap.particles:
        color = particle_color(particle.alpha, dimmed)
        renderer.disc(particle.x, particle.y, particle.radius, color)

    for projectile in snap.projectiles:
        renderer.disc(projectile.x, projectile.y, projectile.radius,
                      GRAY_MED if dimmed else WHITE)

    for asteroid in snap.asteroids:
        color = DAMAGE_BAND_COLORS[min(asteroid.damage_band, len(DAMAGE_BAND_COLORS) - 1)]
        if dimmed:
            color = GRAY_DARK
        renderer.circle(asteroid.x, asteroid.y, asteroid.visible_radius, color)

    ship = snap.ship
    if ship is not None and not ship.wrecked:
        renderer.disc(ship.x, ship.y, ship.core_radius, WHITE)
        renderer.polygon(ship.hull, NEON_CYAN if ship.thrusting else WHITE)


def render_hud(renderer: GameRenderer, snap: Snapshot):
    """Score and lives on the top row, control hints on the bottom row."""
    renderer.text(2, 0, f'{snap.score} {MESSAGE_POINTS}', WHITE)
    lives_text = f'LIVES:{snap.lives}'
    renderer.text(renderer.width - len(lives_text) - 2, 0, lives_text, GRAY_MED)

    if renderer.show_fps:
        fps_text = f'FPS:{renderer.current_fps:.0f}'
        renderer.centered_text(0, fps_text, GRAY_MED)

    renderer.centered_text(renderer.height - 1, MESSAGE_CONTROLS, GRAY_DARK)


def render_alert(renderer: GameRenderer, text: str, subtext: str = '',
                 color: int = WHITE):
    """Centered box with a headline and an optional second line."""
    width = min(ALERT_WIDTH, renderer.width)
    height = min(ALERT_HEIGHT, renderer.height)
    x = renderer.width // 2 - width // 2
    y = renderer.height // 2 - height // 2

    renderer.draw_box(x, y, width, height, GRAY_LIGHT)
    renderer.centered_text(y + height // 2 - 1, text, color)
    if subtext:
        renderer.centered_text(y + height // 2 + 1, subtext, GRAY_MED)


def render_frame(renderer: GameRenderer, snap: Snapshot) -> str:
    """Render one snapshot and return the terminal output for it."""
    renderer.begin_frame()

    render_entities(renderer, snap)
    render_hud(renderer, snap)

    if snap.game_over:
        render_alert(renderer, MESSAGE_GAME_OVER.upper(),
                     MESSAGE_GAME_OVER_INSTRUCTIONS, NEON_RED)
    elif snap.paused:
        render_alert(renderer, MESSAGE_PAUSE.upper(),
                     MESSAGE_PAUSE_INSTRUCTIONS, NEON_YELLOW)

    return renderer.end_frame()
