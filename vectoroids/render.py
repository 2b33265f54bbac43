import math

import pygame

from .settings import COLORS


def to_screen(position, points, angle=0.0):
    degrees = math.degrees(angle)
    result = []
    for point in points:
        vec = pygame.Vector2(point).rotate(degrees)
        result.append((position.x + vec.x, position.y + vec.y))
    return result


def draw_vector_shape(surface, position, points, color, angle=0.0, closed=True, width=2):
    pygame.draw.lines(surface, color, closed, to_screen(position, points, angle), width)


def ship_blink_visible(ship, ticks):
    if not ship.invulnerable:
        return True
    return math.sin(ticks / 50) > 0


def draw_fragments(surface, ship, color):
    for fragment in ship.fragments:
        if len(fragment.points) >= 2:
            draw_vector_shape(surface, ship.position, fragment.points, color, closed=False)


def draw_ship(surface, ship, ticks, color=COLORS["ship"]):
    if not ship.visible:
        return
    if ship.disintegrating:
        draw_fragments(surface, ship, color)
        return
    if not ship_blink_visible(ship, ticks):
        return
    draw_vector_shape(surface, ship.position, ship.outline(), color, ship.angle)
    if ship.thrust_active:
        draw_vector_shape(surface, ship.position, ship.thruster_outline(), COLORS["thrust"], ship.angle, closed=False)


def draw_asteroid(surface, asteroid):
    draw_vector_shape(surface, asteroid.position, asteroid.silhouette, COLORS["asteroid"])


def draw_bullet(surface, bullet):
    pos = (int(bullet.position.x), int(bullet.position.y))
    pygame.draw.circle(surface, COLORS["bullet"], pos, max(1, int(bullet.radius)))


def draw_lives(surface, lives, start, spacing=20, size=10):
    points = [
        pygame.Vector2(size, 0),
        pygame.Vector2(-size / 2, -size / 2),
        pygame.Vector2(-size / 3, 0),
        pygame.Vector2(-size / 2, size / 2),
    ]
    for i in range(lives):
        pos = pygame.Vector2(start[0] + i * spacing, start[1])
        draw_vector_shape(surface, pos, points, COLORS["ui"], angle=-math.pi / 2, width=1)


def blit_centered(surface, text, center_y):
    surface.blit(text, (surface.get_width() / 2 - text.get_width() / 2, center_y - text.get_height() / 2))


def draw_hud(surface, game, font):
    hud = game.hud()
    surface.blit(font.render(f"Player 1  {hud['score']}", True, COLORS["ui"]), (20, 15))
    blit_centered(surface, font.render(f"High Score  {hud['high_score']}", True, COLORS["ui"]), 25)
    wave = font.render(f"Wave {hud['wave']}", True, COLORS["ui"])
    surface.blit(wave, (surface.get_width() - wave.get_width() - 20, 15))
    draw_lives(surface, hud["lives"], (80, 50))


def draw_game_over(surface, game, fonts):
    middle = surface.get_height() / 2
    blit_centered(surface, fonts["title"].render("GAME OVER", True, COLORS["warning"]), middle - 50)
    blit_centered(surface, fonts["text"].render(f"Final Score  {game.final_score}", True, COLORS["ui"]), middle)
    blit_centered(surface, fonts["text"].render("Press Any Key to Play Again", True, COLORS["ui"]), middle + 50)


def draw_paused(surface, fonts):
    blit_centered(surface, fonts["title"].render("PAUSED", True, COLORS["ui"]), surface.get_height() / 2)


def load_fonts():
    return {
        "hud": pygame.font.SysFont("Consolas", 20),
        "title": pygame.font.SysFont("Consolas", 48),
        "text": pygame.font.SysFont("Consolas", 24),
    }


def render_game(surface, game, fonts, ticks):
    surface.fill(COLORS["bg"])
    draw_ship(surface, game.ship, ticks)
    for bullet in game.bullets:
        draw_bullet(surface, bullet)
    for asteroid in game.asteroids:
        draw_asteroid(surface, asteroid)
    draw_hud(surface, game, fonts["hud"])
    if game.game_over_visible:
        draw_game_over(surface, game, fonts)
    elif game.paused:
        draw_paused(surface, fonts)
