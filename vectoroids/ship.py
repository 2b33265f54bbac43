import logging
import math
import random
from dataclasses import dataclass

import pygame

from . import kinematics
from .bullet import Bullet
from .controls import Controls
from .settings import (
    BULLET_SPEED,
    DISINTEGRATION_TIME,
    FRAGMENT_DAMPING,
    FRAGMENT_MAX_SPEED,
    FRAGMENT_MAX_SPIN,
    FRICTION,
    INVULNERABILITY_TIME,
    MAX_SPEED,
    RESPAWN_DELAY,
    ROTATION_SPEED,
    SHIP_RADIUS,
    SHOOT_DELAY,
    THRUST_POWER,
)


LOGGER = logging.getLogger(__name__)

FLYING = "flying"
DISINTEGRATING = "disintegrating"
HIDDEN = "hidden"


@dataclass
class Fragment:
    points: list
    velocity: pygame.Vector2
    angular_velocity: float

    def update(self, dt):
        step = self.velocity * dt
        spin = math.degrees(self.angular_velocity * dt)
        self.points = [(p + step).rotate(spin) for p in self.points]
        self.velocity *= FRAGMENT_DAMPING
        self.angular_velocity *= FRAGMENT_DAMPING


class Ship:
    def __init__(self, x, y, width, height, rng=None, radius=SHIP_RADIUS):
        if radius <= 0:
            raise ValueError(f"ship radius must be positive, got {radius}")
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.radius = radius
        self.position = pygame.Vector2(x, y)
        self.velocity = pygame.Vector2(0, 0)
        self.angle = 0.0
        self.rotation_rate = 0.0
        self.thrust_active = False
        self.invulnerable = False
        self.invulnerability_remaining = 0.0
        self.shoot_cooldown_remaining = 0.0
        self.visible = True
        self.disintegrating = False
        self.disintegration_elapsed = 0.0
        self.respawn_remaining = 0.0
        self.respawn_enabled = True
        self.fragments = []

    @property
    def state(self):
        if self.disintegrating:
            return DISINTEGRATING
        if not self.visible:
            return HIDDEN
        return FLYING

    @property
    def flying(self):
        return self.state == FLYING

    @property
    def can_collide(self):
        return self.flying and not self.invulnerable

    @property
    def heading(self):
        return kinematics.angle_to_vector(self.angle)

    def outline(self):
        r = self.radius
        return [
            pygame.Vector2(r, 0),
            pygame.Vector2(-r / 2, -r / 2),
            pygame.Vector2(-r * 0.3, 0),
            pygame.Vector2(-r / 2, r / 2),
        ]

    def thruster_outline(self):
        r = self.radius
        return [
            pygame.Vector2(-r * 0.3, -r * 0.2),
            pygame.Vector2(-r * 0.8, 0),
            pygame.Vector2(-r * 0.3, r * 0.2),
        ]

    def update(self, dt, controls=None, width=None, height=None):
        controls = controls or Controls()
        if width is not None and height is not None:
            self.width, self.height = width, height

        self._update_disintegration(dt)
        if self.flying:
            self._handle_rotation(dt, controls)
            self._handle_thrust(dt, controls)
            kinematics.advance(self, dt, self.width, self.height)
        self._update_timers(dt)

    def _handle_rotation(self, dt, controls):
        if controls.left:
            self.rotation_rate = -ROTATION_SPEED
        elif controls.right:
            self.rotation_rate = ROTATION_SPEED
        else:
            self.rotation_rate = 0.0
        self.angle += self.rotation_rate * dt

    def _handle_thrust(self, dt, controls):
        self.thrust_active = controls.up
        if self.thrust_active:
            self.velocity += self.heading * THRUST_POWER * dt
        self.velocity *= FRICTION
        if self.velocity.length() > MAX_SPEED:
            self.velocity.scale_to_length(MAX_SPEED)

    def _update_timers(self, dt):
        self.shoot_cooldown_remaining = max(0.0, self.shoot_cooldown_remaining - dt)
        if self.invulnerable:
            self.invulnerability_remaining -= dt
            if self.invulnerability_remaining <= 0:
                self.invulnerable = False
                self.invulnerability_remaining = 0.0

    def _grant_invulnerability(self):
        self.invulnerable = True
        self.invulnerability_remaining = INVULNERABILITY_TIME

    def shoot(self):
        if self.shoot_cooldown_remaining > 0 or not self.flying:
            return None
        heading = self.heading
        self.shoot_cooldown_remaining = SHOOT_DELAY
        return Bullet(self.position + heading * self.radius, heading * BULLET_SPEED)

    def reset(self, x=None, y=None):
        self.position = pygame.Vector2(
            self.width / 2 if x is None else x,
            self.height / 2 if y is None else y,
        )
        self.velocity = pygame.Vector2(0, 0)
        self.angle = 0.0
        self.rotation_rate = 0.0
        self.thrust_active = False
        self.disintegrating = False
        self.disintegration_elapsed = 0.0
        self.respawn_remaining = 0.0
        self.fragments = []
        self.visible = True
        self._grant_invulnerability()

    def start_disintegration(self, respawn=True):
        self.disintegrating = True
        self.disintegration_elapsed = 0.0
        self.respawn_remaining = 0.0
        self.respawn_enabled = respawn
        self.thrust_active = False
        self.rotation_rate = 0.0
        self.velocity = pygame.Vector2(0, 0)
        self._grant_invulnerability()
        self.fragments = self._break_outline()
        LOGGER.debug("ship disintegrating at (%.0f, %.0f)", self.position.x, self.position.y)

    def _break_outline(self):
        degrees = math.degrees(self.angle)
        nose, top, indent, bottom = [p.rotate(degrees) for p in self.outline()]
        fragments = []
        for points in ([nose, top], [top, indent, bottom], [bottom, nose]):
            middle = sum(points, pygame.Vector2()) / len(points)
            if middle.length_squared() > 0:
                direction = middle.normalize()
            else:
                direction = kinematics.angle_to_vector(self.rng.uniform(0, math.tau))
            speed = self.rng.uniform(FRAGMENT_MAX_SPEED / 3, FRAGMENT_MAX_SPEED)
            fragments.append(
                Fragment(
                    points=[pygame.Vector2(p) for p in points],
                    velocity=direction * speed,
                    angular_velocity=self.rng.uniform(-FRAGMENT_MAX_SPIN, FRAGMENT_MAX_SPIN),
                )
            )
        return fragments

    def _update_disintegration(self, dt):
        if self.disintegrating:
            self.disintegration_elapsed += dt
            for fragment in self.fragments:
                fragment.update(dt)
            if self.disintegration_elapsed >= DISINTEGRATION_TIME:
                self.disintegrating = False
                self.fragments = []
                self.visible = False
                self._grant_invulnerability()
                if self.respawn_enabled:
                    self.respawn_remaining = RESPAWN_DELAY
        elif self.respawn_remaining > 0:
            self.respawn_remaining -= dt
            if self.respawn_remaining <= 0:
                self.reset()
                LOGGER.info("ship respawned")

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.position.x = min(self.position.x, width)
        self.position.y = min(self.position.y, height)
