import logging

import pygame

from . import kinematics
from .settings import BULLET_MAX_DISTANCE, BULLET_RADIUS


LOGGER = logging.getLogger(__name__)


class Bullet:
    def __init__(self, position, velocity, radius=BULLET_RADIUS):
        if radius <= 0:
            raise ValueError(f"bullet radius must be positive, got {radius}")
        self.position = pygame.Vector2(position)
        self.velocity = pygame.Vector2(velocity)
        self.radius = radius
        self.distance_traveled = 0.0
        self.dead = False

    @staticmethod
    def max_distance(width, height):
        return min(width, height) * BULLET_MAX_DISTANCE

    def update(self, dt, width, height):
        if self.dead:
            return
        moved = kinematics.advance(self, dt, width, height)
        self.distance_traveled += moved.length()
        if self.distance_traveled >= self.max_distance(width, height):
            self.kill()

    def kill(self):
        if not self.dead:
            self.dead = True
            LOGGER.debug("bullet removed after %.1fpx", self.distance_traveled)
