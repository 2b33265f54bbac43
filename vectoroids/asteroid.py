import logging
import math
import random

import pygame

from . import kinematics
from .settings import (
    ASTEROID_CHILDREN,
    ASTEROID_JITTER,
    ASTEROID_RADII,
    ASTEROID_SCORES,
    ASTEROID_SPEED_RANGE,
    ASTEROID_VERTICES,
    SPLIT_SPEED_FACTOR,
    SPLIT_SPREAD,
)


LOGGER = logging.getLogger(__name__)


def make_silhouette(rng, radius, count=ASTEROID_VERTICES, jitter=ASTEROID_JITTER):
    points = []
    for i in range(count):
        angle = (math.tau / count) * i
        r = radius * (1 + rng.uniform(-jitter, jitter))
        points.append(pygame.Vector2(math.cos(angle) * r, math.sin(angle) * r))
    return tuple(points)


def random_velocity(rng):
    speed = rng.uniform(*ASTEROID_SPEED_RANGE)
    return kinematics.angle_to_vector(rng.uniform(0, math.tau)) * speed


class Asteroid:
    def __init__(self, position, tier, velocity=None, rng=None):
        if tier not in ASTEROID_RADII:
            raise ValueError(f"unknown asteroid tier {tier!r}")
        rng = rng or random.Random()
        self.tier = tier
        self.radius = ASTEROID_RADII[tier]
        self.position = pygame.Vector2(position)
        if velocity is None:
            velocity = random_velocity(rng)
        self.velocity = pygame.Vector2(velocity)
        self.silhouette = make_silhouette(rng, self.radius)

    @classmethod
    def launch(cls, position, tier, speed, angle, rng=None):
        return cls(position, tier, kinematics.angle_to_vector(angle) * speed, rng)

    @property
    def score(self):
        return ASTEROID_SCORES[self.tier]

    def update(self, dt, width, height):
        kinematics.advance(self, dt, width, height)

    def split(self, rng=None):
        child_tier = ASTEROID_CHILDREN[self.tier]
        if child_tier is None:
            return []
        rng = rng or random.Random()
        speed = self.velocity.length() * SPLIT_SPEED_FACTOR
        heading = kinematics.vector_angle(self.velocity)
        children = [
            Asteroid.launch(self.position, child_tier, speed, heading + rng.uniform(-SPLIT_SPREAD, SPLIT_SPREAD), rng)
            for _ in range(2)
        ]
        LOGGER.debug("%s asteroid split into 2 %s at %.0f px/s", self.tier, child_tier, speed)
        return children

    def __repr__(self):
        return f"Asteroid({self.tier}, pos=({self.position.x:.0f}, {self.position.y:.0f}))"
